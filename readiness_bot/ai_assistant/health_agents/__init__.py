"""
Rule-based and LLM-backed recommendation agents.

All agents share the ``HealthAgent`` contract and are independent of each other; the
``AgentOrchestrator`` runs them against one context and merges their output.
"""
