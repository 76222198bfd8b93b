from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from readiness_bot.ai_assistant.health_agents.remote_advisor_agent import RemoteAdvisorConfig


class BotSettings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__")

    telegram_bot_api_key: str
    my_telegram_user_id: int
    read_timeout_s: int = 30
    write_timeout_s: int = 30
    out_dir: Path = Path("./out")
    agent_timeout_s: Optional[float] = 60.0
    fitness_seed: Optional[int] = None  # Seed for the fitness coach's session pick; unseeded in production
    remote_advisor: RemoteAdvisorConfig = RemoteAdvisorConfig()
