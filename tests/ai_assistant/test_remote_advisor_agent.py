from unittest.mock import AsyncMock, MagicMock

import pytest

from readiness_bot.ai_assistant.health_agents.remote_advisor_agent import (
    RemoteAdvisorAgent,
    RemoteAdvisorConfig,
    RemoteRecommendation,
    RemoteRecommendations,
    compute_trends,
)
from readiness_bot.service.health_analysis.common.data_models import Priority, RecommendationType
from tests import make_context, make_day, make_week

RUNNER_PATH = "readiness_bot.ai_assistant.health_agents.remote_advisor_agent.Runner.run"


@pytest.fixture
def advisor(mocker):
    advisor = RemoteAdvisorAgent(RemoteAdvisorConfig(enabled=True, max_recommendations=2))
    mocker.patch.object(advisor, "_get_agent", return_value=MagicMock())
    return advisor


def remote_output(*titles):
    return RemoteRecommendations(
        recommendations=[
            RemoteRecommendation(type=RecommendationType.TRAINING, title=title, rationale="From the model")
            for title in titles
        ]
    )


class TestRemoteAdvisorAgent:
    @pytest.mark.asyncio
    async def test_maps_and_caps_remote_recommendations(self, advisor, mocker):
        run = mocker.patch(RUNNER_PATH, new_callable=AsyncMock)
        run.return_value = MagicMock(final_output=remote_output("One", "Two", "Three"))

        recommendations = await advisor.analyze(make_context())

        assert [r.title for r in recommendations] == ["One", "Two"]
        assert all(r.agent == "RemoteAdvisorAgent" for r in recommendations)
        assert all(r.id.startswith("remote-advisor-") for r in recommendations)

    @pytest.mark.asyncio
    async def test_results_are_cached_per_day(self, advisor, mocker):
        run = mocker.patch(RUNNER_PATH, new_callable=AsyncMock)
        run.return_value = MagicMock(final_output=remote_output("Cached"))
        context = make_context()

        first = await advisor.analyze(context)
        second = await advisor.analyze(context)

        assert first == second
        run.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_expired_entry_is_fetched_again(self, advisor, mocker):
        run = mocker.patch(RUNNER_PATH, new_callable=AsyncMock)
        run.side_effect = [MagicMock(final_output=remote_output("Old")), MagicMock(final_output=remote_output("New"))]
        context = make_context()
        await advisor.analyze(context)
        key = (context.today.date, advisor.id)
        stored_at, cached = advisor._cache[key]
        advisor._cache[key] = (stored_at - advisor.config.cache_ttl_s - 1, cached)

        recommendations = await advisor.analyze(context)

        assert [r.title for r in recommendations] == ["New"]
        assert run.await_count == 2

    @pytest.mark.asyncio
    async def test_expired_entries_are_purged_on_write(self, advisor, mocker):
        run = mocker.patch(RUNNER_PATH, new_callable=AsyncMock)
        run.return_value = MagicMock(final_output=remote_output("Fresh"))
        yesterday, today = make_context(today=make_day(1)), make_context()
        await advisor.analyze(yesterday)
        old_key = (yesterday.today.date, advisor.id)
        stored_at, cached = advisor._cache[old_key]
        advisor._cache[old_key] = (stored_at - advisor.config.cache_ttl_s - 1, cached)

        await advisor.analyze(today)

        assert list(advisor._cache) == [(today.today.date, advisor.id)]

    @pytest.mark.asyncio
    async def test_failure_falls_back_to_hrv_alert(self, advisor, mocker):
        mocker.patch(RUNNER_PATH, new_callable=AsyncMock, side_effect=RuntimeError("rate limited"))
        context = make_context(last_7_days=make_week(hrv=50.0))

        recommendations = await advisor.analyze(context)

        assert len(recommendations) == 1
        assert recommendations[0].title == "HRV significantly below baseline"
        assert recommendations[0].type == RecommendationType.ALERT
        assert recommendations[0].priority == Priority.HIGH

    @pytest.mark.asyncio
    async def test_failure_fallback_is_never_empty(self, advisor, mocker):
        mocker.patch(RUNNER_PATH, new_callable=AsyncMock, side_effect=TimeoutError())

        recommendations = await advisor.analyze(make_context())

        assert [r.title for r in recommendations] == ["Recovery Markers Look Steady"]

    @pytest.mark.asyncio
    async def test_empty_model_answer_falls_back(self, advisor, mocker):
        run = mocker.patch(RUNNER_PATH, new_callable=AsyncMock)
        run.return_value = MagicMock(final_output=remote_output())

        assert len(await advisor.analyze(make_context())) == 1

    def test_payload(self, advisor):
        payload = advisor.prepare_payload(make_context())

        assert set(payload) == {"context", "focus", "model", "max_recommendations"}
        assert payload["model"] == "gpt-4.1"
        assert len(payload["context"]["last_7_days"]) == 7
        assert payload["context"]["today"]["date"] == "2025-05-14"


def test_compute_trends():
    context = make_context(last_7_days=make_week(hrv=66.0, sleep_hours=6.0, stress_score=40), today=make_day())

    trends = compute_trends(context)

    assert trends["hrv_trend"] == "improving"
    assert trends["sleep_trend"] == "declining"
    assert trends["stress_trend"] == "improving"
    assert trends["hrv_change"] == "10.0"
