import random

import pytest

from readiness_bot.ai_assistant.orchestrator import AgentOrchestrator
from readiness_bot.service.health_analysis.common.data_models import TrainingIntensity, UserProfile
from readiness_bot.service.health_analysis.common.errors import NoMetricsError
from readiness_bot.service.metrics_repository import MetricsRepository
from readiness_bot.service.recommendation_service import RecommendationService
from tests import TEST_USER_ID, make_day, make_week


@pytest.fixture
def repository():
    repository = MetricsRepository(":memory:")
    yield repository
    repository.close()


@pytest.fixture
def service(repository):
    return RecommendationService(repository, AgentOrchestrator.with_default_agents(rng=random.Random(0)))


class TestRecommendationService:
    def test_no_metrics(self, service):
        with pytest.raises(NoMetricsError):
            service.readiness(TEST_USER_ID)

    def test_context_uses_stored_history(self, service, repository):
        repository.add_many(TEST_USER_ID, make_week(20))
        repository.save_profile(TEST_USER_ID, UserProfile(name="Alex"))

        context = service.build_context(TEST_USER_ID)

        assert context.profile.name == "Alex"
        assert len(context.all_metrics) == 20
        assert len(context.last_7_days) == 7
        assert context.today == context.all_metrics[-1]

    def test_engine_results(self, service, repository):
        history = [make_day(offset) for offset in range(13, 2, -1)]
        history += [make_day(offset, hrv=40.0) for offset in (2, 1, 0)]
        repository.add_many(TEST_USER_ID, history)

        assert service.readiness(TEST_USER_ID).score == 75
        assert [a.metric for a in service.anomalies(TEST_USER_ID)] == ["Heart Rate Variability"]
        assert service.burnout_risk(TEST_USER_ID).risk_score == 30
        assert service.daily_plan(TEST_USER_ID).training_intensity == TrainingIntensity.MODERATE
        assert service.what_if(TEST_USER_ID, "Full Rest Day").readiness_delta == 10
        assert service.sleep_options(TEST_USER_ID, 23.0, 7.0)[0].recommendation.value == "ideal"

    @pytest.mark.asyncio
    async def test_recommendations(self, service, repository):
        repository.add_many(TEST_USER_ID, make_week())

        recommendations = await service.recommendations(TEST_USER_ID)

        assert [r.agent for r in recommendations] == ["FitnessCoachAgent", "PlannerAgent"]
