"""
Pytest test module for the intervention simulation service.

Covers:
- project_metrics: current + delta and the projection clamps
- simulate_intervention end to end over the in-memory repository
- Empty segment is not an error
- Identifier validation happens before any repository call
- RepositoryUnavailableError propagates unchanged
"""

from typing import List
from unittest.mock import AsyncMock

import pytest

from account_health.core.exceptions import (
    RepositoryUnavailableError,
    UnknownInterventionError,
    UnknownSegmentTypeError,
    UnknownSegmentValueError,
)
from account_health.models import (
    Agent,
    EarlyWarningMetrics,
    FinancialHealthMetrics,
    ImpactDelta,
    RevenueImpactMetrics,
    SimulationMetrics,
)
from account_health.services.impact import IMPACT_FIELDS
from account_health.services.repository import AgentRepository, InMemoryAgentRepository
from account_health.services.simulation import (
    PROJECTION_CLAMPS,
    extract_simulation_metrics,
    project_metrics,
    simulate_intervention,
)
from account_health.services.metrics import calculate_metrics


# =============================================================================
# Projection and Clamps
# =============================================================================


class TestProjectMetrics:

    def test_projected_is_current_plus_impact(self) -> None:
        current = SimulationMetrics(
            financialHealth=FinancialHealthMetrics(averageRevenuePerAgent=1000, lifetimeValue=5000),
            revenueImpact=RevenueImpactMetrics(revenueGrowthRate=-3),
        )
        impact = ImpactDelta(
            financialHealth=FinancialHealthMetrics(averageRevenuePerAgent=-50, lifetimeValue=500),
            revenueImpact=RevenueImpactMetrics(revenueGrowthRate=-2),
        )
        projected = project_metrics(current, impact)
        assert projected.financialHealth.averageRevenuePerAgent == pytest.approx(950.0)
        assert projected.financialHealth.lifetimeValue == pytest.approx(5500.0)
        # Growth is unclamped and may go negative
        assert projected.revenueImpact.revenueGrowthRate == pytest.approx(-5.0)

    def test_non_negative_fields_floor_at_zero(self) -> None:
        current = SimulationMetrics(
            earlyWarning=EarlyWarningMetrics(
                churnPredictionScore=5,
                engagementDeclinePercentage=1,
                priceSensitivityScore=2,
                satisfactionTrendValue=1,
            ),
            revenueImpact=RevenueImpactMetrics(revenueAtRisk=100),
        )
        impact = ImpactDelta(
            earlyWarning=EarlyWarningMetrics(
                churnPredictionScore=-10,
                engagementDeclinePercentage=-3,
                priceSensitivityScore=-4,
                satisfactionTrendValue=-6,
            ),
            revenueImpact=RevenueImpactMetrics(revenueAtRisk=-150),
        )
        projected = project_metrics(current, impact)
        assert projected.earlyWarning.churnPredictionScore == 0.0
        assert projected.earlyWarning.engagementDeclinePercentage == 0.0
        assert projected.earlyWarning.priceSensitivityScore == 0.0
        assert projected.revenueImpact.revenueAtRisk == 0.0
        # satisfactionTrendValue is signed and unclamped
        assert projected.earlyWarning.satisfactionTrendValue == pytest.approx(-5.0)

    def test_retention_capped_at_100(self) -> None:
        current = SimulationMetrics(revenueImpact=RevenueImpactMetrics(revenueRetentionRate=98))
        impact = ImpactDelta(revenueImpact=RevenueImpactMetrics(revenueRetentionRate=6.86))
        projected = project_metrics(current, impact)
        assert projected.revenueImpact.revenueRetentionRate == 100.0

    def test_clamps_do_not_touch_impact(self) -> None:
        current = SimulationMetrics(revenueImpact=RevenueImpactMetrics(revenueAtRisk=100))
        impact = ImpactDelta(revenueImpact=RevenueImpactMetrics(revenueAtRisk=-150))
        project_metrics(current, impact)
        assert impact.revenueImpact.revenueAtRisk == -150.0

    def test_clamp_table(self) -> None:
        assert set(PROJECTION_CLAMPS) == {
            ("earlyWarning", "churnPredictionScore"),
            ("earlyWarning", "engagementDeclinePercentage"),
            ("earlyWarning", "priceSensitivityScore"),
            ("revenueImpact", "revenueAtRisk"),
            ("revenueImpact", "revenueRetentionRate"),
        }

    def test_extract_keeps_three_groups(self, sample_agents: List[Agent]) -> None:
        metrics = calculate_metrics(sample_agents)
        current = extract_simulation_metrics(metrics)
        assert current.financialHealth == metrics.financialHealth
        assert current.earlyWarning == metrics.earlyWarning
        assert current.revenueImpact == metrics.revenueImpact


# =============================================================================
# simulate_intervention
# =============================================================================


class TestSimulateIntervention:

    @pytest.mark.asyncio
    @pytest.mark.parity
    async def test_discount_offer_on_mid_spend(self, memory_repository: InMemoryAgentRepository) -> None:
        """agent-2 and agent-4; cross-term 1.2, no sensitivity rule."""
        result = await simulate_intervention(
            "discount-offer", "spendLevel", "lessThan10k", memory_repository
        )

        current = result.currentMetrics
        assert current.financialHealth.averageRevenuePerAgent == pytest.approx(3000.0)
        assert current.financialHealth.customerAcquisitionCost == pytest.approx(1100.0)
        assert current.earlyWarning.engagementDeclinePercentage == pytest.approx(5.0)
        assert current.revenueImpact.revenueAtRisk == pytest.approx(1500.0)

        impact = result.impact
        assert impact.financialHealth.averageRevenuePerAgent == pytest.approx(-180.0)
        assert impact.financialHealth.customerAcquisitionCost == 0.0
        assert impact.financialHealth.lifetimeValue == pytest.approx(1800.0)
        assert impact.earlyWarning.churnPredictionScore == pytest.approx(-9.9)
        assert impact.earlyWarning.engagementDeclinePercentage == pytest.approx(-2.28)
        assert impact.earlyWarning.satisfactionTrendValue == pytest.approx(3.6)
        assert impact.earlyWarning.priceSensitivityScore == pytest.approx(-12.18)
        assert impact.revenueImpact.revenueRetentionRate == pytest.approx(2.7)
        assert impact.revenueImpact.revenueAtRisk == pytest.approx(-720.0)
        assert impact.revenueImpact.revenueGrowthRate == pytest.approx(4.68)

        projected = result.projectedMetrics
        assert projected.financialHealth.averageRevenuePerAgent == pytest.approx(2820.0)
        assert projected.earlyWarning.churnPredictionScore == pytest.approx(15.1)
        assert projected.revenueImpact.revenueRetentionRate == pytest.approx(77.7)
        assert projected.revenueImpact.revenueAtRisk == pytest.approx(780.0)

        assert result.interventionDetails.type == "discount-offer"
        assert result.interventionDetails.costToImplement == 25000

    @pytest.mark.asyncio
    @pytest.mark.parity
    async def test_personalized_training_on_rookies(self, memory_repository: InMemoryAgentRepository) -> None:
        """agent-1 and agent-2; rookie sensitivity composed with cross-term 1.2."""
        result = await simulate_intervention(
            "personalized-training", "experienceLevel", "rookie", memory_repository
        )
        assert result.currentMetrics.financialHealth.averageRevenuePerAgent == pytest.approx(2000.0)
        assert result.currentMetrics.earlyWarning.engagementDeclinePercentage == pytest.approx(15.0)
        assert result.currentMetrics.earlyWarning.satisfactionTrendValue == pytest.approx(-1.0)

        impact = result.impact
        assert impact.financialHealth.averageRevenuePerAgent == pytest.approx(96.0)
        assert impact.earlyWarning.engagementDeclinePercentage == pytest.approx(-10.8)
        assert impact.earlyWarning.satisfactionTrendValue == pytest.approx(-2.88)
        assert impact.earlyWarning.churnPredictionScore == pytest.approx(-13.5)

        assert result.projectedMetrics.earlyWarning.engagementDeclinePercentage == pytest.approx(4.2)

    @pytest.mark.asyncio
    async def test_projection_invariant_holds(self, memory_repository: InMemoryAgentRepository) -> None:
        result = await simulate_intervention(
            "account-manager", "businessModel", "team", memory_repository
        )
        for group, fields in IMPACT_FIELDS.items():
            for field in fields:
                current = getattr(getattr(result.currentMetrics, group), field)
                delta = getattr(getattr(result.impact, group), field)
                projected = getattr(getattr(result.projectedMetrics, group), field)
                clamp = PROJECTION_CLAMPS.get((group, field))
                expected = clamp(current + delta) if clamp else current + delta
                assert projected == pytest.approx(expected)

    @pytest.mark.asyncio
    async def test_current_matches_segment_aggregate(self, memory_repository: InMemoryAgentRepository) -> None:
        result = await simulate_intervention(
            "bundled-service", "marketTypeCondition", "hot", memory_repository
        )
        agents = await memory_repository.fetch_by_segment("marketTypeCondition", "hot")
        assert result.currentMetrics == extract_simulation_metrics(calculate_metrics(agents))

    @pytest.mark.asyncio
    async def test_empty_segment_projects_zeros(self) -> None:
        repository = InMemoryAgentRepository([])
        result = await simulate_intervention(
            "usage-incentive", "marketTypeLocation", "rural", repository
        )
        for metrics in (result.currentMetrics, result.impact, result.projectedMetrics):
            for group in metrics.model_dump().values():
                assert all(value == 0 for value in group.values())
        assert result.interventionDetails.name == "Usage Incentive Program"

    @pytest.mark.asyncio
    async def test_reads_segment_not_population(self) -> None:
        repository = AsyncMock(spec=AgentRepository)
        repository.fetch_by_segment.return_value = []
        await simulate_intervention("targeted-content", "specialization", "luxury", repository)
        repository.fetch_by_segment.assert_awaited_once()
        segment_type, segment_value = repository.fetch_by_segment.await_args.args
        assert segment_type.value == "specialization"
        assert segment_value == "luxury"
        repository.fetch_all.assert_not_awaited()


# =============================================================================
# Failure Paths
# =============================================================================


class TestSimulationErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "intervention,segment_type,segment_value,error",
        [
            ("free-lunch", "spendLevel", "lessThan1k", UnknownInterventionError),
            ("discount-offer", "region", "west", UnknownSegmentTypeError),
            ("discount-offer", "spendLevel", "LessThan1k", UnknownSegmentValueError),
        ],
    )
    async def test_invalid_identifiers_fail_before_io(
        self,
        intervention: str,
        segment_type: str,
        segment_value: str,
        error: type
    ) -> None:
        repository = AsyncMock(spec=AgentRepository)
        with pytest.raises(error):
            await simulate_intervention(intervention, segment_type, segment_value, repository)
        repository.fetch_by_segment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_repository_failure_propagates(self) -> None:
        repository = AsyncMock(spec=AgentRepository)
        failure = RepositoryUnavailableError("Agent repository unavailable")
        repository.fetch_by_segment.side_effect = failure
        with pytest.raises(RepositoryUnavailableError) as exc_info:
            await simulate_intervention("discount-offer", "spendLevel", "lessThan1k", repository)
        assert exc_info.value is failure
