"""
Serializers for the engine's output contract.

Transforms AnalysisResult and its nested dataclasses into pydantic response
models that the UI layer (or any other consumer) can read as JSON.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .models import Player, MarketInefficiency, DraftFlow
from .strategy import DraftStrategy, StrategyAdjustment, StrategyRecommendation
from .strategy_engine import AnalysisResult


# ========== Nested Models ==========

class PlayerResponse(BaseModel):
    """Player summary nested in signals and recommendations."""
    player_id: str
    name: str
    position: str
    team: str = ''
    adp: Optional[float] = None
    tier: Optional[int] = None
    projection: Optional[float] = None
    bye_week: Optional[int] = None


class InefficiencyResponse(BaseModel):
    """Detected market inefficiency."""
    id: str
    type: str
    severity: str
    position: Optional[str] = None
    player: Optional[PlayerResponse] = None
    description: str
    value: float
    confidence: float = Field(ge=0, le=100, description="Heuristic confidence (0-100)")
    time_window: int = Field(ge=0, description="Picks before the signal goes stale")
    reasoning: List[str]
    action_required: str
    potential_impact: float


class AdjustmentResponse(BaseModel):
    """Strategy adjustment applied during the evaluation."""
    source: str
    position_priority_changes: Dict[str, float]
    risk_tolerance_shift: float
    target_additions: List[str] = Field(description="Player IDs added to targets")
    avoid_additions: List[str] = Field(description="Player IDs added to avoids")
    reasoning: List[str]


class RecommendationResponse(BaseModel):
    """Ranked recommendation."""
    type: str
    title: str
    description: str
    confidence: float
    urgency: float
    reasoning: List[str]
    suggested_players: List[PlayerResponse]
    risk_level: float
    potential_impact: float


class StrategyResponse(BaseModel):
    """Strategy snapshot after the evaluation."""
    id: str
    name: str
    active: bool
    confidence: float
    risk_tolerance: str
    position_priorities: Dict[str, float]
    target_players: List[str] = Field(description="Player IDs")
    avoid_players: List[str] = Field(description="Player IDs")


class DraftFlowResponse(BaseModel):
    """Recent draft behavior summary."""
    position_runs: Dict[str, int]
    value_deviations: List[float]
    average_pick_time: float
    emergent_patterns: List[str]
    market_sentiment: str


class AnalysisResponse(BaseModel):
    """Full result of one engine evaluation."""
    updated_at: str = Field(description="ISO-8601 timestamp")
    current_pick: int
    current_round: int
    active_strategy: Optional[str] = Field(None, description="Active strategy id")
    inefficiencies: List[InefficiencyResponse]
    draft_flow: DraftFlowResponse
    adjustments: List[AdjustmentResponse]
    recommendations: List[RecommendationResponse] = Field(description="Sorted by urgency x confidence")
    strategy_updates: List[StrategyResponse]


# ========== Serializer Functions ==========

def serialize_player(player: Player) -> PlayerResponse:
    return PlayerResponse(
        player_id=player.player_id,
        name=player.name,
        position=player.position,
        team=player.team,
        adp=player.adp,
        tier=player.tier,
        projection=player.projection,
        bye_week=player.bye_week,
    )


def serialize_inefficiency(inefficiency: MarketInefficiency) -> InefficiencyResponse:
    return InefficiencyResponse(
        id=inefficiency.inefficiency_id,
        type=inefficiency.inefficiency_type,
        severity=inefficiency.severity,
        position=inefficiency.position,
        player=serialize_player(inefficiency.player) if inefficiency.player else None,
        description=inefficiency.description,
        value=inefficiency.value,
        confidence=inefficiency.confidence,
        time_window=inefficiency.time_window,
        reasoning=inefficiency.reasoning,
        action_required=inefficiency.action_required,
        potential_impact=inefficiency.potential_impact,
    )


def serialize_adjustment(adjustment: StrategyAdjustment) -> AdjustmentResponse:
    return AdjustmentResponse(**adjustment.to_dict())


def serialize_recommendation(recommendation: StrategyRecommendation) -> RecommendationResponse:
    return RecommendationResponse(
        type=recommendation.recommendation_type,
        title=recommendation.title,
        description=recommendation.description,
        confidence=recommendation.confidence,
        urgency=recommendation.urgency,
        reasoning=recommendation.reasoning,
        suggested_players=[serialize_player(p) for p in recommendation.suggested_players],
        risk_level=recommendation.risk_level,
        potential_impact=recommendation.potential_impact,
    )


def serialize_strategy(strategy: DraftStrategy) -> StrategyResponse:
    return StrategyResponse(
        id=strategy.strategy_id,
        name=strategy.name,
        active=strategy.active,
        confidence=strategy.confidence,
        risk_tolerance=strategy.risk_tolerance,
        position_priorities=strategy.position_priorities,
        target_players=[p.player_id for p in strategy.target_players],
        avoid_players=[p.player_id for p in strategy.avoid_players],
    )


def serialize_draft_flow(flow: DraftFlow) -> DraftFlowResponse:
    return DraftFlowResponse(**flow.to_dict())


def serialize_analysis(
    result: AnalysisResult,
    current_pick: int,
    current_round: int,
    timestamp: Optional[datetime] = None
) -> AnalysisResponse:
    """
    Transform an AnalysisResult to the output contract.

    Args:
        result: Result of StrategyAdjustmentEngine.analyze_and_adjust
        current_pick: Pick the evaluation ran for
        current_round: Round the evaluation ran for
        timestamp: Evaluation time (default: now)

    Returns:
        AnalysisResponse ready for JSON output
    """
    active = result.active_strategy

    return AnalysisResponse(
        updated_at=(timestamp or datetime.now()).isoformat(),
        current_pick=current_pick,
        current_round=current_round,
        active_strategy=active.strategy_id if active else None,
        inefficiencies=[serialize_inefficiency(i) for i in result.inefficiencies],
        draft_flow=serialize_draft_flow(result.draft_flow),
        adjustments=[serialize_adjustment(a) for a in result.adjustments],
        recommendations=[serialize_recommendation(r) for r in result.recommendations],
        strategy_updates=[serialize_strategy(s) for s in result.strategy_updates],
    )
