"""
Recommendation generation for the active draft strategy.

Builds need-fill, value-hunt and position-pivot recommendations from the
(already adjusted) active strategy and ranks them by urgency x confidence.
"""

import logging
from typing import List

from .. import config
from .models import DraftContext, Player
from .strategy import (
    DraftStrategy,
    StrategyRecommendation,
    NEED_FILL,
    VALUE_HUNT,
    POSITION_PIVOT,
)

logger = logging.getLogger(__name__)


def players_at_position(players: List[Player], position: str, limit: int) -> List[Player]:
    """First `limit` players at a position, keeping the caller's order."""
    return [p for p in players if p.position == position][:limit]


def calculate_need_level(rostered: int, position_max: int) -> float:
    """
    Share of a position's roster capacity still open.

    Args:
        rostered: Players already rostered at the position
        position_max: Roster capacity for the position

    Returns:
        Need level (0-1, higher is more need)
    """
    if position_max <= 0:
        return 0.0
    return max(0, position_max - rostered) / position_max


def generate_need_recommendations(
    context: DraftContext,
    strategy: DraftStrategy
) -> List[StrategyRecommendation]:
    """
    Recommend filling high-priority positions the roster is short on.

    Args:
        context: Current draft context
        strategy: Active strategy

    Returns:
        One need_fill recommendation per qualifying position
    """
    recommendations = []

    for position, priority in strategy.position_priorities.items():
        current_count = context.user_team.position_count(position)
        max_needed = context.league.position_max(position)
        need_level = calculate_need_level(current_count, max_needed)

        if need_level <= config.NEED_FILL_MIN_NEED or priority <= config.NEED_FILL_MIN_PRIORITY:
            continue

        options = players_at_position(
            context.available_players, position, config.NEED_FILL_SUGGESTIONS
        )
        if not options:
            continue

        recommendations.append(StrategyRecommendation(
            recommendation_type=NEED_FILL,
            title=f"Address {position} Need",
            description=f"Critical {position} shortage - only {current_count}/{max_needed} rostered",
            confidence=min(95, 60 + need_level * 30),
            urgency=min(100, need_level * 80 + priority * 10),
            reasoning=[
                f"Current {position} count: {current_count}/{max_needed}",
                f"Position priority: {priority * 100:.0f}%",
                f"{len(options)} quality options available",
            ],
            suggested_players=options,
            risk_level=config.RISK_LEVEL_BY_TOLERANCE[strategy.risk_tolerance],
            potential_impact=need_level * 25,
        ))

    return recommendations


def generate_value_recommendations(context: DraftContext) -> List[StrategyRecommendation]:
    """
    Recommend players falling well past their ADP.

    Returns:
        A single value_hunt recommendation, or nothing if no player qualifies
    """
    value_opportunities = [
        p for p in context.available_players
        if p.effective_adp - context.current_pick > config.VALUE_HUNT_MIN_ADP_DIFF
    ][:config.VALUE_HUNT_SUGGESTIONS]

    if not value_opportunities:
        return []

    return [StrategyRecommendation(
        recommendation_type=VALUE_HUNT,
        title='Value Opportunities Available',
        description=f"{len(value_opportunities)} players falling below ADP",
        confidence=80,
        urgency=70,
        reasoning=[
            'Market creating value opportunities',
            'Players falling significantly below ADP',
            'Consider reaching for falling talent',
        ],
        suggested_players=value_opportunities,
        risk_level=30,
        potential_impact=20,
    )]


def generate_timing_recommendations(
    context: DraftContext,
    strategy: DraftStrategy
) -> List[StrategyRecommendation]:
    """
    Recommend joining active runs at positions the strategy still values.

    Args:
        context: Current draft context (draft_flow must already be computed)
        strategy: Active strategy

    Returns:
        One position_pivot recommendation per qualifying run
    """
    recommendations = []

    for position, run_length in context.draft_flow.position_runs.items():
        if run_length < config.PIVOT_MIN_RUN:
            continue

        priority = strategy.priority_for(position)
        options = players_at_position(
            context.available_players, position, config.PIVOT_SUGGESTIONS
        )

        if priority <= config.PIVOT_MIN_PRIORITY or not options:
            continue

        recommendations.append(StrategyRecommendation(
            recommendation_type=POSITION_PIVOT,
            title=f"{position} Run Detected",
            description=f"Consider joining {position} run before value disappears",
            confidence=75,
            urgency=85,
            reasoning=[
                f"{run_length} consecutive {position} picks",
                'Position scarcity increasing rapidly',
                'Jump on run before tier drop',
            ],
            suggested_players=options,
            risk_level=50,
            potential_impact=18,
        ))

    return recommendations


def generate_recommendations(
    context: DraftContext,
    strategy: DraftStrategy
) -> List[StrategyRecommendation]:
    """
    Build and rank all recommendations for the active strategy.

    Args:
        context: Current draft context
        strategy: Active strategy, after this evaluation's adjustments

    Returns:
        Recommendations sorted by urgency x confidence descending
    """
    recommendations = []
    recommendations.extend(generate_need_recommendations(context, strategy))
    recommendations.extend(generate_value_recommendations(context))
    recommendations.extend(generate_timing_recommendations(context, strategy))

    recommendations.sort(key=lambda r: r.score, reverse=True)

    logger.debug(
        f"Generated {len(recommendations)} recommendations for {strategy.strategy_id}"
    )

    return recommendations


def get_top_recommendations(
    recommendations: List[StrategyRecommendation],
    count: int = config.TOP_RECOMMENDATIONS
) -> List[StrategyRecommendation]:
    """Best `count` recommendations by confidence x urgency."""
    return sorted(recommendations, key=lambda r: r.score, reverse=True)[:count]
