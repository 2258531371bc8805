"""
Draft flow analysis: runs, ADP deviations, pace and market sentiment.
"""

import logging
from typing import Dict, List

from .. import config
from .models import DraftFlow, RecentPick, BULLISH, BEARISH, NEUTRAL

logger = logging.getLogger(__name__)


def calculate_position_runs(recent_picks: List[RecentPick]) -> Dict[str, int]:
    """
    Count consecutive picks by position over the last few picks.

    Args:
        recent_picks: Recent picks, newest last

    Returns:
        Dict of position -> consecutive picks ending at the newest pick
    """
    window = recent_picks[-config.FLOW_RUN_WINDOW:]
    position_runs = {}

    for position in config.SKILL_POSITIONS:
        count = 0
        for pick in reversed(window):
            if pick.player.position != position:
                break
            count += 1
        position_runs[position] = count

    return position_runs


def determine_market_sentiment(value_deviations: List[float]) -> str:
    """
    Read sentiment from the sum of the most recent ADP deviations.

    Positive deviations are reaches (bearish), negative ones are value
    picks (bullish).
    """
    recent_sum = sum(value_deviations[-config.FLOW_SENTIMENT_WINDOW:])

    if recent_sum > config.SENTIMENT_THRESHOLD:
        return BEARISH
    if recent_sum < -config.SENTIMENT_THRESHOLD:
        return BULLISH
    return NEUTRAL


def analyze_draft_flow(recent_picks: List[RecentPick]) -> DraftFlow:
    """
    Summarize recent draft behavior.

    Args:
        recent_picks: Recent picks, newest last

    Returns:
        DraftFlow with runs, deviations, pace, patterns and sentiment
    """
    position_runs = calculate_position_runs(recent_picks)

    deviation_window = recent_picks[-config.FLOW_DEVIATION_WINDOW:]
    value_deviations = [pick.effective_adp_difference for pick in deviation_window]

    if deviation_window:
        average_pick_time = (
            sum(pick.effective_time_taken for pick in deviation_window) / len(deviation_window)
        )
    else:
        average_pick_time = 0.0

    emergent_patterns = []
    if any(count >= config.FLOW_RUN_PATTERN_LENGTH for count in position_runs.values()):
        emergent_patterns.append('positional_run_detected')

    volatile = [dev for dev in value_deviations if abs(dev) > config.VOLATILITY_DEVIATION]
    if len(volatile) >= config.VOLATILITY_MIN_COUNT:
        emergent_patterns.append('high_volatility')

    if average_pick_time > config.SLOW_PACE_SECONDS:
        emergent_patterns.append('slow_draft_pace')

    flow = DraftFlow(
        position_runs=position_runs,
        value_deviations=value_deviations,
        average_pick_time=average_pick_time,
        emergent_patterns=emergent_patterns,
        market_sentiment=determine_market_sentiment(value_deviations),
    )

    if emergent_patterns:
        logger.debug(f"Draft flow patterns: {', '.join(emergent_patterns)} ({flow.market_sentiment})")

    return flow
