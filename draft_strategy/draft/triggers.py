"""
Strategy trigger evaluation.

Trigger conditions are typed variants (see strategy.py). Each variant is
handled explicitly here; an unknown variant or action is a programming error
and raises instead of silently evaluating to False.
"""

import logging
from typing import List

from .. import config
from .models import DraftContext
from .strategy import (
    DraftStrategy,
    StrategyAdjustment,
    StrategyTrigger,
    TierCountBelow,
    RunLengthAtLeast,
    TopAdpValueAbove,
)

logger = logging.getLogger(__name__)


def evaluate_condition(trigger: StrategyTrigger, context: DraftContext) -> bool:
    """
    Evaluate a trigger's condition against the draft context.

    Args:
        trigger: Trigger whose condition and threshold to evaluate
        context: Current draft context (draft_flow must already be computed)

    Returns:
        True if the condition holds

    Raises:
        TypeError: If the condition is not a known variant
    """
    condition = trigger.condition

    if isinstance(condition, TierCountBelow):
        count = sum(
            1 for p in context.available_players
            if p.position == condition.position and p.effective_tier <= condition.max_tier
        )
        return count < trigger.threshold

    if isinstance(condition, RunLengthAtLeast):
        return context.draft_flow.position_runs.get(condition.position, 0) >= trigger.threshold

    if isinstance(condition, TopAdpValueAbove):
        top_players = [
            p for p in context.available_players if p.position == condition.position
        ][:condition.top_n]
        if not top_players:
            return False
        average_value = (
            sum(p.effective_adp - context.current_pick for p in top_players) / len(top_players)
        )
        return average_value > trigger.threshold

    raise TypeError(f"Unknown trigger condition: {condition!r}")


def create_trigger_adjustment(trigger: StrategyTrigger) -> StrategyAdjustment:
    """
    Build the adjustment for a fired trigger's action.

    Raises:
        ValueError: If the action has no configured deltas
    """
    if trigger.action not in config.TRIGGER_ACTION_DELTAS:
        raise ValueError(f"Unknown trigger action: {trigger.action}")

    return StrategyAdjustment(
        position_priority_changes=dict(config.TRIGGER_ACTION_DELTAS[trigger.action]),
        reasoning=[config.TRIGGER_ACTION_REASONS[trigger.action]],
        source=f"trigger:{trigger.trigger_id}",
    )


def check_strategy_triggers(
    strategies: List[DraftStrategy],
    context: DraftContext
) -> List[StrategyAdjustment]:
    """
    Evaluate every trigger on every strategy.

    Fired triggers reset their counter and contribute an adjustment; the
    others increment their counter.

    Args:
        strategies: Strategies in registry order
        context: Current draft context

    Returns:
        Adjustments from fired triggers, in evaluation order
    """
    adjustments = []

    for strategy in strategies:
        ordered = sorted(strategy.triggers, key=lambda t: t.priority, reverse=True)
        for trigger in ordered:
            if evaluate_condition(trigger, context):
                adjustments.append(create_trigger_adjustment(trigger))
                trigger.times_since_triggered = 0
                logger.debug(
                    f"Trigger {trigger.trigger_id} fired on {strategy.strategy_id} "
                    f"({trigger.describe()}) -> {trigger.action}"
                )
            else:
                trigger.times_since_triggered += 1

    return adjustments
