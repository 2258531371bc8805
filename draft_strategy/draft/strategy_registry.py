"""
Registry of draft strategies for one draft room.

The registry owns the strategy templates, tracks which one is active and keeps
an append-only log of every adjustment applied. Use one registry per draft room.
"""

import logging
from typing import Dict, List, Optional

from .strategy import (
    DraftStrategy,
    StrategyAdjustment,
    StrategyTrigger,
    PickGuideline,
    TierCountBelow,
    RunLengthAtLeast,
    TopAdpValueAbove,
    CONSERVATIVE,
    MODERATE,
    AGGRESSIVE,
)

logger = logging.getLogger(__name__)


def create_base_strategies() -> List[DraftStrategy]:
    """
    Create the built-in strategy templates.

    Returns:
        balanced-value (active), zero-rb and robust-rb
    """
    return [
        DraftStrategy(
            strategy_id='balanced-value',
            name='Balanced Value',
            description='Target best available value with positional balance',
            active=True,
            confidence=0.8,
            position_priorities={'RB': 1.2, 'WR': 1.1, 'QB': 0.8, 'TE': 0.9, 'K': 0.3, 'DST': 0.3},
            risk_tolerance=MODERATE,
            triggers=[
                StrategyTrigger(
                    trigger_id='rb-scarcity',
                    condition=TierCountBelow(position='RB', max_tier=1),
                    threshold=3,
                    action='increase_rb_priority',
                    priority=8,
                ),
            ],
            pick_guidelines=[
                PickGuideline(
                    condition='round <= 3',
                    recommendation='Focus on RB/WR with high floor',
                    weight=0.9,
                    round_relevance=[1, 2, 3],
                ),
            ],
        ),
        DraftStrategy(
            strategy_id='zero-rb',
            name='Zero RB',
            description='Fade early RBs, focus on WR depth and QB',
            confidence=0.6,
            position_priorities={'RB': 0.4, 'WR': 1.5, 'QB': 1.3, 'TE': 1.0, 'K': 0.3, 'DST': 0.3},
            risk_tolerance=AGGRESSIVE,
            triggers=[
                StrategyTrigger(
                    trigger_id='wr-run',
                    condition=RunLengthAtLeast(position='WR'),
                    threshold=4,
                    action='pivot_to_rb',
                    priority=7,
                ),
            ],
            pick_guidelines=[
                PickGuideline(
                    condition='round <= 5',
                    recommendation='Target elite WRs and QB',
                    weight=0.8,
                    round_relevance=[1, 2, 3, 4, 5],
                ),
            ],
        ),
        DraftStrategy(
            strategy_id='robust-rb',
            name='Robust RB',
            description='Build RB depth early, handcuff strategy',
            confidence=0.7,
            position_priorities={'RB': 1.6, 'WR': 0.8, 'QB': 0.7, 'TE': 0.8, 'K': 0.3, 'DST': 0.3},
            risk_tolerance=CONSERVATIVE,
            triggers=[
                StrategyTrigger(
                    trigger_id='rb-value',
                    condition=TopAdpValueAbove(position='RB', top_n=3),
                    threshold=10,
                    action='increase_rb_priority',
                    priority=9,
                ),
            ],
            pick_guidelines=[
                PickGuideline(
                    condition='round <= 6',
                    recommendation='Prioritize RB depth and handcuffs',
                    weight=0.85,
                    round_relevance=[1, 2, 3, 4, 5, 6],
                ),
            ],
        ),
    ]


class StrategyRegistry:
    """Named strategies for one draft room, with exactly one active."""

    def __init__(self, strategies: Optional[List[DraftStrategy]] = None):
        """
        Initialize the registry.

        Args:
            strategies: Strategy templates (default: create_base_strategies()).
                        The first strategy flagged active wins; if none is
                        flagged, the first strategy becomes active.
        """
        self.strategies: Dict[str, DraftStrategy] = {}
        self.active_id: Optional[str] = None
        self.history: List[StrategyAdjustment] = []

        for strategy in (strategies if strategies is not None else create_base_strategies()):
            self.register(strategy)

        if self.active_id is None and self.strategies:
            self.switch(next(iter(self.strategies)))

    def register(self, strategy: DraftStrategy) -> None:
        """
        Add or replace a strategy.

        A strategy registered as active becomes the active one only if no
        strategy is active yet; otherwise its flag is cleared. Replacing the
        active strategy keeps it active.
        """
        self.strategies[strategy.strategy_id] = strategy

        if strategy.strategy_id == self.active_id:
            strategy.active = True
        elif strategy.active:
            if self.active_id is None:
                self.active_id = strategy.strategy_id
            else:
                strategy.active = False

    def get(self, strategy_id: str) -> Optional[DraftStrategy]:
        """Strategy by id, or None if unknown."""
        return self.strategies.get(strategy_id)

    def get_active(self) -> Optional[DraftStrategy]:
        if self.active_id is None:
            return None
        return self.strategies.get(self.active_id)

    def switch(self, strategy_id: str) -> bool:
        """
        Make a strategy the only active one.

        Args:
            strategy_id: Strategy to activate

        Returns:
            False (with the registry untouched) if the id is unknown
        """
        strategy = self.strategies.get(strategy_id)
        if strategy is None:
            logger.warning(f"Unknown strategy: {strategy_id}")
            return False

        for s in self.strategies.values():
            s.active = False

        strategy.active = True
        self.active_id = strategy_id

        logger.info(f"Active strategy: {strategy.name} ({strategy_id})")
        return True

    def all(self) -> List[DraftStrategy]:
        """Strategies in registration order."""
        return list(self.strategies.values())

    def record(self, adjustments: List[StrategyAdjustment]) -> None:
        """Append applied adjustments to the history log."""
        self.history.extend(adjustments)

    def get_history(self) -> List[StrategyAdjustment]:
        """Copy of the adjustment history, oldest first."""
        return list(self.history)
