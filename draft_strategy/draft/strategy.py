"""
Draft strategy data structures.

A DraftStrategy is a long-lived template (position priorities, risk tolerance,
triggers) that is adjusted in place as the draft unfolds. Adjustments are small
additive deltas produced by triggers and contextual rules.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .. import config
from .models import Player, DraftContext

# Risk tolerances, most cautious first
CONSERVATIVE = 'conservative'
MODERATE = 'moderate'
AGGRESSIVE = 'aggressive'

# Recommendation types
POSITION_PIVOT = 'position_pivot'
VALUE_HUNT = 'value_hunt'
SAFE_PICK = 'safe_pick'
CONTRARIAN = 'contrarian'
NEED_FILL = 'need_fill'


def risk_tolerance_to_value(risk_tolerance: str) -> float:
    """Numeric level for a risk tolerance bucket."""
    return config.RISK_TOLERANCE_VALUES[risk_tolerance]


def value_to_risk_tolerance(value: float) -> str:
    """
    Map a numeric risk level to its bucket.

    Values are clamped to [0, 1] first, so every number resolves to exactly
    one of conservative (< 0.4), moderate (< 0.7) or aggressive.
    """
    value = max(0.0, min(1.0, value))
    if value < config.RISK_CONSERVATIVE_CUTOFF:
        return CONSERVATIVE
    if value < config.RISK_MODERATE_CUTOFF:
        return MODERATE
    return AGGRESSIVE


def shift_risk_tolerance(risk_tolerance: str, shift: float) -> str:
    """Apply a signed shift to a risk tolerance bucket."""
    return value_to_risk_tolerance(risk_tolerance_to_value(risk_tolerance) + shift)


# ===== Trigger conditions =====

@dataclass(frozen=True)
class TierCountBelow:
    """Fewer than `threshold` players at `position` with tier <= max_tier remain."""
    position: str
    max_tier: int = 1

    def describe(self, threshold: float) -> str:
        return f"available {self.position} tier<={self.max_tier} count < {threshold:g}"


@dataclass(frozen=True)
class RunLengthAtLeast:
    """The current run at `position` is at least `threshold` picks long."""
    position: str

    def describe(self, threshold: float) -> str:
        return f"{self.position} consecutive picks >= {threshold:g}"


@dataclass(frozen=True)
class TopAdpValueAbove:
    """The top `top_n` available at `position` average more than `threshold` picks of ADP value."""
    position: str
    top_n: int = 3

    def describe(self, threshold: float) -> str:
        return f"top-{self.top_n} {self.position} average ADP value > {threshold:g}"


@dataclass
class StrategyTrigger:
    """Condition/threshold/action rule attached to a strategy."""

    trigger_id: str
    condition: object              # TierCountBelow, RunLengthAtLeast or TopAdpValueAbove
    threshold: float
    action: str                    # Key of config.TRIGGER_ACTION_DELTAS
    priority: int = 0              # Higher is evaluated first
    times_since_triggered: int = 0  # Diagnostic only

    def describe(self) -> str:
        return self.condition.describe(self.threshold)


@dataclass
class PickGuideline:
    """Round-scoped textual guidance."""

    condition: str
    recommendation: str
    weight: float
    round_relevance: List[int] = field(default_factory=list)

    def applies_to(self, current_round: int) -> bool:
        return current_round in self.round_relevance


@dataclass
class StrategyAdjustment:
    """Additive delta to a strategy's live state."""

    position_priority_changes: Dict[str, float] = field(default_factory=dict)
    risk_tolerance_shift: float = 0.0
    target_additions: List[Player] = field(default_factory=list)
    avoid_additions: List[Player] = field(default_factory=list)
    reasoning: List[str] = field(default_factory=list)
    source: str = ''  # Trigger or rule that produced it

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'source': self.source,
            'position_priority_changes': dict(self.position_priority_changes),
            'risk_tolerance_shift': self.risk_tolerance_shift,
            'target_additions': [p.player_id for p in self.target_additions],
            'avoid_additions': [p.player_id for p in self.avoid_additions],
            'reasoning': list(self.reasoning),
        }


@dataclass
class ContextualRule:
    """Strategy-specific rule: when `condition(context)` holds, apply `adjustment`."""

    scenario: str
    condition: Callable[[DraftContext], bool]
    adjustment: StrategyAdjustment
    priority: int = 0


@dataclass
class DraftStrategy:
    """Named drafting strategy, adjusted in place during the draft."""

    strategy_id: str
    name: str
    description: str
    active: bool = False
    confidence: float = 0.5
    position_priorities: Dict[str, float] = field(default_factory=dict)
    risk_tolerance: str = MODERATE
    triggers: List[StrategyTrigger] = field(default_factory=list)
    pick_guidelines: List[PickGuideline] = field(default_factory=list)
    target_players: List[Player] = field(default_factory=list)
    avoid_players: List[Player] = field(default_factory=list)
    contextual_rules: List[ContextualRule] = field(default_factory=list)

    def priority_for(self, position: str) -> float:
        return self.position_priorities.get(position, config.DEFAULT_PRIORITY)

    def apply_adjustment(self, adjustment: StrategyAdjustment) -> None:
        """
        Fold an adjustment into this strategy.

        Priorities saturate at zero, the risk tolerance is re-bucketed after
        the shift, and players already listed are not added twice. Zero deltas
        leave the strategy untouched.
        """
        for position, change in adjustment.position_priority_changes.items():
            if change == 0:
                continue
            self.position_priorities[position] = max(0.0, self.priority_for(position) + change)

        if adjustment.risk_tolerance_shift != 0:
            self.risk_tolerance = shift_risk_tolerance(
                self.risk_tolerance, adjustment.risk_tolerance_shift
            )

        _append_unique(self.target_players, adjustment.target_additions)
        _append_unique(self.avoid_players, adjustment.avoid_additions)

    def guidelines_for_round(self, current_round: int) -> List[PickGuideline]:
        """Pick guidelines relevant to a round, heaviest first."""
        relevant = [g for g in self.pick_guidelines if g.applies_to(current_round)]
        return sorted(relevant, key=lambda g: g.weight, reverse=True)


@dataclass
class StrategyRecommendation:
    """Actionable recommendation derived from the active strategy."""

    recommendation_type: str   # One of the recommendation types above
    title: str
    description: str
    confidence: float
    urgency: float
    reasoning: List[str] = field(default_factory=list)
    suggested_players: List[Player] = field(default_factory=list)
    risk_level: float = 0.0
    potential_impact: float = 0.0

    @property
    def score(self) -> float:
        """Ranking score (urgency x confidence)."""
        return self.urgency * self.confidence


def _append_unique(players: List[Player], additions: List[Player]) -> None:
    seen = {p.player_id for p in players}
    for player in additions:
        if player.player_id not in seen:
            players.append(player)
            seen.add(player.player_id)

