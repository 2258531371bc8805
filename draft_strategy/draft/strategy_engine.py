"""
Real-time strategy adjustment for live drafts.

The StrategyAdjustmentEngine coordinates one evaluation per pick event:
- Detects market inefficiencies in the available pool
- Summarizes the recent draft flow
- Evaluates strategy triggers and contextual rules into adjustments
- Folds the adjustments into every registered strategy
- Derives ranked recommendations from the active strategy

One engine (and its registry) serves one draft room. Evaluations are
serialized by an internal lock; separate engines share no state.
"""

import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .. import config
from .models import DraftContext, DraftFlow, MarketInefficiency
from .models import UNDERVALUED, POSITIONAL_SCARCITY, TIER_BREAK, RUN_OPPORTUNITY
from .inefficiency_detector import MarketInefficiencyDetector
from .draft_flow import analyze_draft_flow
from .strategy import DraftStrategy, PickGuideline, StrategyAdjustment, StrategyRecommendation
from .strategy_registry import StrategyRegistry
from .triggers import check_strategy_triggers
from .recommendations import generate_recommendations, get_top_recommendations

logger = logging.getLogger(__name__)

ACTIONABLE_SEVERITIES = ('high', 'critical')


@dataclass
class AnalysisResult:
    """Output of one analyze_and_adjust call."""

    adjustments: List[StrategyAdjustment] = field(default_factory=list)
    recommendations: List[StrategyRecommendation] = field(default_factory=list)
    strategy_updates: List[DraftStrategy] = field(default_factory=list)  # Snapshots after the fold
    inefficiencies: List[MarketInefficiency] = field(default_factory=list)
    draft_flow: DraftFlow = field(default_factory=DraftFlow)

    @property
    def active_strategy(self) -> Optional[DraftStrategy]:
        return next((s for s in self.strategy_updates if s.active), None)


class StrategyAdjustmentEngine:
    """Adjusts draft strategies in real time from market signals and context."""

    def __init__(
        self,
        registry: Optional[StrategyRegistry] = None,
        detector: Optional[MarketInefficiencyDetector] = None
    ):
        """
        Initialize the engine for one draft room.

        Args:
            registry: Strategy registry (default: base strategies)
            detector: Inefficiency detector (default: a fresh detector)
        """
        self.registry = registry if registry is not None else StrategyRegistry()
        self.detector = detector if detector is not None else MarketInefficiencyDetector()

        self._lock = threading.Lock()

        # Last evaluation, for read-only queries between picks
        self.last_recommendations: List[StrategyRecommendation] = []
        self.last_inefficiencies: List[MarketInefficiency] = []
        self.last_draft_flow = DraftFlow()

    def analyze_and_adjust(self, context: DraftContext) -> AnalysisResult:
        """
        Run one full evaluation for the current pick.

        Fills context.market_inefficiencies and context.draft_flow, mutates
        the registry's strategies in place and appends the adjustments to
        the registry history.

        Args:
            context: Snapshot of the draft at the current pick

        Returns:
            AnalysisResult with adjustments, recommendations and strategy snapshots
        """
        with self._lock:
            context.market_inefficiencies = self.detector.detect_inefficiencies(
                context.available_players,
                context.current_pick,
                context.recent_picks,
                current_round=context.current_round,
            )

            context.draft_flow = analyze_draft_flow(context.recent_picks)

            strategies = self.registry.all()
            adjustments = check_strategy_triggers(strategies, context)
            adjustments.extend(self.generate_contextual_adjustments(context))

            rule_adjustments = self._collect_rule_adjustments(context)

            strategy_updates = self.apply_adjustments(adjustments, rule_adjustments)

            active = self.registry.get_active()
            recommendations = generate_recommendations(context, active) if active else []

            all_adjustments = adjustments + [
                adj for rule_adjs in rule_adjustments.values() for adj in rule_adjs
            ]

            self.last_recommendations = recommendations
            self.last_inefficiencies = context.market_inefficiencies
            self.last_draft_flow = context.draft_flow

            logger.info(
                f"Pick {context.current_pick} (round {context.current_round}): "
                f"{len(context.market_inefficiencies)} inefficiencies, "
                f"{len(all_adjustments)} adjustments, "
                f"{len(recommendations)} recommendations"
            )

            return AnalysisResult(
                adjustments=all_adjustments,
                recommendations=recommendations,
                strategy_updates=strategy_updates,
                inefficiencies=context.market_inefficiencies,
                draft_flow=context.draft_flow,
            )

    def generate_contextual_adjustments(self, context: DraftContext) -> List[StrategyAdjustment]:
        """
        Adjustments driven by market signals, the clock and the round.

        Args:
            context: Draft context with market_inefficiencies filled in

        Returns:
            Adjustments in signal order, then time pressure, then late round
        """
        adjustments = []

        for inefficiency in context.market_inefficiencies:
            if inefficiency.severity not in ACTIONABLE_SEVERITIES:
                continue
            adjustment = self._inefficiency_adjustment(inefficiency, context)
            if adjustment is not None:
                adjustments.append(adjustment)

        if context.is_user_turn and context.time_remaining < config.TIME_PRESSURE_SECONDS:
            adjustments.append(StrategyAdjustment(
                risk_tolerance_shift=config.TIME_PRESSURE_RISK_SHIFT,
                reasoning=['Reduced risk tolerance due to time pressure'],
                source='context:time_pressure',
            ))

        if context.current_round >= config.LATE_ROUND:
            adjustments.append(StrategyAdjustment(
                position_priority_changes={
                    position: config.LATE_ROUND_PRIORITY_BOOST
                    for position in config.LATE_ROUND_POSITIONS
                },
                risk_tolerance_shift=config.LATE_ROUND_RISK_SHIFT,
                reasoning=['Increased K/DST priority in late rounds'],
                source='context:late_round',
            ))

        return adjustments

    def apply_adjustments(
        self,
        adjustments: List[StrategyAdjustment],
        rule_adjustments: Optional[Dict[str, List[StrategyAdjustment]]] = None
    ) -> List[DraftStrategy]:
        """
        Fold adjustments into every registered strategy and log them.

        Args:
            adjustments: Adjustments applied to all strategies, in order
            rule_adjustments: Per-strategy adjustments from each strategy's own
                              contextual rules, applied after the shared ones

        Returns:
            Deep-copied snapshots of every strategy after the fold
        """
        rule_adjustments = rule_adjustments or {}

        for strategy in self.registry.all():
            for adjustment in adjustments + rule_adjustments.get(strategy.strategy_id, []):
                strategy.apply_adjustment(adjustment)

            logger.debug(
                f"{strategy.strategy_id}: priorities={strategy.position_priorities}, "
                f"risk={strategy.risk_tolerance}"
            )

        self.registry.record(adjustments)
        for adjs in rule_adjustments.values():
            self.registry.record(adjs)

        return [copy.deepcopy(s) for s in self.registry.all()]

    # ===== Management =====

    def get_active_strategy(self) -> Optional[DraftStrategy]:
        return self.registry.get_active()

    def get_strategy(self, strategy_id: str) -> Optional[DraftStrategy]:
        """Strategy template by id, or None if unknown."""
        strategy = self.registry.get(strategy_id)
        if strategy is None:
            logger.warning(f"Unknown strategy template: {strategy_id}")
        return strategy

    def switch_strategy(self, strategy_id: str) -> bool:
        """Activate a strategy; False if the id is unknown."""
        with self._lock:
            return self.registry.switch(strategy_id)

    def get_strategy_history(self) -> List[StrategyAdjustment]:
        return self.registry.get_history()

    def get_top_recommendations(self, count: int = config.TOP_RECOMMENDATIONS) -> List[StrategyRecommendation]:
        """Best recommendations from the last evaluation."""
        return get_top_recommendations(self.last_recommendations, count)

    def get_market_analysis(self) -> dict:
        """Inefficiencies, runs and sentiment from the last evaluation."""
        return {
            'inefficiencies': list(self.last_inefficiencies),
            'position_runs': dict(self.last_draft_flow.position_runs),
            'market_sentiment': self.last_draft_flow.market_sentiment,
        }

    def get_round_guidelines(self, current_round: int) -> List[PickGuideline]:
        """Active strategy's pick guidelines for a round, heaviest first."""
        active = self.registry.get_active()
        if active is None:
            return []
        return active.guidelines_for_round(current_round)

    # ===== Helpers =====

    def _inefficiency_adjustment(
        self,
        inefficiency: MarketInefficiency,
        context: DraftContext
    ) -> Optional[StrategyAdjustment]:
        adjustment = StrategyAdjustment(source=f"inefficiency:{inefficiency.inefficiency_id}")
        player = inefficiency.player
        position = inefficiency.position

        if inefficiency.inefficiency_type == UNDERVALUED:
            if player is None:
                return None
            adjustment.target_additions.append(player)
            adjustment.reasoning.append(f"Target {player.name} for exceptional value")

        elif inefficiency.inefficiency_type == POSITIONAL_SCARCITY:
            if position is None:
                return None
            adjustment.position_priority_changes[position] = config.SCARCITY_PRIORITY_BOOST
            adjustment.reasoning.append(f"Increased {position} priority due to scarcity")

        elif inefficiency.inefficiency_type == TIER_BREAK:
            if player is None:
                return None
            adjustment.target_additions.append(player)
            adjustment.risk_tolerance_shift = config.TIER_BREAK_RISK_SHIFT
            adjustment.reasoning.append(f"Target {player.name} before tier drop")

        elif inefficiency.inefficiency_type == RUN_OPPORTUNITY:
            if position is None:
                return None
            rostered = context.user_team.position_count(position)
            max_needed = context.league.position_max(position)

            if rostered < max_needed / 2:
                adjustment.position_priority_changes[position] = config.RUN_JOIN_BOOST
                adjustment.reasoning.append(f"Join {position} run to address need")
            else:
                adjustment.position_priority_changes[position] = config.RUN_FADE_PENALTY
                adjustment.reasoning.append(f"Fade {position} run - position filled")

        else:
            return None

        return adjustment

    def _collect_rule_adjustments(self, context: DraftContext) -> Dict[str, List[StrategyAdjustment]]:
        """Adjustments from each strategy's own contextual rules, highest priority first."""
        rule_adjustments = {}

        for strategy in self.registry.all():
            fired = []
            for rule in sorted(strategy.contextual_rules, key=lambda r: r.priority, reverse=True):
                if rule.condition(context):
                    adjustment = copy.deepcopy(rule.adjustment)
                    adjustment.source = f"rule:{strategy.strategy_id}:{rule.scenario}"
                    fired.append(adjustment)
            if fired:
                rule_adjustments[strategy.strategy_id] = fired

        return rule_adjustments
