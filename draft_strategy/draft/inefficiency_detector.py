"""
Market inefficiency detection for live drafts.

Scans the available player pool and a short window of recent picks for
undervalued players, positional runs, tier breaks, scarcity, bye week value
and market panic. The recent pick window is the detector's only memory of the
draft: position trends are rebuilt from it on every call.
"""

import logging
from collections import Counter
from typing import Dict, List, Optional

from .. import config
from .models import (
    Player,
    RecentPick,
    MarketInefficiency,
    PositionTrend,
    RunAnalysis,
    UNDERVALUED,
    OVERVALUED,
    RUN_OPPORTUNITY,
    TIER_BREAK,
    POSITIONAL_SCARCITY,
    BYE_WEEK_VALUE,
    ACCELERATING,
    STABLE,
    DECLINING,
)

logger = logging.getLogger(__name__)

FALL_REASONS = {
    'overreaction': 'Market overreaction to recent performance',
    'run': 'Positional run affecting draft flow',
    'injury': 'Injury concerns creating value opportunity',
    'situation': 'Age/situation creating artificial discount',
}


def determine_severity(value: float, thresholds: List[float]) -> str:
    """
    Bucket a magnitude into a severity.

    Args:
        value: Magnitude that produced the signal
        thresholds: Ascending [medium, high, critical] cut points

    Returns:
        'low', 'medium', 'high' or 'critical'
    """
    if value >= thresholds[2]:
        return 'critical'
    if value >= thresholds[1]:
        return 'high'
    if value >= thresholds[0]:
        return 'medium'
    return 'low'


def calculate_priority(inefficiency: MarketInefficiency) -> float:
    """
    Score an inefficiency for ordering (severity + confidence + time sensitivity).

    Args:
        inefficiency: Detected signal

    Returns:
        Priority score, higher is more pressing
    """
    time_urgency = max(0, 10 - inefficiency.time_window)

    return (
        config.SEVERITY_WEIGHTS[inefficiency.severity] * 25
        + inefficiency.confidence * 0.5
        + time_urgency * 3
        + inefficiency.potential_impact * 0.3
    )


class MarketInefficiencyDetector:
    """Detects market inefficiencies from the player pool and recent picks."""

    def __init__(self):
        """Initialize with empty rolling state."""
        self.recent_picks: List[RecentPick] = []
        self.position_trends: Dict[str, PositionTrend] = {}

    def detect_inefficiencies(
        self,
        available_players: List[Player],
        current_pick: int,
        recent_picks: List[RecentPick],
        current_round: int = 1
    ) -> List[MarketInefficiency]:
        """
        Detect all market inefficiencies for the current pick.

        Args:
            available_players: Undrafted players in the caller's rank order
            current_pick: Overall pick number on the clock
            recent_picks: Recent picks, newest last
            current_round: Current draft round

        Returns:
            Inefficiencies sorted by priority descending (stable for ties)
        """
        self._update_market_state(recent_picks, available_players)

        if not available_players:
            logger.debug("No available players - skipping inefficiency detection")
            return []

        inefficiencies: List[MarketInefficiency] = []
        inefficiencies.extend(self._detect_undervalued_players(available_players, current_pick))
        inefficiencies.extend(self._detect_positional_runs(available_players))
        inefficiencies.extend(self._detect_tier_breaks(available_players))
        inefficiencies.extend(self._detect_positional_scarcity(available_players))
        inefficiencies.extend(
            self._detect_bye_week_opportunities(available_players, current_pick, current_round)
        )
        inefficiencies.extend(self._detect_market_panic())

        inefficiencies.sort(key=calculate_priority, reverse=True)

        logger.debug(
            f"Detected {len(inefficiencies)} inefficiencies at pick {current_pick} "
            f"({len(available_players)} available, {len(self.recent_picks)} recent picks)"
        )

        return inefficiencies

    def get_position_trend(self, position: str) -> Optional[PositionTrend]:
        """Trend computed for a position on the last detection, if any."""
        return self.position_trends.get(position)

    def analyze_positional_run(
        self,
        position: str,
        available_players: Optional[List[Player]] = None
    ) -> RunAnalysis:
        """
        Measure the run at a position from the recent pick window.

        Args:
            position: Position to analyze
            available_players: Optional pool used to suggest next targets

        Returns:
            RunAnalysis for the position
        """
        run_length = self._run_length(position)

        window = self.recent_picks[-config.RUN_INTENSITY_WINDOW:]
        position_count = sum(1 for pick in window if pick.player.position == position)
        intensity = position_count / len(window) if window else 0.0

        likely_to_continue = (
            intensity > config.RUN_CONTINUE_INTENSITY
            and run_length >= config.RUN_CONTINUE_LENGTH
        )

        next_targets = [
            p for p in (available_players or []) if p.position == position
        ][:2]

        return RunAnalysis(
            position=position,
            run_length=run_length,
            intensity=intensity,
            likely_to_continue=likely_to_continue,
            next_targets=next_targets,
            counter_strategy=self._counter_strategy(position, run_length),
        )

    # ===== State =====

    def _update_market_state(
        self,
        recent_picks: List[RecentPick],
        available_players: List[Player]
    ) -> None:
        self.recent_picks = list(recent_picks)[-config.RECENT_PICK_WINDOW:]
        self._update_position_trends(available_players)

    def _update_position_trends(self, available_players: List[Player]) -> None:
        self.position_trends = {}

        for position in config.ALL_POSITIONS:
            position_players = [p for p in available_players if p.position == position]
            drafted_at_position = [
                pick for pick in self.recent_picks if pick.player.position == position
            ][-config.POSITION_TREND_WINDOW:]

            average_pick = float(config.BASE_POSITION_ADP.get(position, config.DEFAULT_BASE_ADP))
            if drafted_at_position:
                recent_average = (
                    sum(pick.pick_number for pick in drafted_at_position) / len(drafted_at_position)
                )
            else:
                recent_average = average_pick

            trend = STABLE
            if recent_average < average_pick - config.TREND_TOLERANCE:
                trend = ACCELERATING
            elif recent_average > average_pick + config.TREND_TOLERANCE:
                trend = DECLINING

            self.position_trends[position] = PositionTrend(
                position=position,
                average_pick_position=average_pick,
                recent_average_pick_position=recent_average,
                trend=trend,
                scarcity_level=self._scarcity_level(position, position_players),
                next_tier_break=self._next_tier_break(position_players),
            )

    # ===== Detections =====

    def _detect_undervalued_players(
        self,
        available_players: List[Player],
        current_pick: int
    ) -> List[MarketInefficiency]:
        inefficiencies = []

        for player in available_players[:config.UNDERVALUED_SCAN_DEPTH]:
            adp_difference = player.effective_adp - current_pick

            # Significant value if player is available 10+ picks after ADP
            if adp_difference < config.UNDERVALUED_MIN_ADP_DIFF:
                continue

            inefficiencies.append(MarketInefficiency(
                inefficiency_id=f"undervalued-{player.player_id}",
                inefficiency_type=UNDERVALUED,
                severity=determine_severity(adp_difference, config.UNDERVALUED_THRESHOLDS),
                player=player,
                position=player.position,
                description=f"{player.name} falling significantly below ADP",
                value=adp_difference,
                confidence=min(95, 60 + adp_difference * 2),
                time_window=min(10, int(adp_difference // 2)),
                reasoning=[
                    f"ADP: {player.effective_adp:.1f}, Current Pick: {current_pick}",
                    f"Falling {adp_difference:.1f} picks below expected",
                    self._explain_fall(player),
                    f"Projected {player.effective_projection:.1f} fantasy points",
                ],
                action_required=f"Consider drafting {player.name} for exceptional value",
                potential_impact=adp_difference * 2,
            ))

        return inefficiencies

    def _detect_positional_runs(self, available_players: List[Player]) -> List[MarketInefficiency]:
        inefficiencies = []

        for position in config.SKILL_POSITIONS:
            run = self.analyze_positional_run(position, available_players)
            if run.run_length < config.RUN_MIN_LENGTH:
                continue

            target_names = ', '.join(p.name for p in run.next_targets) or 'none available'

            inefficiencies.append(MarketInefficiency(
                inefficiency_id=f"run-{position}",
                inefficiency_type=RUN_OPPORTUNITY,
                severity=determine_severity(run.run_length, config.RUN_THRESHOLDS),
                position=position,
                description=f"{position} run detected - {run.run_length} consecutive picks",
                value=run.intensity * 10,
                confidence=min(90, 50 + run.run_length * 10),
                time_window=3 if run.likely_to_continue else 1,
                reasoning=[
                    f"{run.run_length} {position}s taken in recent picks",
                    f"Run intensity: {run.intensity * 100:.1f}%",
                    'Trend likely to continue' if run.likely_to_continue else 'Run may be ending',
                    f"Next targets: {target_names}",
                ] + run.counter_strategy,
                action_required=(
                    f"Jump on {position} run before value disappears"
                    if run.likely_to_continue
                    else "Consider contrarian approach - target other positions"
                ),
                potential_impact=run.intensity * 25,
            ))

        return inefficiencies

    def _detect_tier_breaks(self, available_players: List[Player]) -> List[MarketInefficiency]:
        inefficiencies = []

        for position in config.SKILL_POSITIONS:
            position_players = [p for p in available_players if p.position == position]
            if len(position_players) < 2:
                continue

            top_player, next_player = position_players[0], position_players[1]

            tier_break = top_player.effective_tier != next_player.effective_tier
            projection_gap = top_player.effective_projection - next_player.effective_projection
            significant_gap = projection_gap > config.TIER_BREAK_PROJECTION_GAP

            if not (tier_break or significant_gap):
                continue

            reasoning = [
                f"{top_player.name} is Tier {top_player.effective_tier}",
                f"Next {position} ({next_player.name}) is Tier {next_player.effective_tier}",
            ]
            if projection_gap > 0:
                reasoning.append(f"{projection_gap:.1f} point projection gap")
            reasoning.append('Significant drop-off in quality after this pick')

            inefficiencies.append(MarketInefficiency(
                inefficiency_id=f"tier-break-{position}",
                inefficiency_type=TIER_BREAK,
                severity='critical' if (tier_break and significant_gap) else 'high',
                player=top_player,
                position=position,
                description=f"Major tier break at {position} - last elite option",
                value=projection_gap or config.TIER_BREAK_DEFAULT_VALUE,
                confidence=90 if tier_break else 75,
                time_window=2,
                reasoning=reasoning,
                action_required=f"Secure {top_player.name} before tier drop",
                potential_impact=projection_gap or config.TIER_BREAK_DEFAULT_IMPACT,
            ))

        return inefficiencies

    def _detect_positional_scarcity(self, available_players: List[Player]) -> List[MarketInefficiency]:
        inefficiencies = []

        for position in config.SKILL_POSITIONS:
            trend = self.position_trends.get(position)
            if trend is None or trend.scarcity_level <= config.SCARCITY_THRESHOLD:
                continue

            elite_players = [
                p for p in available_players
                if p.position == position and p.effective_tier <= config.ELITE_TIER
            ]
            if len(elite_players) > config.SCARCITY_MAX_ELITE:
                continue

            reasoning = [
                f"Only {len(elite_players)} Tier 1-2 {position}s remaining",
                f"Position scarcity level: {trend.scarcity_level * 100:.1f}%",
            ]
            if trend.trend == ACCELERATING:
                reasoning.append('Position being drafted earlier than usual')
            reasoning.append(f"Next {position} tier break in {trend.next_tier_break} picks")

            inefficiencies.append(MarketInefficiency(
                inefficiency_id=f"scarcity-{position}",
                inefficiency_type=POSITIONAL_SCARCITY,
                severity='critical' if len(elite_players) == 1 else 'high',
                position=position,
                description=(
                    f"Critical {position} scarcity - only {len(elite_players)} elite options left"
                ),
                value=trend.scarcity_level * 100,
                confidence=85,
                time_window=len(elite_players) + 1,
                reasoning=reasoning,
                action_required=f"Prioritize {position} before scarcity drives reaching",
                potential_impact=trend.scarcity_level * 30,
            ))

        return inefficiencies

    def _detect_bye_week_opportunities(
        self,
        available_players: List[Player],
        current_pick: int,
        current_round: int
    ) -> List[MarketInefficiency]:
        inefficiencies = []

        # Late round strategy only
        if current_round < config.BYE_WEEK_MIN_ROUND:
            return inefficiencies

        bye_week_counts = Counter(p.bye_week for p in available_players if p.bye_week)
        if not bye_week_counts:
            return inefficiencies

        average_count = sum(bye_week_counts.values()) / len(bye_week_counts)
        optimal_weeks = sorted(
            week for week, count in bye_week_counts.items()
            if count > average_count * config.BYE_WEEK_OPTIMAL_RATIO
        )

        for bye_week in optimal_weeks:
            value_players = [
                p for p in available_players
                if p.bye_week == bye_week and p.effective_adp > current_pick
            ]
            if not value_players:
                continue

            inefficiencies.append(MarketInefficiency(
                inefficiency_id=f"bye-week-{bye_week}",
                inefficiency_type=BYE_WEEK_VALUE,
                severity='low',
                description=f"Bye week {bye_week} value opportunities",
                value=len(value_players) * 5,
                confidence=70,
                time_window=5,
                reasoning=[
                    f"Week {bye_week} bye players undervalued",
                    f"{len(value_players)} value options available",
                    'Late-round bye week optimization opportunity',
                ],
                action_required=f"Target players with Week {bye_week} bye for roster balance",
                potential_impact=10,
            ))

        return inefficiencies

    def _detect_market_panic(self) -> List[MarketInefficiency]:
        recent_reaches = [
            pick for pick in self.recent_picks[-config.PANIC_WINDOW:]
            if pick.effective_adp_difference > config.PANIC_REACH_THRESHOLD
        ]

        if len(recent_reaches) < config.PANIC_MIN_REACHES:
            return []

        average_reach = (
            sum(pick.effective_adp_difference for pick in recent_reaches) / len(recent_reaches)
        )

        return [MarketInefficiency(
            inefficiency_id='market-panic',
            inefficiency_type=OVERVALUED,
            severity='medium',
            description='Market showing panic behavior - multiple reaches detected',
            value=average_reach,
            confidence=80,
            time_window=3,
            reasoning=[
                f"{len(recent_reaches)} reaches in last {config.PANIC_WINDOW} picks",
                f"Average reach: {average_reach:.1f} picks",
                'Market may be overreacting to positional scarcity',
                'Contrarian value opportunities emerging',
            ],
            action_required='Stay disciplined - avoid panic picks and target falling players',
            potential_impact=15,
        )]

    # ===== Helpers =====

    def _run_length(self, position: str) -> int:
        """Consecutive picks at position, counting back from the newest pick."""
        run_length = 0
        for pick in reversed(self.recent_picks):
            if pick.player.position != position:
                break
            run_length += 1
        return run_length

    def _counter_strategy(self, position: str, run_length: int) -> List[str]:
        strategies = []

        if run_length >= config.RUN_MIN_LENGTH:
            strategies.append(f"Consider joining {position} run before tier drop")
            strategies.append('Alternative: Target complementary positions being ignored')

        if run_length >= config.RUN_HEAVY_LENGTH:
            strategies.append(f"Heavy {position} run may signal market inefficiency")
            strategies.append('Contrarian approach: Target other premium positions')

        return strategies

    def _scarcity_level(self, position: str, position_players: List[Player]) -> float:
        elite_count = sum(1 for p in position_players if p.effective_tier <= config.ELITE_TIER)
        expected = config.EXPECTED_ELITE_COUNT.get(position, config.DEFAULT_EXPECTED_ELITE)
        return max(0.0, 1 - elite_count / expected)

    def _next_tier_break(self, position_players: List[Player]) -> int:
        for i in range(len(position_players) - 1):
            if position_players[i].effective_tier != position_players[i + 1].effective_tier:
                return i + 1
        return config.NO_TIER_BREAK

    def _explain_fall(self, player: Player) -> str:
        """Most likely reason a player is sliding, from what the snapshot shows."""
        if player.injury_risk:
            return FALL_REASONS['injury']
        if player.sleeper:
            return FALL_REASONS['situation']
        other_runs = [
            self._run_length(position) for position in config.SKILL_POSITIONS
            if position != player.position
        ]
        if any(length >= config.RUN_CONTINUE_LENGTH for length in other_runs):
            return FALL_REASONS['run']
        return FALL_REASONS['overreaction']
