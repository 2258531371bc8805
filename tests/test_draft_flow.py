"""Tests for draft flow analysis."""

import pytest

from draft_strategy.draft.models import Player, RecentPick, BULLISH, BEARISH, NEUTRAL
from draft_strategy.draft.draft_flow import (
    analyze_draft_flow,
    calculate_position_runs,
    determine_market_sentiment,
)


def _make_pick(pid, position, pick_number, adp_difference=None, time_taken=None):
    return RecentPick(
        player=Player(player_id=pid, name=f"Player {pid}", position=position),
        pick_number=pick_number,
        adp_difference=adp_difference,
        time_taken=time_taken,
    )


class TestPositionRuns:
    def test_counts_consecutive_picks_from_newest(self):
        picks = [
            _make_pick('w1', 'WR', 1),
            _make_pick('r1', 'RB', 2),
            _make_pick('r2', 'RB', 3),
            _make_pick('r3', 'RB', 4),
        ]

        runs = calculate_position_runs(picks)

        assert runs == {'QB': 0, 'RB': 3, 'WR': 0, 'TE': 0}

    def test_run_capped_by_window(self):
        picks = [_make_pick(f"w{i}", 'WR', i) for i in range(1, 8)]

        assert calculate_position_runs(picks)['WR'] == 5

    def test_kickers_are_not_tracked(self):
        picks = [_make_pick('k1', 'K', 1), _make_pick('k2', 'K', 2)]

        assert 'K' not in calculate_position_runs(picks)


class TestMarketSentiment:
    def test_reaches_are_bearish(self):
        assert determine_market_sentiment([10, 10]) == BEARISH

    def test_values_are_bullish(self):
        assert determine_market_sentiment([-10, -10]) == BULLISH

    def test_threshold_is_neutral(self):
        assert determine_market_sentiment([15]) == NEUTRAL
        assert determine_market_sentiment([]) == NEUTRAL

    def test_only_recent_deviations_count(self):
        # The three oldest reaches fall outside the five-pick window
        deviations = [30, 30, 30, 0, 0, 0, 0, 0]
        assert determine_market_sentiment(deviations) == NEUTRAL


class TestAnalyzeDraftFlow:
    def test_empty_draft(self):
        flow = analyze_draft_flow([])

        assert flow.average_pick_time == 0.0
        assert flow.value_deviations == []
        assert flow.emergent_patterns == []
        assert flow.market_sentiment == NEUTRAL
        assert all(count == 0 for count in flow.position_runs.values())

    def test_deviation_window(self):
        picks = [_make_pick(f"p{i}", 'QB' if i % 2 else 'TE', i, adp_difference=i) for i in range(12)]

        flow = analyze_draft_flow(picks)

        assert flow.value_deviations == list(range(2, 12))

    def test_missing_pick_data_uses_defaults(self):
        flow = analyze_draft_flow([_make_pick('a', 'QB', 1)])

        assert flow.value_deviations == [0.0]
        assert flow.average_pick_time == pytest.approx(60.0)

    def test_patterns(self):
        picks = [
            _make_pick('r1', 'RB', 1, adp_difference=12, time_taken=120),
            _make_pick('r2', 'RB', 2, adp_difference=-14, time_taken=100),
            _make_pick('r3', 'RB', 3, adp_difference=20, time_taken=95),
        ]

        flow = analyze_draft_flow(picks)

        assert flow.emergent_patterns == [
            'positional_run_detected', 'high_volatility', 'slow_draft_pace',
        ]
        assert flow.average_pick_time == pytest.approx(105.0)
        assert flow.market_sentiment == BEARISH
