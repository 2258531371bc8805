"""Tests for recommendation generation."""

import pytest

from draft_strategy.draft.models import DraftContext, DraftFlow, LeagueSettings, Player, UserTeam
from draft_strategy.draft.strategy import (
    DraftStrategy,
    StrategyRecommendation,
    AGGRESSIVE,
    NEED_FILL,
    VALUE_HUNT,
    POSITION_PIVOT,
)
from draft_strategy.draft.recommendations import (
    calculate_need_level,
    generate_need_recommendations,
    generate_recommendations,
    generate_timing_recommendations,
    generate_value_recommendations,
    get_top_recommendations,
)


def _make_player(pid, position, adp=None):
    return Player(player_id=pid, name=f"Player {pid}", position=position, adp=adp, tier=3)


def _make_strategy(priorities, risk_tolerance=AGGRESSIVE):
    return DraftStrategy(
        strategy_id='s',
        name='S',
        description='',
        position_priorities=priorities,
        risk_tolerance=risk_tolerance,
    )


def _make_context(players, roster=None, current_pick=30, position_runs=None):
    return DraftContext(
        current_round=3,
        current_pick=current_pick,
        available_players=players,
        user_team=UserTeam(roster=roster or []),
        league=LeagueSettings(position_limits={'QB': 2, 'RB': 4, 'WR': 4, 'TE': 2}),
        draft_flow=DraftFlow(position_runs=position_runs or {}),
    )


class TestNeedLevel:
    def test_need_level(self):
        assert calculate_need_level(0, 4) == pytest.approx(1.0)
        assert calculate_need_level(1, 4) == pytest.approx(0.75)
        assert calculate_need_level(6, 4) == 0.0
        assert calculate_need_level(0, 0) == 0.0


class TestNeedRecommendations:
    def test_empty_position_with_high_priority(self):
        players = [_make_player(f"r{i}", 'RB', adp=30) for i in range(5)]
        context = _make_context(players)
        strategy = _make_strategy({'RB': 1.5, 'QB': 0.9})

        recs = generate_need_recommendations(context, strategy)

        assert len(recs) == 1
        rec = recs[0]
        assert rec.recommendation_type == NEED_FILL
        assert rec.title == 'Address RB Need'
        assert rec.confidence == pytest.approx(90)    # 60 + 1.0 * 30
        assert rec.urgency == pytest.approx(95)       # 80 + 15
        assert rec.risk_level == 60
        assert rec.potential_impact == pytest.approx(25)
        assert [p.player_id for p in rec.suggested_players] == ['r0', 'r1', 'r2']

    def test_half_filled_position_is_skipped(self):
        roster = [_make_player('r8', 'RB'), _make_player('r9', 'RB')]
        context = _make_context([_make_player('r1', 'RB', adp=30)], roster=roster)

        assert generate_need_recommendations(context, _make_strategy({'RB': 1.5})) == []

    def test_no_available_options(self):
        context = _make_context([_make_player('w1', 'WR', adp=30)])

        assert generate_need_recommendations(context, _make_strategy({'RB': 1.5})) == []


class TestValueRecommendations:
    def test_top_five_fallers(self):
        players = [_make_player(f"p{i}", 'WR', adp=50 + i) for i in range(7)]
        players.insert(0, _make_player('on-time', 'WR', adp=35))

        recs = generate_value_recommendations(_make_context(players, current_pick=30))

        assert len(recs) == 1
        assert recs[0].recommendation_type == VALUE_HUNT
        assert [p.player_id for p in recs[0].suggested_players] == ['p0', 'p1', 'p2', 'p3', 'p4']
        assert (recs[0].confidence, recs[0].urgency) == (80, 70)

    def test_nothing_falling(self):
        players = [_make_player('w1', 'WR', adp=40)]

        assert generate_value_recommendations(_make_context(players, current_pick=30)) == []


class TestTimingRecommendations:
    def test_join_run_at_valued_position(self):
        players = [_make_player(f"w{i}", 'WR', adp=30) for i in range(3)]
        context = _make_context(players, position_runs={'WR': 2, 'RB': 3})
        strategy = _make_strategy({'WR': 1.1, 'RB': 0.8})

        recs = generate_timing_recommendations(context, strategy)

        assert len(recs) == 1
        assert recs[0].recommendation_type == POSITION_PIVOT
        assert recs[0].title == 'WR Run Detected'
        assert [p.player_id for p in recs[0].suggested_players] == ['w0', 'w1']

    def test_short_run_is_ignored(self):
        context = _make_context([_make_player('w1', 'WR')], position_runs={'WR': 1})

        assert generate_timing_recommendations(context, _make_strategy({'WR': 1.5})) == []


class TestRanking:
    def test_sorted_by_urgency_times_confidence(self):
        players = [_make_player(f"w{i}", 'WR', adp=60) for i in range(3)]
        context = _make_context(players, position_runs={'WR': 3})
        strategy = _make_strategy({'WR': 1.5})

        recs = generate_recommendations(context, strategy)
        scores = [r.score for r in recs]

        assert [r.recommendation_type for r in recs] == [NEED_FILL, POSITION_PIVOT, VALUE_HUNT]
        assert scores == sorted(scores, reverse=True)

    def test_top_recommendations(self):
        recs = [
            StrategyRecommendation(NEED_FILL, 'a', '', confidence=50, urgency=50),
            StrategyRecommendation(NEED_FILL, 'b', '', confidence=90, urgency=90),
            StrategyRecommendation(NEED_FILL, 'c', '', confidence=70, urgency=70),
        ]

        top = get_top_recommendations(recs, count=2)

        assert [r.title for r in top] == ['b', 'c']
