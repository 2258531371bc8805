"""Tests for the command-line entry point."""

import json

from draft_strategy.main import build_context, parse_arguments, run_analysis


PLAYERS_CSV = """player_id,name,position,rank,adp,tier
1,Back One,RB,1,8.0,1
2,Back Two,RB,2,9.0,1
3,Wide One,WR,3,9.0,1
4,Wide Two,WR,4,40.0,3
5,Back Three,RB,5,30.0,2
"""

PICKS_CSV = """pick_number,player_id,name,position,adp
8,5,Back Three,RB,30.0
"""


def _write_inputs(tmp_path):
    players = tmp_path / 'players.csv'
    players.write_text(PLAYERS_CSV)
    picks = tmp_path / 'picks.csv'
    picks.write_text(PICKS_CSV)
    return str(players), str(picks)


class TestBuildContext:
    def test_round_and_remaining_picks_derived(self, tmp_path):
        players, picks = _write_inputs(tmp_path)
        args = parse_arguments(['--players', players, '--recent-picks', picks, '--pick', '26'])

        context = build_context(args)

        assert context.current_round == 3
        assert context.picks_remaining == 12 * 16 - 26
        assert [p.player_id for p in context.available_players] == ['1', '2', '3', '4']
        assert context.recent_picks[0].adp_difference == 22.0

    def test_explicit_round(self, tmp_path):
        players, _ = _write_inputs(tmp_path)
        args = parse_arguments(['--players', players, '--pick', '26', '--round', '2', '--num-teams', '10'])

        context = build_context(args)

        assert context.current_round == 2
        assert context.league.num_teams == 10


class TestRunAnalysis:
    def test_writes_output(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        players, picks = _write_inputs(tmp_path)
        output = tmp_path / 'result.json'
        args = parse_arguments([
            '--players', players, '--recent-picks', picks, '--pick', '10',
            '--strategy', 'robust-rb', '--output', str(output),
            '--recommendations-csv', 'recs.csv',
        ])

        assert run_analysis(args) == 0

        data = json.loads(output.read_text())
        assert data['active_strategy'] == 'robust-rb'
        assert data['current_round'] == 1
        assert (tmp_path / 'data' / 'output' / 'recs.csv').exists()

    def test_unknown_strategy(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        players, _ = _write_inputs(tmp_path)
        args = parse_arguments(['--players', players, '--pick', '10', '--strategy', 'nope'])

        assert run_analysis(args) == 1

    def test_missing_snapshot(self, tmp_path):
        args = parse_arguments(['--players', str(tmp_path / 'missing.csv'), '--pick', '10'])

        assert run_analysis(args) == 1

    def test_absolute_output_creates_no_default_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        players, picks = _write_inputs(tmp_path)
        output = tmp_path / 'runs' / 'result.json'
        args = parse_arguments([
            '--players', players, '--recent-picks', picks, '--pick', '10',
            '--output', str(output),
        ])

        assert run_analysis(args) == 0

        assert output.exists()
        assert not (tmp_path / 'data').exists()
