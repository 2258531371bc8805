"""Tests for result serialization and output files."""

import json
from datetime import datetime

import pandas as pd

from draft_strategy.draft.models import DraftContext, Player
from draft_strategy.draft.strategy_engine import StrategyAdjustmentEngine
from draft_strategy.draft.api_serializers import serialize_analysis
from draft_strategy.output_writer import OutputWriter


def _make_player(pid, position, adp, tier=1):
    return Player(player_id=pid, name=f"Player {pid}", position=position, adp=adp, tier=tier)


def _make_response():
    players = [
        _make_player('rb1', 'RB', 8), _make_player('rb2', 'RB', 9),
        _make_player('wr1', 'WR', 9), _make_player('wr2', 'WR', 40, tier=3),
    ]
    context = DraftContext(current_round=1, current_pick=10, available_players=players)
    result = StrategyAdjustmentEngine().analyze_and_adjust(context)
    return serialize_analysis(result, 10, 1, timestamp=datetime(2024, 8, 25, 19, 30))


class TestSerializeAnalysis:
    def test_contract(self):
        response = _make_response()

        assert response.updated_at == '2024-08-25T19:30:00'
        assert response.active_strategy == 'balanced-value'
        assert [s.id for s in response.strategy_updates] == ['balanced-value', 'zero-rb', 'robust-rb']
        assert 'undervalued-wr2' in [i.id for i in response.inefficiencies]
        assert all(0 <= i.confidence <= 100 for i in response.inefficiencies)

    def test_adjustments_reference_player_ids(self):
        response = _make_response()

        undervalued = [a for a in response.adjustments if a.source == 'inefficiency:undervalued-wr2']
        assert undervalued[0].target_additions == ['wr2']
        active = next(s for s in response.strategy_updates if s.active)
        assert 'wr2' in active.target_players


class TestOutputWriter:
    def test_write_analysis(self, tmp_path):
        writer = OutputWriter(output_dir=str(tmp_path))

        path = writer.write_analysis(_make_response(), 'analysis.json')

        assert path == tmp_path / 'analysis.json'
        data = json.loads(path.read_text())
        assert data['current_pick'] == 10
        assert data['active_strategy'] == 'balanced-value'
        assert list(tmp_path.glob('*.tmp')) == []

    def test_default_filename(self, tmp_path):
        writer = OutputWriter(output_dir=str(tmp_path / 'out'))

        path = writer.write_analysis(_make_response())

        assert path.parent == tmp_path / 'out'
        assert path.name.startswith('analysis_')
        assert path.suffix == '.json'

    def test_write_recommendations_csv(self, tmp_path):
        writer = OutputWriter(output_dir=str(tmp_path))
        response = _make_response()

        path = writer.write_recommendations_csv(response, 'recs.csv')
        df = pd.read_csv(path)

        assert list(df['rank']) == list(range(1, len(response.recommendations) + 1))
        assert list(df['type']) == [r.type for r in response.recommendations]
        assert df['score'].is_monotonic_decreasing

    def test_absolute_path_leaves_default_dir_alone(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        writer = OutputWriter()
        target = tmp_path / 'elsewhere' / 'analysis.json'

        path = writer.write_analysis(_make_response(), str(target))

        assert path == target
        assert target.exists()
        assert not (tmp_path / 'data').exists()
