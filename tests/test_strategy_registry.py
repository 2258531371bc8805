"""Tests for the strategy registry and the built-in strategies."""

from draft_strategy.draft.strategy import DraftStrategy, StrategyAdjustment
from draft_strategy.draft.strategy_registry import StrategyRegistry, create_base_strategies


def _make_strategy(strategy_id, active=False):
    return DraftStrategy(
        strategy_id=strategy_id,
        name=strategy_id.title(),
        description='',
        active=active,
    )


def _active_ids(registry):
    return [s.strategy_id for s in registry.all() if s.active]


class TestBaseStrategies:
    def test_three_archetypes(self):
        strategies = create_base_strategies()

        assert [s.strategy_id for s in strategies] == ['balanced-value', 'zero-rb', 'robust-rb']

    def test_each_has_a_trigger_and_distinct_priorities(self):
        strategies = create_base_strategies()

        assert all(s.triggers for s in strategies)
        priority_vectors = [tuple(sorted(s.position_priorities.items())) for s in strategies]
        assert len(set(priority_vectors)) == 3
        assert len({s.risk_tolerance for s in strategies}) == 3

    def test_fresh_templates_each_call(self):
        first, second = create_base_strategies(), create_base_strategies()

        first[0].position_priorities['RB'] = 5.0

        assert second[0].position_priorities['RB'] == 1.2


class TestRegistry:
    def test_default_registry(self):
        registry = StrategyRegistry()

        assert registry.get_active().strategy_id == 'balanced-value'
        assert _active_ids(registry) == ['balanced-value']

    def test_first_strategy_activated_when_none_flagged(self):
        registry = StrategyRegistry([_make_strategy('a'), _make_strategy('b')])

        assert registry.active_id == 'a'
        assert _active_ids(registry) == ['a']

    def test_only_first_flagged_strategy_stays_active(self):
        registry = StrategyRegistry([_make_strategy('a', active=True), _make_strategy('b', active=True)])

        assert _active_ids(registry) == ['a']

    def test_replacing_active_strategy_keeps_it_active(self):
        registry = StrategyRegistry([_make_strategy('a', active=True), _make_strategy('b')])

        registry.register(_make_strategy('a'))

        assert registry.get_active().strategy_id == 'a'
        assert registry.get('a').active is True

    def test_empty_registry(self):
        registry = StrategyRegistry([])

        assert registry.get_active() is None
        assert registry.all() == []


class TestSwitch:
    def test_switch_to_known_strategy(self):
        registry = StrategyRegistry()

        assert registry.switch('zero-rb') is True
        assert registry.get_active().strategy_id == 'zero-rb'
        assert _active_ids(registry) == ['zero-rb']

    def test_unknown_strategy_leaves_registry_untouched(self):
        registry = StrategyRegistry()

        assert registry.switch('best-ball') is False
        assert registry.get_active().strategy_id == 'balanced-value'
        assert _active_ids(registry) == ['balanced-value']


class TestHistory:
    def test_history_is_append_only_copy(self):
        registry = StrategyRegistry()
        first = StrategyAdjustment(source='a')
        second = StrategyAdjustment(source='b')

        registry.record([first])
        registry.record([second])
        history = registry.get_history()
        history.clear()

        assert [a.source for a in registry.get_history()] == ['a', 'b']
