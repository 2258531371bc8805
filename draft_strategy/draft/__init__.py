"""
Live draft strategy subsystem.

This package detects market inefficiencies during a live draft and turns them,
together with the draft context, into adjusted strategies and ranked
recommendations.
"""

from .models import (
    Player,
    RecentPick,
    UserTeam,
    LeagueSettings,
    DraftContext,
    DraftFlow,
    MarketInefficiency,
    PositionTrend,
)
from .inefficiency_detector import MarketInefficiencyDetector
from .strategy import DraftStrategy, StrategyAdjustment, StrategyRecommendation
from .strategy_registry import StrategyRegistry, create_base_strategies
from .strategy_engine import StrategyAdjustmentEngine, AnalysisResult

__all__ = [
    'Player',
    'RecentPick',
    'UserTeam',
    'LeagueSettings',
    'DraftContext',
    'DraftFlow',
    'MarketInefficiency',
    'PositionTrend',
    'MarketInefficiencyDetector',
    'DraftStrategy',
    'StrategyAdjustment',
    'StrategyRecommendation',
    'StrategyRegistry',
    'create_base_strategies',
    'StrategyAdjustmentEngine',
    'AnalysisResult',
]
