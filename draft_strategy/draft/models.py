"""
Core data structures for draft snapshots and market signals.

These dataclasses describe the read-only snapshot the engine receives on each
pick event (players, recent picks, the user's team, league settings) and the
market signals derived from it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .. import config

# Inefficiency types
UNDERVALUED = 'undervalued'
OVERVALUED = 'overvalued'
RUN_OPPORTUNITY = 'run_opportunity'
TIER_BREAK = 'tier_break'
POSITIONAL_SCARCITY = 'positional_scarcity'
BYE_WEEK_VALUE = 'bye_week_value'

# Position trend directions
ACCELERATING = 'accelerating'
STABLE = 'stable'
DECLINING = 'declining'

# Market sentiment
BULLISH = 'bullish'
BEARISH = 'bearish'
NEUTRAL = 'neutral'


@dataclass
class Player:
    """A player in the draft pool (read-only to the engine)."""

    player_id: str
    name: str
    position: str                          # QB, RB, WR, TE, K, DST
    team: str = ''                         # NFL team abbreviation
    rank: Optional[int] = None             # Overall rank on the caller's board
    adp: Optional[float] = None            # Average draft position
    tier: Optional[int] = None             # Ordinal tier, lower is better
    projection: Optional[float] = None     # Season point projection
    bye_week: Optional[int] = None
    injury_risk: bool = False
    sleeper: bool = False

    @property
    def effective_adp(self) -> float:
        return self.adp if self.adp is not None else config.DEFAULT_ADP

    @property
    def effective_tier(self) -> int:
        return self.tier if self.tier is not None else config.DEFAULT_TIER

    @property
    def effective_projection(self) -> float:
        return self.projection if self.projection is not None else config.DEFAULT_PROJECTION

    @classmethod
    def from_dict(cls, data: dict) -> 'Player':
        """Create Player from dictionary."""
        return cls(
            player_id=str(data['player_id']),
            name=data['name'],
            position=data['position'],
            team=data.get('team', ''),
            rank=data.get('rank'),
            adp=data.get('adp'),
            tier=data.get('tier'),
            projection=data.get('projection'),
            bye_week=data.get('bye_week'),
            injury_risk=bool(data.get('injury_risk', False)),
            sleeper=bool(data.get('sleeper', False)),
        )


@dataclass
class RecentPick:
    """A pick already made by any team, newest last in a window."""

    player: Player
    pick_number: int                        # Overall pick number
    adp_difference: Optional[float] = None  # player.adp - pick_number (positive = reach)
    time_taken: Optional[float] = None      # Seconds the drafter spent on the pick
    team_id: Optional[str] = None

    @property
    def effective_adp_difference(self) -> float:
        if self.adp_difference is None:
            return config.DEFAULT_ADP_DIFFERENCE
        return self.adp_difference

    @property
    def effective_time_taken(self) -> float:
        if self.time_taken is None:
            return config.DEFAULT_PICK_TIME
        return self.time_taken

    @classmethod
    def from_player(
        cls,
        player: Player,
        pick_number: int,
        time_taken: Optional[float] = None,
        team_id: Optional[str] = None
    ) -> 'RecentPick':
        """
        Build a pick, deriving the ADP difference from the player's ADP.

        Players without an ADP get no difference (treated as on-schedule).
        """
        adp_difference = None
        if player.adp is not None:
            adp_difference = player.adp - pick_number
        return cls(
            player=player,
            pick_number=pick_number,
            adp_difference=adp_difference,
            time_taken=time_taken,
            team_id=team_id,
        )


@dataclass
class UserTeam:
    """The user's team and its current roster."""

    team_id: str = 'user'
    team_name: str = 'My Team'
    roster: List[Player] = field(default_factory=list)

    def position_count(self, position: str) -> int:
        """Count rostered players at a position."""
        return sum(1 for p in self.roster if p.position == position)


@dataclass
class LeagueSettings:
    """League shape and per-position roster limits."""

    num_teams: int = config.NUM_TEAMS
    num_rounds: int = config.NUM_ROUNDS
    position_limits: Dict[str, int] = field(
        default_factory=lambda: dict(config.POSITION_LIMITS)
    )

    def position_max(self, position: str) -> int:
        return self.position_limits.get(position, config.DEFAULT_POSITION_LIMIT)


@dataclass
class MarketInefficiency:
    """A market signal detected in the available player pool or draft flow."""

    inefficiency_id: str        # Stable per type + subject (e.g. 'run-WR')
    inefficiency_type: str      # One of the inefficiency types above
    severity: str               # low, medium, high, critical
    description: str
    value: float                # Magnitude, units vary by type
    confidence: float           # 0-100
    time_window: int            # Picks before the signal goes stale
    reasoning: List[str] = field(default_factory=list)
    action_required: str = ''
    potential_impact: float = 0.0
    player: Optional[Player] = None
    position: Optional[str] = None

    def __post_init__(self):
        self.confidence = max(0.0, min(100.0, self.confidence))
        self.time_window = max(0, self.time_window)


@dataclass
class PositionTrend:
    """Rolling draft trend for one position, rebuilt on every detection."""

    position: str
    average_pick_position: float
    recent_average_pick_position: float   # Last 5 picks at this position
    trend: str                            # accelerating, stable, declining
    scarcity_level: float                 # 0-1, 1 is very scarce
    next_tier_break: int                  # Picks until the next tier change


@dataclass
class RunAnalysis:
    """Shape of the current run at one position."""

    position: str
    run_length: int
    intensity: float            # Share of the last 5 picks at this position
    likely_to_continue: bool
    next_targets: List[Player] = field(default_factory=list)
    counter_strategy: List[str] = field(default_factory=list)


@dataclass
class DraftFlow:
    """Derived summary of recent draft behavior."""

    position_runs: Dict[str, int] = field(default_factory=dict)
    value_deviations: List[float] = field(default_factory=list)
    average_pick_time: float = 0.0
    emergent_patterns: List[str] = field(default_factory=list)
    market_sentiment: str = NEUTRAL

    def to_dict(self) -> dict:
        return {
            'position_runs': dict(self.position_runs),
            'value_deviations': list(self.value_deviations),
            'average_pick_time': self.average_pick_time,
            'emergent_patterns': list(self.emergent_patterns),
            'market_sentiment': self.market_sentiment,
        }


@dataclass
class DraftContext:
    """Everything the engine sees for one pick event."""

    current_round: int
    current_pick: int
    available_players: List[Player] = field(default_factory=list)  # Caller's rank order
    user_team: UserTeam = field(default_factory=UserTeam)
    league: LeagueSettings = field(default_factory=LeagueSettings)
    recent_picks: List[RecentPick] = field(default_factory=list)   # Newest last
    picks_remaining: int = 0
    time_remaining: float = 90.0                                   # Seconds on the clock
    is_user_turn: bool = False
    market_inefficiencies: List[MarketInefficiency] = field(default_factory=list)
    draft_flow: DraftFlow = field(default_factory=DraftFlow)


def calculate_round(current_pick: int, num_teams: int = config.NUM_TEAMS) -> int:
    """Round (1-based) that an overall pick number (1-based) falls in."""
    return max(0, current_pick - 1) // num_teams + 1


def calculate_picks_remaining(
    current_pick: int,
    num_teams: int = config.NUM_TEAMS,
    num_rounds: int = config.NUM_ROUNDS
) -> int:
    """Picks left in the draft after current_pick (never negative)."""
    return max(0, num_teams * num_rounds - current_pick)
