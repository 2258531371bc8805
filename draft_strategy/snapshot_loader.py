"""
Load draft snapshots (player pool, recent picks, user roster) from CSV files.

Missing optional columns or blank cells become None on the models, where the
engine's conservative defaults take over.
"""

import logging
import pandas as pd
from pathlib import Path
from typing import Iterable, List, Optional

from .draft.models import Player, RecentPick, UserTeam

logger = logging.getLogger(__name__)

PLAYER_REQUIRED_COLUMNS = ['player_id', 'name', 'position']
PICK_REQUIRED_COLUMNS = PLAYER_REQUIRED_COLUMNS + ['pick_number']

INT_FIELDS = ['rank', 'tier', 'bye_week']
FLOAT_FIELDS = ['adp', 'projection']
BOOL_FIELDS = ['injury_risk', 'sleeper']


def _read_csv(filepath: str, required_columns: List[str]) -> pd.DataFrame:
    """
    Read a CSV and validate its required columns.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a required column is missing
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {filepath}")

    df = pd.read_csv(path)

    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        raise ValueError(f"{path.name} is missing required columns: {', '.join(missing)}")

    return df


def _clean_value(value):
    """Convert NaN to None and numpy scalars to Python types."""
    if pd.isna(value):
        return None
    if hasattr(value, 'item'):
        return value.item()
    return value


def _row_to_player(row: pd.Series) -> Player:
    data = {key: _clean_value(value) for key, value in row.items()}

    for key in INT_FIELDS:
        if data.get(key) is not None:
            data[key] = int(data[key])
    for key in FLOAT_FIELDS:
        if data.get(key) is not None:
            data[key] = float(data[key])
    for key in BOOL_FIELDS:
        data[key] = bool(data.get(key) or False)

    data['position'] = str(data['position']).upper()
    data['team'] = data.get('team') or ''

    return Player.from_dict(data)


def load_players(filepath: str) -> List[Player]:
    """
    Load the player pool.

    Players are ordered by the 'rank' column when present, otherwise the
    file order is kept.

    Args:
        filepath: CSV with player_id, name, position and optional
                  team, rank, adp, tier, projection, bye_week, injury_risk, sleeper

    Returns:
        List of Players in rank order
    """
    df = _read_csv(filepath, PLAYER_REQUIRED_COLUMNS)

    if 'rank' in df.columns:
        df = df.sort_values('rank', kind='stable', na_position='last')

    players = [_row_to_player(row) for _, row in df.iterrows()]

    logger.info(f"Loaded {len(players)} players from {filepath}")
    return players


def load_recent_picks(filepath: str) -> List[RecentPick]:
    """
    Load picks already made, oldest first.

    Args:
        filepath: CSV with player columns plus pick_number and optional
                  adp_difference, time_taken, team_id

    Returns:
        List of RecentPicks sorted by pick_number
    """
    df = _read_csv(filepath, PICK_REQUIRED_COLUMNS)
    df = df.sort_values('pick_number', kind='stable')

    pick_columns = ['pick_number', 'adp_difference', 'time_taken', 'team_id']
    player_columns = [col for col in df.columns if col not in pick_columns]

    picks = []
    for _, row in df.iterrows():
        player = _row_to_player(row[player_columns])
        pick_number = int(row['pick_number'])
        time_taken = _clean_value(row.get('time_taken'))
        team_id = _clean_value(row.get('team_id'))

        pick = RecentPick.from_player(
            player,
            pick_number,
            time_taken=float(time_taken) if time_taken is not None else None,
            team_id=str(team_id) if team_id is not None else None,
        )

        adp_difference = _clean_value(row.get('adp_difference'))
        if adp_difference is not None:
            pick.adp_difference = float(adp_difference)

        picks.append(pick)

    logger.info(f"Loaded {len(picks)} recent picks from {filepath}")
    return picks


def load_roster(filepath: str, team_id: str = 'user', team_name: str = 'My Team') -> UserTeam:
    """
    Load the user's roster.

    Args:
        filepath: CSV with player_id, name, position
        team_id: User team ID
        team_name: User team name

    Returns:
        UserTeam with the rostered players
    """
    df = _read_csv(filepath, PLAYER_REQUIRED_COLUMNS)
    roster = [_row_to_player(row) for _, row in df.iterrows()]

    logger.info(f"Loaded {len(roster)} rostered players from {filepath}")
    return UserTeam(team_id=team_id, team_name=team_name, roster=roster)


def filter_available(
    players: List[Player],
    drafted_ids: Iterable[str],
    rostered: Optional[UserTeam] = None
) -> List[Player]:
    """
    Remove drafted and rostered players from the pool.

    Args:
        players: Full player pool
        drafted_ids: IDs of players already drafted
        rostered: Optional user team whose players are also removed

    Returns:
        Undrafted players, order preserved
    """
    excluded = set(str(pid) for pid in drafted_ids)
    if rostered is not None:
        excluded.update(p.player_id for p in rostered.roster)

    available = [p for p in players if p.player_id not in excluded]

    logger.debug(
        f"Filtered player pool: {len(players)} → {len(available)} "
        f"({len(players) - len(available)} drafted players removed)"
    )

    return available
