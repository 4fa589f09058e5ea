"""
Save-slot persistence for league snapshots.
"""
from .operations import save_game, load_game, has_save, delete_save
from .snapshot import SnapshotError, league_from_snapshot, snapshot_from_league

__all__ = [
    "save_game",
    "load_game",
    "has_save",
    "delete_save",
    "SnapshotError",
    "league_from_snapshot",
    "snapshot_from_league",
]
