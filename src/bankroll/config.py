"""Application configuration.

Configuration is built once by :func:`load_config` and handed to whoever
needs it; nothing reads settings from module state.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DB_PATH_ENV_VAR = "BANKROLL_DB_PATH"

DEFAULT_PLATFORM = "Global Poker"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024

DEFAULT_LOCATIONS = ("Rivers", "GVC", "Wind Creek", "Home Game", "Other")
DEFAULT_GAMES = ("NLHE", "PLO", "PLO5", "Mixed", "Other")
DEFAULT_BLINDS = ("$1/$3", "$2/$5", "$5/$10", "$10/$25", "$25/$50", "Other")


@dataclass(frozen=True)
class AppConfig:
    """Resolved settings for one run of the application."""

    database_path: str
    platform: str = DEFAULT_PLATFORM
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    locations: tuple[str, ...] = DEFAULT_LOCATIONS
    games: tuple[str, ...] = DEFAULT_GAMES
    blinds: tuple[str, ...] = DEFAULT_BLINDS

    def dropdown_options(self) -> dict[str, list[str]]:
        """Return the preset choices offered when entering a session."""
        return {
            "locations": list(self.locations),
            "games": list(self.games),
            "blinds": list(self.blinds),
        }


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Resolve the SQLite database location.

    Order: explicit argument, then the BANKROLL_DB_PATH environment variable,
    then ~/.bankroll/bankroll.db (the directory is created if missing).
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        db_dir = Path.home() / ".bankroll"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "bankroll.db")

    return database_path


def load_config(database_path: Optional[str] = None) -> AppConfig:
    """Build the application configuration."""
    return AppConfig(database_path=resolve_database_path(database_path))
