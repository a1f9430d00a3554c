"""Configuration helpers for league sync settings."""

from .league import LeagueConfig, load_config, resolve_db_path

__all__ = [
    "LeagueConfig",
    "load_config",
    "resolve_db_path",
]
