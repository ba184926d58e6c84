"""Persistence for hourtracker."""

from hourtracker.db.store import DataStore

__all__ = ["DataStore"]
