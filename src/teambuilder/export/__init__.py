"""Roster export utilities."""

from .roster import HEADERS, export_roster_to_csv

__all__ = ["HEADERS", "export_roster_to_csv"]
