"""Roster builder for baseball card pools."""

from teambuilder.models import Card
from teambuilder.optimizer import RosterResult, build_roster
from teambuilder.pool import Metric

__all__ = ["Card", "Metric", "RosterResult", "build_roster"]
