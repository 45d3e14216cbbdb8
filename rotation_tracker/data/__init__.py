"""Roster, snapshot and action file IO."""

from .loader import DataLoader
from .validators import validate_roster_payload, validate_snapshot

__all__ = ["DataLoader", "validate_roster_payload", "validate_snapshot"]
