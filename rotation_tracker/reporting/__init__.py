"""Post-game and live reporting."""

from .report import (
    GameReport,
    PlayerStintSummary,
    QuintetSummary,
    ReportInputError,
    build_report,
    format_time,
    real_substitution_count,
)

__all__ = [
    "GameReport",
    "PlayerStintSummary",
    "QuintetSummary",
    "ReportInputError",
    "build_report",
    "format_time",
    "real_substitution_count",
]
