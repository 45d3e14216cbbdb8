"""Data loader for rosters, game snapshots and action scripts."""

import json
import logging
import os
from typing import Dict, List

from .validators import validate_roster_payload

logger = logging.getLogger(__name__)


class DataRequirementError(ValueError):
    """Raised when a required input file is missing or unusable."""


class DataLoader:
    """Loads and saves tracker data as JSON files."""

    @staticmethod
    def load_roster_from_json(file_path: str, court_size: int = 5) -> List[Dict]:
        """
        Load an ordered roster from a JSON file.

        Args:
            file_path: Path to JSON file with a ``players`` list
            court_size: Minimum number of players required

        Returns:
            Roster entries in file order (ids are assigned from this order)
        """
        with open(file_path, 'r') as f:
            data = json.load(f)

        errors = validate_roster_payload(data, court_size=court_size)
        if errors:
            raise DataRequirementError(f"Invalid roster {file_path}: " + "; ".join(errors))

        return [
            {
                "name": entry["name"],
                "number": str(entry.get("number", "")),
                "position": entry.get("position"),
                "secondary_positions": list(entry.get("secondary_positions") or []),
            }
            for entry in data["players"]
        ]

    @staticmethod
    def load_snapshot(file_path: str) -> Dict:
        """Load a saved game snapshot (validated later, on rehydration)."""
        with open(file_path, 'r') as f:
            return json.load(f)

    @staticmethod
    def save_snapshot(snapshot: Dict, file_path: str) -> None:
        """
        Save a game snapshot to a JSON file.

        Args:
            snapshot: Snapshot dict from the engine
            file_path: Output file path
        """
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(file_path, 'w') as f:
            json.dump(snapshot, f, indent=2)
        logger.debug("Saved snapshot to %s", file_path)

    @staticmethod
    def load_actions(file_path: str) -> List[Dict]:
        """
        Load an action script.

        Accepts either a bare list of steps or ``{"actions": [...]}``.
        """
        with open(file_path, 'r') as f:
            data = json.load(f)

        steps = data.get("actions") if isinstance(data, dict) else data
        if not isinstance(steps, list):
            raise DataRequirementError(f"{file_path} must contain a list of actions")
        for idx, step in enumerate(steps):
            if not isinstance(step, dict) or "type" not in step:
                raise DataRequirementError(f"actions[{idx}] must be an object with a 'type'")
        return steps

    @staticmethod
    def save_report(report, file_path: str) -> None:
        """Save a game report (anything with ``to_dict``) to a JSON file."""
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(file_path, 'w') as f:
            json.dump(report.to_dict(), f, indent=2)
