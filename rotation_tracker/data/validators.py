"""Schema and consistency validators for rosters and game snapshots."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..models.quintet import quintet_key

SNAPSHOT_SCHEMA_VERSION = 1

_REQUIRED_SNAPSHOT_KEYS = ("schema_version", "config", "game", "clock", "players", "quintets", "event_log", "history")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number_list(value) -> bool:
    return isinstance(value, list) and all(_is_number(v) for v in value)


def validate_roster_payload(payload: Dict, court_size: int = 5) -> List[str]:
    errors: List[str] = []
    players = payload.get("players") if isinstance(payload, dict) else None
    if not isinstance(players, list) or not players:
        return ["roster payload must include non-empty 'players' list"]

    for idx, row in enumerate(players):
        if not isinstance(row, dict):
            errors.append(f"players[{idx}] must be an object")
            continue
        if not str(row.get("name") or "").strip():
            errors.append(f"players[{idx}] missing name")
        secondary = row.get("secondary_positions")
        if secondary is not None and not isinstance(secondary, list):
            errors.append(f"players[{idx}] secondary_positions must be a list")

    if len(players) < court_size:
        errors.append(f"roster needs at least {court_size} players; got {len(players)}")
    return errors




def _validate_player(idx: int, row: Dict) -> List[str]:
    errors: List[str] = []
    for key in ("id", "name"):
        if key not in row:
            errors.append(f"players[{idx}] missing field '{key}'")
    if "id" in row and not _is_int(row["id"]):
        errors.append(f"players[{idx}] id must be an integer; got {row['id']!r}")

    durations = row.get("stints") or []
    plus_minus = row.get("stint_plus_minus") or []
    if not _is_number_list(durations) or not _is_number_list(plus_minus):
        errors.append(f"players[{idx}] stints and stint_plus_minus must be lists of numbers")
    else:
        if len(durations) != len(plus_minus):
            errors.append(
                f"players[{idx}] has {len(durations)} stint durations but {len(plus_minus)} plus/minus values"
            )
        if any(d < 0 for d in durations):
            errors.append(f"players[{idx}] has invalid stint durations")

    on_court = bool(row.get("on_court"))
    start = row.get("current_stint_start")
    if start is not None and not (
        isinstance(start, dict) and all(_is_number(start.get(k)) for k in ("our_score", "rival_score", "clock_time"))
    ):
        errors.append(f"players[{idx}] has an invalid current_stint_start")
    if on_court and start is None:
        errors.append(f"players[{idx}] is on court without an open stint")
    if start is not None and not on_court:
        errors.append(f"players[{idx}] has an open stint but is not on court")

    for counter in ("points", "fouls"):
        value = row.get(counter, 0)
        if not _is_number(value) or value < 0:
            errors.append(f"players[{idx}] has invalid {counter}: {value!r}")

    secondary = row.get("secondary_positions") or []
    if not isinstance(secondary, list) or not all(isinstance(p, str) for p in secondary):
        errors.append(f"players[{idx}] secondary_positions must be a list of strings")

    shots = row.get("shot_stats") or {}
    if not isinstance(shots, dict) or not all(
        isinstance(counts, dict) and all(_is_int(counts.get(k, 0)) and counts.get(k, 0) >= 0 for k in ("made", "missed"))
        for counts in shots.values()
    ):
        errors.append(f"players[{idx}] has invalid shot_stats")
    return errors


def _player_ids_of(value) -> Optional[List[int]]:
    if not isinstance(value, list) or not all(_is_int(pid) for pid in value):
        return None
    return value


def _validate_quintets(quintets: Dict, on_court_ids: List[int], started: bool) -> List[str]:
    errors: List[str] = []
    intervals = quintets.get("intervals")
    if not isinstance(intervals, list):
        return ["quintets must include an 'intervals' list"]

    for idx, interval in enumerate(intervals):
        if not isinstance(interval, dict):
            errors.append(f"quintets.intervals[{idx}] must be an object")
            continue
        ids = _player_ids_of(interval.get("player_ids"))
        if ids is None:
            errors.append(f"quintets.intervals[{idx}] player_ids must be a list of integers")
        elif interval.get("key") != quintet_key(ids):
            errors.append(f"quintets.intervals[{idx}] key does not match its players")
        duration = interval.get("duration")
        if not _is_number(duration) or duration < 0:
            errors.append(f"quintets.intervals[{idx}] has invalid duration: {duration!r}")

    current = quintets.get("open")
    if current is not None and not isinstance(current, dict):
        return errors + [f"quintets.open must be an object or null; got {current!r}"]
    if current is not None and _player_ids_of(current.get("player_ids")) is None:
        errors.append("quintets.open player_ids must be a list of integers")
    if started:
        if not current:
            errors.append("game is in progress but no quintet is open")
        elif current.get("key") != quintet_key(on_court_ids):
            errors.append(
                f"open quintet {current.get('key')!r} does not match on-court players {quintet_key(on_court_ids)!r}"
            )
    elif current:
        errors.append("game has not started but a quintet is open")
    return errors


_RECORD_PLAYER_FIELDS = ("player_id", "outgoing_id", "incoming_id")


def _validate_history(history: List, players: Dict[int, Dict], known: set) -> List[str]:
    errors: List[str] = []
    for idx, record in enumerate(history):
        kind = record.get("kind") if isinstance(record, dict) else None
        if not isinstance(kind, str) or kind not in known:
            errors.append(f"history[{idx}] has unknown action kind {kind!r}")
            continue
        for key in _RECORD_PLAYER_FIELDS:
            player_id = record.get(key)
            if player_id is not None and (not _is_int(player_id) or player_id not in players):
                errors.append(f"history[{idx}].{key} refers to unknown player {player_id!r}")
    if errors or not history:
        return errors

    # Only the newest record can be checked against the live state
    last = history[-1]
    idx = len(history) - 1
    kind = last["kind"]
    if kind == "substitute":
        incoming = players.get(last.get("incoming_id"))
        outgoing = players.get(last.get("outgoing_id"))
        if incoming is None or outgoing is None:
            errors.append(f"history[{idx}] substitution is missing its players")
        else:
            if not incoming.get("on_court"):
                errors.append(f"history[{idx}] substituted in player {last['incoming_id']}, who is not on court")
            if outgoing.get("on_court"):
                errors.append(f"history[{idx}] substituted out player {last['outgoing_id']}, who is still on court")
    elif kind in ("foul_added", "foul_removed"):
        player = players.get(last.get("player_id"))
        previous = last.get("previous_fouls")
        if player is None or not _is_int(previous):
            errors.append(f"history[{idx}] foul record is incomplete")
        elif player.get("fouls") != (previous + 1 if kind == "foul_added" else previous - 1):
            errors.append(f"history[{idx}] foul count does not match player {last['player_id']}")
    return errors


def validate_snapshot(snapshot: Dict, known_action_kinds: Optional[Iterable[str]] = None) -> List[str]:
    """
    Check a game snapshot for structural and cross-field consistency.

    Every section is type-checked before it is read, so any input yields a
    list of errors rather than an exception.

    Args:
        snapshot: Decoded snapshot dict
        known_action_kinds: Undo record kinds the caller can rebuild

    Returns:
        List of error strings (empty when the snapshot is consistent)
    """
    if not isinstance(snapshot, dict):
        return ["snapshot must be an object"]

    missing = [k for k in _REQUIRED_SNAPSHOT_KEYS if k not in snapshot]
    if missing:
        return [f"snapshot missing fields: {', '.join(missing)}"]

    errors: List[str] = []
    version = snapshot.get("schema_version")
    if version != SNAPSHOT_SCHEMA_VERSION:
        errors.append(f"unsupported schema_version {version!r}; expected {SNAPSHOT_SCHEMA_VERSION}")

    for section in ("config", "game", "clock"):
        if not isinstance(snapshot.get(section), dict):
            errors.append(f"{section} must be an object")
    if errors:
        return errors

    court_size = snapshot["config"].get("court_size", 5)
    if not _is_int(court_size) or court_size < 1:
        errors.append(f"config.court_size must be a positive integer; got {court_size!r}")
        court_size = 5

    game = snapshot["game"]
    status = game.get("status")
    if status not in ("not_started", "in_progress", "finished"):
        errors.append(f"unknown game status: {status!r}")

    for key in ("our_score", "rival_score", "opening_substitutions", "lead_changes", "ties"):
        value = game.get(key, 0)
        if not _is_number(value) or value < 0:
            errors.append(f"game.{key} must be a non-negative number; got {value!r}")
    subs = game.get("substitutions_by_quarter") or {}
    if not isinstance(subs, dict):
        errors.append("game.substitutions_by_quarter must be an object")
        subs = {}
    for quarter, count in subs.items():
        if not _is_number(count) or count < 0:
            errors.append(f"game.substitutions_by_quarter[{quarter}] must be non-negative; got {count!r}")

    clock = snapshot["clock"]
    if not _is_number(clock.get("quarter")) or clock.get("quarter") < 1:
        errors.append(f"clock.quarter must be >= 1; got {clock.get('quarter')!r}")
    if not _is_number(clock.get("remaining")) or clock.get("remaining") < 0:
        errors.append(f"clock.remaining must be >= 0; got {clock.get('remaining')!r}")

    players = snapshot.get("players")
    if not isinstance(players, list) or not players:
        errors.append("snapshot must include non-empty 'players' list")
        players = []

    by_id: Dict[int, Dict] = {}
    on_court_ids: List[int] = []
    for idx, row in enumerate(players):
        if not isinstance(row, dict):
            errors.append(f"players[{idx}] must be an object")
            continue
        errors.extend(_validate_player(idx, row))
        player_id = row.get("id")
        if not _is_int(player_id):
            continue
        if player_id in by_id:
            errors.append(f"players[{idx}] duplicates id {player_id}")
        by_id[player_id] = row
        if row.get("on_court"):
            on_court_ids.append(player_id)

    started = status in ("in_progress", "finished")
    expected_on_court = court_size if started else 0
    if len(on_court_ids) != expected_on_court:
        errors.append(f"expected {expected_on_court} players on court for a {status} game; got {len(on_court_ids)}")

    quintets = snapshot.get("quintets")
    if not isinstance(quintets, dict):
        errors.append("quintets must be an object")
    else:
        errors.extend(_validate_quintets(quintets, on_court_ids, started))

    event_log = snapshot.get("event_log")
    if not isinstance(event_log, list) or not all(isinstance(event, dict) for event in event_log):
        errors.append("event_log must be a list of objects")

    history = snapshot.get("history")
    if not isinstance(history, list):
        errors.append("history must be a list")
    elif known_action_kinds is not None:
        errors.extend(_validate_history(history, by_id, set(known_action_kinds)))
    return errors
