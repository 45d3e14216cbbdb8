"""Main CLI interface for the rotation tracker."""

import argparse
import sys
from pathlib import Path

from .data.loader import DataLoader
from .engine import EngineConfig, MalformedSnapshot, RotationEngine
from .reporting import build_report, format_time


def new_game(args):
    """Create a game from a roster and put the starters on court."""
    print(f"Loading roster from {args.roster}...")

    try:
        config = EngineConfig(
            quarter_length_seconds=args.quarter_length,
            max_quarters=args.max_quarters,
        )
        entries = DataLoader.load_roster_from_json(args.roster, court_size=config.court_size)
    except (OSError, ValueError) as e:
        print(f"Error loading roster: {e}")
        return 1

    print(f"Loaded {len(entries)} players")
    engine = RotationEngine.new_game(
        entries,
        our_team_name=args.us,
        rival_team_name=args.rival,
        is_home_team=not args.away,
        config=config,
    )

    if args.starters:
        result = engine.start_game(args.starters)
        if not result.ok:
            print(f"Error: {result.message}")
            return 1
        names = ", ".join(engine.player(pid).label for pid in engine.on_court_ids)
        print(f"Starting lineup: {names}")

    DataLoader.save_snapshot(engine.close(), args.output)
    print(f"✓ Game saved to {args.output}")
    return 0


def _run_step(engine: RotationEngine, step: dict):
    """Run one scripted step; returns an ActionResult or None for clock steps."""
    kind = step["type"]
    if kind == "tick":
        engine.tick(float(step.get("seconds", 0)))
    elif kind == "pause":
        engine.pause()
    elif kind == "resume":
        engine.resume()
    elif kind == "start_quarter":
        engine.start_quarter()
    elif kind == "substitute":
        return engine.substitute(int(step["out"]), int(step["in"]))
    elif kind == "points":
        player = step.get("player")
        return engine.add_points(step.get("side", "us"), step["amount"], int(player) if player is not None else None)
    elif kind == "foul":
        return engine.add_foul(int(step["player"]))
    elif kind == "remove_foul":
        return engine.remove_foul(int(step["player"]))
    elif kind == "miss":
        return engine.add_miss(int(step["player"]), step["value"])
    elif kind == "free_throws":
        return engine.add_free_throws(int(step["player"]), step["attempts"], step["made"])
    elif kind == "advance_quarter":
        return engine.advance_quarter()
    elif kind == "edit":
        return engine.edit_player(int(step["player"]), **step.get("changes", {}))
    elif kind == "undo":
        return engine.undo_last()
    elif kind == "finish":
        return engine.finish_game()
    else:
        raise ValueError(f"Unknown action type: {kind}")
    return None


def play_actions(args):
    """Replay an action script against a saved game."""
    try:
        snapshot = DataLoader.load_snapshot(args.snapshot)
        steps = DataLoader.load_actions(args.actions)
        engine = RotationEngine.from_snapshot(snapshot)
    except MalformedSnapshot as e:
        print(f"Error: snapshot {args.snapshot} is malformed")
        for error in e.errors:
            print(f"  - {error}")
        return 1
    except (OSError, ValueError) as e:
        print(f"Error loading data: {e}")
        return 1

    print(f"Replaying {len(steps)} actions...")
    rejected = 0
    for idx, step in enumerate(steps):
        try:
            result = _run_step(engine, step)
        except (KeyError, TypeError, ValueError) as e:
            print(f"  [{idx}] {step.get('type')}: invalid step ({e})")
            rejected += 1
            continue
        if result is None:
            continue
        if not result.ok:
            rejected += 1
            print(f"  [{idx}] {result.action} rejected: {result.error} {result.message}")
        for advisory in result.advisories:
            print(f"  [{idx}] {result.action}: {advisory}")

    output = args.output or args.snapshot
    DataLoader.save_snapshot(engine.close(), output)
    game = engine.game
    print(f"Score: {game.our_team_name} {game.our_score} - {game.rival_score} {game.rival_team_name}")
    print(f"Quarter {engine.quarter}, game time {format_time(engine.game_time)}")
    if rejected:
        print(f"{rejected} actions rejected")
    print(f"✓ Game saved to {output}")
    return 0


def report_game(args):
    """Build a rotation report from a saved game."""
    try:
        snapshot = DataLoader.load_snapshot(args.snapshot)
        # Rehydrating validates the snapshot before it is summarized
        RotationEngine.from_snapshot(snapshot)
    except MalformedSnapshot as e:
        print(f"Error: snapshot {args.snapshot} is malformed")
        for error in e.errors:
            print(f"  - {error}")
        return 1
    except (OSError, ValueError) as e:
        print(f"Error loading data: {e}")
        return 1

    report = build_report(snapshot)

    print("=" * 60)
    print(f"{report.our_team_name} {report.our_score} - {report.rival_score} {report.rival_team_name} ({report.status})")
    print(f"Substitutions: {report.real_substitutions}")
    print("\nQuintets by time:")
    for quintet in report.quintets_by_time[:args.top]:
        print(
            f"  {format_time(quintet.total_time):>6}  {quintet.differential:+d}  "
            f"{', '.join(quintet.player_names)}"
        )
    print("\nPlayers:")
    for player in report.player_stints:
        print(
            f"  #{player.number:<3} {player.name:<20} {format_time(player.total_time):>6}  "
            f"{player.stint_count} stints  {player.plus_minus:+d}"
        )

    if args.output:
        DataLoader.save_report(report, args.output)
        print(f"\n✓ Report saved to {args.output}")

    if args.csv_dir:
        csv_dir = Path(args.csv_dir)
        csv_dir.mkdir(parents=True, exist_ok=True)
        for name, frame in report.to_frames().items():
            frame.to_csv(csv_dir / f"{name}.csv", index=False)
        print(f"✓ CSV tables written to {csv_dir}")
    return 0


def recommend(args):
    """Print substitution suggestions for the current state of a saved game."""
    try:
        engine = RotationEngine.from_snapshot(DataLoader.load_snapshot(args.snapshot))
    except MalformedSnapshot as e:
        print(f"Error: snapshot {args.snapshot} is malformed")
        for error in e.errors:
            print(f"  - {error}")
        return 1
    except (OSError, ValueError) as e:
        print(f"Error loading data: {e}")
        return 1

    recommendations = engine.recommend_substitutions()
    if not recommendations:
        print("No substitutions suggested")
        return 0

    def labels(ids):
        return ", ".join(engine.player(pid).label for pid in ids) or "-"

    for rec in recommendations:
        outgoing = engine.player(rec.outgoing_id)
        print(f"{outgoing.label} ({rec.reason}, {rec.fouls} fouls, {format_time(rec.court_seconds)} on court)")
        print(f"  same position: {labels(rec.same_position)}")
        print(f"  other position: {labels(rec.cross_position)}")
    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Basketball rotation tracker - stints, quintets and plus/minus"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # New game command
    new_parser = subparsers.add_parser("new", help="Create a game from a roster")
    new_parser.add_argument("--roster", "-r", required=True, help="Roster JSON file with a 'players' list")
    new_parser.add_argument(
        "--starters",
        type=int,
        nargs="+",
        default=None,
        help="Player ids of the opening lineup (ids follow roster order, from 1)",
    )
    new_parser.add_argument("--us", default="Us", help="Our team name")
    new_parser.add_argument("--rival", default="Rival", help="Rival team name")
    new_parser.add_argument("--away", action="store_true", help="We are the away team")
    new_parser.add_argument("--quarter-length", type=float, default=600.0, help="Quarter length in seconds (default: 600)")
    new_parser.add_argument("--max-quarters", type=int, default=4, help="Quarters allowed incl. overtime (default: 4)")
    new_parser.add_argument("--output", "-o", default="game.json", help="Output snapshot (default: game.json)")

    # Play command
    play_parser = subparsers.add_parser("play", help="Replay an action script against a saved game")
    play_parser.add_argument("--snapshot", "-s", required=True, help="Saved game snapshot")
    play_parser.add_argument("--actions", "-a", required=True, help="JSON list of actions")
    play_parser.add_argument("--output", "-o", default=None, help="Output snapshot (default: overwrite input)")

    # Report command
    report_parser = subparsers.add_parser("report", help="Summarize quintets and player stints")
    report_parser.add_argument("--snapshot", "-s", required=True, help="Saved game snapshot")
    report_parser.add_argument("--output", "-o", default=None, help="Output report JSON")
    report_parser.add_argument("--csv-dir", default=None, help="Directory for CSV tables")
    report_parser.add_argument("--top", type=int, default=10, help="Quintets to print (default: 10)")

    # Recommend command
    recommend_parser = subparsers.add_parser("recommend", help="Suggest substitutions for tired or foul-troubled players")
    recommend_parser.add_argument("--snapshot", "-s", required=True, help="Saved game snapshot")

    args = parser.parse_args(argv)

    if args.command == "new":
        return new_game(args)
    elif args.command == "play":
        return play_actions(args)
    elif args.command == "report":
        return report_game(args)
    elif args.command == "recommend":
        return recommend(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
