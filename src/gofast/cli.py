#!/usr/bin/env python3
"""
GoFast CLI.

Pre-fill group runs from pasted text and manage the run club directory.

Usage:
    gofast extract --social-file post.txt --city Boston
    gofast extract --web-text "Tuesday track workout, meets at 6:30pm" --json
    gofast clubs add --id club-1 --name "Back Bay Runners" --city Boston
    gofast clubs list
    gofast clubs remove --id club-1
    gofast serve --port 8000
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from .config import get_settings
from .db.run_club_repository import RunClubRepository
from .exceptions import NoSourceInputError, RunClubNotFoundError
from .models.clubs import RunClub
from .models.runs import RawSourceBundle, RunData
from .services.run_generation import RunGenerationService
from .utils.log_sanitizer import install_log_sanitizer

console = Console()


def _read_text_arg(text: Optional[str], path: Optional[str]) -> Optional[str]:
    """Inline text wins; otherwise read a file, or stdin for ``-``."""
    if text:
        return text
    if not path:
        return None
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _get_repository() -> RunClubRepository:
    return RunClubRepository(str(get_settings().database_path))


def _slugify(name: str) -> str:
    return "-".join(part for part in "".join(
        ch.lower() if ch.isalnum() else " " for ch in name
    ).split())


def render_run_data(run_data: RunData) -> None:
    """Print a run draft as a table followed by its description."""
    table = Table(title="Run Draft", box=box.ROUNDED)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for name, value in run_data.model_dump(by_alias=True, mode="json").items():
        if name == "description":
            continue
        table.add_row(name, "[dim]-[/dim]" if value is None else str(value))

    console.print(table)
    console.print(Panel(run_data.description or "", title="Description", box=box.ROUNDED))


def cmd_extract(args) -> int:
    """Extract run fields from pasted sources."""
    bundle = RawSourceBundle(
        strava_url=args.strava_url,
        strava_text=_read_text_arg(args.strava_text, args.strava_file),
        web_url=args.web_url,
        web_text=_read_text_arg(args.web_text, args.web_file),
        social_post_text=_read_text_arg(args.social_text, args.social_file),
        contextual_city=args.city,
    )

    repository = _get_repository() if args.club else None
    service = RunGenerationService(
        run_club_repository=repository,
        max_source_chars=get_settings().max_source_chars,
    )
    if args.club and not bundle.contextual_city:
        bundle = bundle.model_copy(update={"contextual_city": service.resolve_city(args.club)})

    try:
        run_data = service.generate(bundle)
    except NoSourceInputError as e:
        console.print(f"[red]{e.message}[/red]")
        console.print("Pass at least one of --strava-text, --web-text, --social-text, "
                      "--strava-url or --web-url (or a --*-file).")
        return 2

    if args.json:
        payload = {"success": True, "runData": run_data.model_dump(by_alias=True, mode="json")}
        print(json.dumps(payload, indent=2))
    else:
        render_run_data(run_data)
    return 0


def cmd_clubs_add(args) -> int:
    """Add or update a run club."""
    club = RunClub(
        id=args.id,
        slug=args.slug or _slugify(args.name),
        name=args.name,
        city=args.city,
    )
    saved = _get_repository().save(club)
    console.print(f"[green]Saved run club[/green] {saved.name} ({saved.id})")
    return 0


def cmd_clubs_list(args) -> int:
    """List run clubs."""
    clubs = _get_repository().list_all()
    if not clubs:
        console.print("No run clubs yet. Add one with: gofast clubs add --id ID --name NAME --city CITY")
        return 0

    table = Table(title="Run Clubs", box=box.ROUNDED)
    table.add_column("ID", style="cyan")
    table.add_column("Slug")
    table.add_column("Name")
    table.add_column("City")
    for club in clubs:
        table.add_row(club.id, club.slug, club.name, club.city or "-")
    console.print(table)
    return 0


def cmd_clubs_remove(args) -> int:
    """Remove a run club."""
    try:
        _get_repository().delete(args.id)
    except RunClubNotFoundError as e:
        console.print(f"[red]{e.message}[/red]")
        return 1
    console.print(f"Removed run club {args.id}")
    return 0


def cmd_serve(args) -> int:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "gofast.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gofast",
        description="GoFast - pre-fill group runs from pasted text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gofast extract --social-file post.txt --city Boston
  gofast extract --web-text "Track Tuesday 6:30pm, 5 miles" --json
  gofast clubs add --id club-1 --name "Back Bay Runners" --city Boston
  gofast clubs list
  gofast serve --port 8000
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Extract command
    extract_p = subparsers.add_parser("extract", help="Build a run draft from pasted text")
    extract_p.add_argument("--strava-url", help="Strava route or activity URL")
    extract_p.add_argument("--strava-text", help="Text copied from Strava")
    extract_p.add_argument("--strava-file", help="File with Strava text ('-' for stdin)")
    extract_p.add_argument("--web-url", help="Club web page URL")
    extract_p.add_argument("--web-text", help="Text copied from a web page")
    extract_p.add_argument("--web-file", help="File with web text ('-' for stdin)")
    extract_p.add_argument("--social-text", help="Social post caption")
    extract_p.add_argument("--social-file", help="File with a social post caption ('-' for stdin)")
    extract_p.add_argument("--city", help="City of the run club")
    extract_p.add_argument("--club", help="Run club id; its city is used when --city is not given")
    extract_p.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    # Clubs commands
    clubs_p = subparsers.add_parser("clubs", help="Manage run clubs")
    clubs_sub = clubs_p.add_subparsers(dest="clubs_command")

    add_p = clubs_sub.add_parser("add", help="Add or update a run club")
    add_p.add_argument("--id", required=True, help="Run club id")
    add_p.add_argument("--name", required=True, help="Display name")
    add_p.add_argument("--slug", help="URL slug (derived from the name if omitted)")
    add_p.add_argument("--city", help="Home city")

    clubs_sub.add_parser("list", help="List run clubs")

    remove_p = clubs_sub.add_parser("remove", help="Remove a run club")
    remove_p.add_argument("--id", required=True, help="Run club id")

    # Serve command
    serve_p = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", help="Bind address")
    serve_p.add_argument("--port", type=int, help="Port")
    serve_p.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=get_settings().log_level.upper())
    install_log_sanitizer()

    if args.command == "extract":
        return cmd_extract(args)
    elif args.command == "clubs":
        if args.clubs_command == "add":
            return cmd_clubs_add(args)
        elif args.clubs_command == "list":
            return cmd_clubs_list(args)
        elif args.clubs_command == "remove":
            return cmd_clubs_remove(args)
        parser.print_help()
        return 1
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
