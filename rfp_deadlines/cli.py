"""Command-line entry point: extract deadlines, export .ics, report urgency, sync.

Deadline files are JSON lists shaped like
``{"date": "2026-03-15", "time": "14:00", "label": "...", "context": "...",
"completed": false, "rfpName": "..."}``.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from .calendar_event import build_calendar_event
from .errors import RfpDeadlinesError
from .extraction import (
    extract_deadlines,
    extract_deadlines_from_image,
    image_mime_type,
    is_image_path,
)
from .extractors import get_extractor
from .ics import CALENDAR_NAME, serialize_many
from .models import Deadline
from .urgency import deadline_urgency, summarize_deadlines

logger = logging.getLogger(__name__)


def load_deadlines(path: Path) -> list[Deadline]:
    """Read a JSON list of deadlines from *path*."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of deadlines")
    return [Deadline.from_dict(raw) for raw in data]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_extract(args: argparse.Namespace) -> int:
    extractor = get_extractor(args.extractor)
    path = Path(args.path)

    if is_image_path(path.name):
        candidates = extract_deadlines_from_image(
            path.read_bytes(), image_mime_type(path.name), extractor,
        )
    else:
        candidates = extract_deadlines(path.read_text(encoding="utf-8"), extractor)

    print(json.dumps([c.to_dict() for c in candidates], indent=2))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    deadlines = load_deadlines(Path(args.path))
    if not args.include_completed:
        deadlines = [d for d in deadlines if not d.completed]
    if not deadlines:
        print("No incomplete deadlines to export.", file=sys.stderr)
        return 1

    deadlines.sort(key=lambda d: d.date)
    ics = serialize_many([build_calendar_event(d) for d in deadlines], args.name)
    if args.output:
        Path(args.output).write_text(ics, encoding="utf-8", newline="")
        print(f"Wrote {len(deadlines)} deadline(s) to {args.output}")
    else:
        sys.stdout.write(ics)
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    now = datetime.fromisoformat(args.now) if args.now else datetime.now(timezone.utc)
    deadlines = load_deadlines(Path(args.path))

    for d in sorted(deadlines, key=lambda d: d.date):
        level = deadline_urgency(d, now)
        when = d.date.isoformat() + (f" {d.time:%H:%M}" if d.time else "")
        print(f"  [{level.value:<9}] {when}  {d.label} - {d.rfp_name}")

    summary = summarize_deadlines(deadlines, now)
    print(
        f"Overdue: {summary.overdue}, This week: {summary.this_week}, "
        f"Next 7 days: {summary.upcoming}"
    )
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    from . import gcal

    calendar_id = os.environ.get("GOOGLE_CALENDAR_ID", "primary")
    deadlines = [d for d in load_deadlines(Path(args.path)) if not d.completed]
    print(f"Found {len(deadlines)} incomplete deadline(s).")

    service = gcal.build_calendar_service()
    existing = gcal.get_existing_events(service, calendar_id)
    print(f"Found {len(existing)} existing events in Google Calendar.")

    created = updated = 0
    for d in deadlines:
        event = build_calendar_event(d)
        action = gcal.upsert_event(service, calendar_id, event, existing)
        if action == "created":
            created += 1
        else:
            updated += 1
        print(f"  [{action}] {event.title}")

    print(f"Done. Created: {created}, Updated: {updated}")
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rfp-deadlines",
        description="Extract RFP deadlines and export them as calendar events.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("extract", help="Extract deadline candidates from a text file or image")
    p.add_argument("path")
    p.add_argument("--extractor", default=os.environ.get("RFP_EXTRACTOR", "openai"),
                   help="Extractor name (default: $RFP_EXTRACTOR or openai)")
    p.set_defaults(func=cmd_extract)

    p = sub.add_parser("export", help="Write deadlines to an .ics calendar")
    p.add_argument("path", help="JSON list of deadlines")
    p.add_argument("-o", "--output", help="Output .ics file (default: stdout)")
    p.add_argument("--name", default=CALENDAR_NAME, help="Calendar name")
    p.add_argument("--include-completed", action="store_true",
                   help="Also export completed deadlines")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("status", help="Show urgency of each deadline")
    p.add_argument("path", help="JSON list of deadlines")
    p.add_argument("--now", help="Reference instant (ISO 8601, default: current time)")
    p.set_defaults(func=cmd_status)

    p = sub.add_parser("sync", help="Create or update deadlines in Google Calendar")
    p.add_argument("path", help="JSON list of deadlines")
    p.set_defaults(func=cmd_sync)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (RfpDeadlinesError, RuntimeError, ValueError, KeyError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
