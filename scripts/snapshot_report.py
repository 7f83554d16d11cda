#!/usr/bin/env python3
"""
Print timetable and swimmer reports from a coaching data snapshot.

Reads a JSON snapshot exported from the coaching app and prints either
a day's timetable layout, a swimmer's attendance/distance figures, or
search results. Handy for checking numbers against the app without
running the API.

Usage:
    python scripts/snapshot_report.py snapshot.json day 2026-10-14
    python scripts/snapshot_report.py snapshot.json swimmer <swimmer-id> [--now 2026-10-18]
    python scripts/snapshot_report.py snapshot.json search "freestyle"

Requires:
    - .env file (optional) for DAY_ORIGIN, HOUR_HEIGHT_PX, LAYOUT_STRATEGY
"""

import sys
from datetime import date, datetime
from pathlib import Path

# Add project root to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from src.config.settings import get_settings  # noqa: E402
from src.core.analytics.attendance import attendance_stats  # noqa: E402
from src.core.analytics.distance import distance_stats  # noqa: E402
from src.core.search.engine import render_highlight, search_sessions  # noqa: E402
from src.core.timetable.layout import layout_timetable, strategy_for  # noqa: E402
from src.infrastructure.snapshot import CoachingSnapshot, SnapshotLoadError, load_snapshot  # noqa: E402


def report_day(snapshot: CoachingSnapshot, day: date) -> None:
    settings = get_settings()
    timetable = layout_timetable(
        snapshot.sessions,
        squads=snapshot.squads,
        locations=snapshot.locations,
        day=day,
        day_origin_minutes=settings.day_origin_minutes,
        hour_height_px=settings.hour_height_px,
        strategy=strategy_for(settings.layout_strategy),
    )

    print(f"{day:%A %d %B %Y}")
    if timetable.is_empty:
        print("  No sessions scheduled for this day")
        return

    for column in timetable.columns:
        print(f"\n  {column.location.name}")
        for block in column.blocks:
            rect = block.rect
            print(
                f"    {block.time_label}  {block.squad_name:<20} "
                f"top={rect.top:7.1f}px h={rect.height:6.1f}px "
                f"left={rect.left:5.1f}% w={rect.width:5.1f}%  {block.focus}"
            )


def report_swimmer(snapshot: CoachingSnapshot, swimmer_id: str, now: datetime) -> None:
    swimmer = next((s for s in snapshot.swimmers if s.id == swimmer_id), None)
    name = swimmer.full_name if swimmer else swimmer_id

    stats = attendance_stats(
        swimmer_id,
        snapshot.sessions,
        snapshot.attendance,
        now=now,
        trend_months=get_settings().trend_months,
    )
    distance = distance_stats(swimmer_id, snapshot.sessions, snapshot.attendance, now=now)

    print(f"{name} (as of {now:%Y-%m-%d})")
    print(f"  Overall:    {stats.overall_percentage:3d}%  ({stats.attended}/{stats.total})")
    print(f"  This week:  {stats.this_week.percentage:3d}%  ({stats.this_week.attended}/{stats.this_week.total})")
    print(f"  This month: {stats.this_month.percentage:3d}%  ({stats.this_month.attended}/{stats.this_month.total})")
    print(
        f"  On time:    {stats.on_time_percentage:3d}%  "
        f"(late {stats.late_count}, very late {stats.very_late_count})"
    )
    print("  By day:     " + "  ".join(f"{r.label} {r.percentage}%" for r in stats.by_weekday))
    print("  By month:   " + "  ".join(f"{r.label} {r.percentage}%" for r in stats.by_month))
    print(
        f"  Distance:   {distance.this_week_km:.1f} km week, "
        f"{distance.this_month_km:.1f} km month, {distance.this_year_km:.1f} km year"
    )


def report_search(snapshot: CoachingSnapshot, query: str) -> None:
    settings = get_settings()
    results = search_sessions(
        snapshot.sessions,
        snapshot.squads,
        snapshot.coaches,
        snapshot.locations,
        query,
        excerpt_radius=settings.excerpt_radius,
        preview_length=settings.preview_length,
    )

    print(f"{len(results)} session(s) matching '{query}'")
    for result in results:
        session = result.session
        print(
            f"\n  {session.date} {session.start_time}  {result.squad_name} @ {result.location_name}"
            f"  [{', '.join(result.matched_fields)}]"
        )
        if result.preview:
            print(f"    {render_highlight(result.preview, query, '[', ']')}")


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Reports from a coaching data snapshot')
    parser.add_argument('snapshot', help='Snapshot JSON file')
    subparsers = parser.add_subparsers(dest='command', required=True)

    day_parser = subparsers.add_parser('day', help='Timetable layout for a day')
    day_parser.add_argument('day', type=date.fromisoformat, help='Day (YYYY-MM-DD)')

    swimmer_parser = subparsers.add_parser('swimmer', help='Attendance and distance for a swimmer')
    swimmer_parser.add_argument('swimmer_id', help='Swimmer id')
    swimmer_parser.add_argument(
        '--now',
        type=datetime.fromisoformat,
        default=None,
        help='Reference date (default: now)',
    )

    search_parser = subparsers.add_parser('search', help='Search sessions')
    search_parser.add_argument('query', help='Search text')

    args = parser.parse_args()

    try:
        snapshot = load_snapshot(args.snapshot)
    except SnapshotLoadError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if args.command == 'day':
        report_day(snapshot, args.day)
    elif args.command == 'swimmer':
        report_swimmer(snapshot, args.swimmer_id, args.now or datetime.now())
    elif args.command == 'search':
        report_search(snapshot, args.query)


if __name__ == '__main__':
    main()
