"""
Venue Booking - command line entry point
Version: 1.0

Evaluates one booking against the live scheduling API and prints the
verdict. Optionally submits it.

    python main.py 2026-11-02 17:00 18:00 --club "Robotics Club" --venue 3 --type closed_club
"""

import argparse
import asyncio
import os
import sys

from venue_booking.logging_config import configure_logging, get_logger

is_production = os.getenv('APP_ENV', 'development') == 'production'
configure_logging(json_format=is_production, log_level=os.getenv('LOG_LEVEL', 'INFO'))

logger = get_logger(__name__)

from config import get_settings  # noqa: E402
from venue_booking.api_gateway import APIGateway  # noqa: E402
from venue_booking.booking_contracts import EventType, WarningKind  # noqa: E402
from venue_booking.booking_session import BookingSession  # noqa: E402
from venue_booking.metrics import set_app_info  # noqa: E402


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a venue booking request.")
    parser.add_argument("date", help="Event date, YYYY-MM-DD")
    parser.add_argument("start", help="Start time, HH:MM (quarter hours)")
    parser.add_argument("end", help="End time, HH:MM (quarter hours)")
    parser.add_argument("--club", required=True, help="Organizing club name")
    parser.add_argument("--venue", action="append", default=[], help="Venue id (repeatable)")
    parser.add_argument(
        "--type",
        default=EventType.CLOSED_CLUB.value,
        choices=[t.value for t in EventType],
        help="Event type"
    )
    parser.add_argument("--name", default="", help="Event name")
    parser.add_argument("--attendees", default="", help="Attendee bracket, e.g. 50 or 500+")
    parser.add_argument("--submit", action="store_true", help="Submit when eligible")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    set_app_info(settings.APP_VERSION, settings.APP_ENV)

    gateway = APIGateway()
    session = BookingSession(gateway)
    try:
        if not await session.start():
            print(f"Unable to load form data: {session.catalog_error}")
            return 2

        session.update(
            event_name=args.name,
            event_type=args.type,
            expected_attendees=args.attendees,
            club_name=args.club,
            date=args.date,
            start_time=args.start,
            end_time=args.end,
            venue_ids=args.venue,
        )
        verdict = await session.wait_for_checks()

        for kind in WarningKind:
            message = verdict.message(kind)
            if message:
                print(f"[{kind.value}] {message}")
        print(f"submittable: {verdict.submittable}")

        if not args.submit:
            return 0 if verdict.submittable else 1

        result = await session.submit()
        print(result.message)
        return 0 if result.success else 1
    finally:
        await session.close()
        await gateway.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(run(parse_args())))
