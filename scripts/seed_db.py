"""
Seed script for the Civic Reports local storage.

Usage:
  - Add 3 demo reports to the configured storage: python scripts/seed_db.py
  - Add 10: python scripts/seed_db.py --count 10
  - Wipe existing reports first: python scripts/seed_db.py --clear

Behavior:
  - Uses `civic_reports.services.report_store.get_report_store()`, so the
    storage engine is whatever STORAGE_BACKEND selects in `.env`.
  - Every report goes through ReportStore.submit, exactly like a UI submission.
"""

import argparse
import asyncio

from civic_reports.core.exceptions import ReportStoreError
from civic_reports.core.log_config import configure_logging
from civic_reports.services.report_store import get_report_store
from civic_reports.utils.location import format_location

DEMO_REPORTS = [
    ("file:///demo/pothole.jpg", (18.5074, 73.8077), "Large pothole near the school gate"),
    ("file:///demo/streetlight.jpg", (18.5204, 73.8567), "Streetlight out on the main road for a week"),
    ("file:///demo/garbage.jpg", (18.5314, 73.8446), "Overflowing garbage bin outside the market"),
    ("file:///demo/leak.jpg", (18.4967, 73.8120), "Water pipe leaking onto the footpath"),
]


async def seed(count: int, clear: bool) -> None:
    store = get_report_store()
    await store.initialize()

    if clear:
        await store.clear_all()
        print("Cleared existing reports.")

    for i in range(count):
        photo, location, description = DEMO_REPORTS[i % len(DEMO_REPORTS)]
        try:
            report = await store.submit(photo, location, description)
            print(f"Wrote: {report.id} ({description}, {format_location(report.location)})")
        except ReportStoreError as e:
            print(f"Failed to write demo report {i + 1}: {e}")

    print(f"Seeding completed. Store now holds {store.count_total()} report(s).")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--count", type=int, default=3, help="Number of demo reports to add")
    parser.add_argument("--clear", action="store_true", help="Remove all existing reports first")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(seed(args.count, args.clear))


if __name__ == "__main__":
    main()
