"""
Data management script for the Complaint Tracker store.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Write sample data if the store is empty: python scripts/seed_db.py --apply
  - Clear and reseed sample data: python scripts/seed_db.py --apply --reset
  - Back up to a file: python scripts/seed_db.py --export backup.json
  - Restore from a file: python scripts/seed_db.py --apply --import backup.json

Behavior:
  - Uses the backend selected by STORAGE_BACKEND (.env or environment).
  - Without --apply nothing is written; the script only reports what it would do.
"""

import argparse
import json
import os
import sys

from complaint_tracker.services.sample_data import generate_sample_data
from complaint_tracker.services.storage_service import get_storage_service


def describe(data: dict) -> str:
    return f"{len(data.get('complaints', []))} complaint(s), {len(data.get('users', []))} user(s)"


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed, back up or restore complaint data")
    parser.add_argument("--apply", action="store_true", help="Write to the store instead of dry-run")
    parser.add_argument("--reset", action="store_true", help="Clear existing data before seeding")
    parser.add_argument("--export", metavar="PATH", help="Write a JSON backup to PATH")
    parser.add_argument("--import", dest="import_path", metavar="PATH", help="Restore a JSON backup from PATH")
    args = parser.parse_args()

    storage = get_storage_service()
    print(f"Storage: {storage.backend.describe()} (key: {storage.key})")

    if args.export:
        content = storage.export_data()
        with open(args.export, "w", encoding="utf-8") as f:
            f.write(content)
        print(f"Backup written to {args.export}")
        return 0

    if args.import_path:
        if not os.path.exists(args.import_path):
            print(f"Backup file not found: {args.import_path}")
            return 1
        with open(args.import_path, "r", encoding="utf-8") as f:
            content = f.read()
        try:
            backup = storage.parse_import(content)
        except ValueError as e:
            print(f"Invalid backup: {e}")
            return 1
        print(f"Prepared restore: {describe(backup)}")
        if not args.apply:
            print("Dry run complete. Re-run with --apply to restore.")
            return 0
        if not storage.save(backup):
            print("Restore failed.")
            return 1
        print("Restore completed.")
        return 0

    existing = storage.read_raw()
    if existing and not args.reset:
        try:
            summary = describe(json.loads(existing))
        except json.JSONDecodeError:
            summary = "unreadable document"
        print(f"Store already holds data: {summary}. Use --reset to replace it.")
        return 0

    sample = generate_sample_data()
    print(f"Prepared sample data: {describe(sample)}")
    if not args.apply:
        print("Dry run complete. Re-run with --apply to write to the store.")
        return 0

    if args.reset and not storage.clear():
        print("Failed to clear existing data.")
        return 1
    if not storage.save(sample):
        print("Seeding failed.")
        return 1
    print("Seeding completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
