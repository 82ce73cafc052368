#!/usr/bin/env python3
"""
Initialize the inspection database.

Creates all necessary tables for storing properties, inspections and
inspection photos with their AI analysis results.
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from data.database import DatabaseManager
from data.db_models import Base


def main():
    parser = argparse.ArgumentParser(
        description='Initialize inspection database'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='Database URL (default: DATABASE_URL setting)'
    )
    parser.add_argument(
        '--drop-existing',
        action='store_true',
        help='Drop existing tables before creating new ones (WARNING: destroys data!)'
    )

    args = parser.parse_args()

    # Create database manager
    db_manager = DatabaseManager(args.database_url)

    print("=" * 60)
    print("Inspection Database Initialization")
    print("=" * 60)
    print(f"Database URL: {db_manager.database_url}")
    print()

    # Drop tables if requested
    if args.drop_existing:
        confirm = input("⚠️  Drop existing tables? This will DELETE ALL DATA! (yes/no): ")
        if confirm.lower() == 'yes':
            db_manager.drop_tables()
            print()
        else:
            print("Aborted.")
            return

    # Create tables
    db_manager.create_tables()

    print()
    print("✓ Database initialized successfully!")
    print()
    print("Tables created:")
    for table in Base.metadata.sorted_tables:
        print(f"  - {table.name}")
    print()
    print("You can now:")
    print("  1. Start the API server: uvicorn serving.report_api:app --port 8002")
    print("  2. Compare inspection exports: python cli_report.py compare entry.json exit.json")
    print()


if __name__ == '__main__':
    main()
