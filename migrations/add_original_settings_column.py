#!/usr/bin/env python3
"""
Migration script to add the original_settings column to the shot_logs table
and backfill it from selected_settings.

Stores created before shot logs tracked user edits have no record of the
settings picked before editing; for those logs the selected settings are the
best available answer.
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from database.db_manager import DatabaseManager


def add_original_settings_column(conn) -> int:
    """
    Add and backfill shot_logs.original_settings.

    Args:
        conn: Open sqlite3 connection with row_factory set to sqlite3.Row

    Returns:
        Number of shot logs backfilled
    """
    cursor = conn.execute("PRAGMA table_info(shot_logs)")
    columns = {row['name'] for row in cursor.fetchall()}

    if 'original_settings' not in columns:
        print("Adding original_settings column...")
        conn.execute("ALTER TABLE shot_logs ADD COLUMN original_settings TEXT")
        print("✓ original_settings column added")
    else:
        print("✓ original_settings column already exists")

    cursor = conn.execute(
        """UPDATE shot_logs
           SET original_settings = selected_settings
           WHERE original_settings IS NULL"""
    )
    conn.commit()
    return cursor.rowcount


def migrate(config_path: str):
    """Run the migration against the configured database."""
    db = DatabaseManager.from_config(config_path)

    print("=" * 80)
    print("Adding original_settings column to shot_logs table")
    print("=" * 80)

    backfilled = add_original_settings_column(db.conn)
    print(f"\n✓ Backfilled {backfilled} shot logs")

    print("=" * 80)
    print("Migration completed successfully!")
    print("=" * 80)

    db.close()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        '--config',
        default=str(Path(__file__).parent.parent / 'config.yaml'),
        help='Path to config file'
    )
    migrate(parser.parse_args().config)
