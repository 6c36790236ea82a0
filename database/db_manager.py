"""
Database Manager

Provides the SQLite record store for usernames and shot logs.
"""

import sqlite3
import os
import json
import uuid
import logging
from typing import Optional, List, Dict
from datetime import datetime
from contextlib import contextmanager
import yaml

# Import models
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import ShotLog

logger = logging.getLogger(__name__)

USERS_TABLE = 'users'
SHOT_LOGS_TABLE = 'shot_logs'

# Columns holding JSON-encoded records, keyed by ShotLog.to_dict() field
JSON_COLUMNS = (
    'camera', 'lens', 'film_stock', 'lighting_condition',
    'recommended_settings', 'alternative_settings',
    'original_settings', 'selected_settings',
)


class DatabaseManager:
    """
    Manages the database connection and shot-log operations.

    Shot logs are always scoped by username: a log can only be read,
    updated or deleted through the username that owns it.

    Attributes:
        db_type: Type of database (only 'sqlite' is supported)
        connection_string: Path to the SQLite database file, or ':memory:'
        conn: Active database connection

    Example:
        >>> db = DatabaseManager.from_config('config.yaml')
        >>> db.get_or_create_username('ansel')
        >>> saved = db.save_shot_log('ansel', shot_log)
        >>> logs = db.load_shot_logs('ansel')
    """

    def __init__(self, db_type: str = 'sqlite', connection_string: str = 'filmmate.db'):
        """
        Initialize database manager.

        Args:
            db_type: Type of database ('sqlite')
            connection_string: Path for SQLite
        """
        if db_type != 'sqlite':
            raise ValueError(f"Unsupported database type: {db_type}")

        self.db_type = db_type
        self.connection_string = connection_string
        self.conn = None

        # Initialize connection
        self._connect()

        # Initialize schema if needed
        self._initialize_schema()

    @classmethod
    def from_config(cls, config_path: str = 'config.yaml') -> 'DatabaseManager':
        """
        Create DatabaseManager from configuration file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Configured DatabaseManager instance
        """
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        db_config = config.get('database', {})
        db_type = db_config.get('type', 'sqlite')

        if db_type != 'sqlite':
            raise ValueError(f"Unsupported database type: {db_type}")

        connection_string = db_config.get('sqlite', {}).get('path', 'filmmate.db')
        return cls(db_type=db_type, connection_string=os.path.expanduser(connection_string))

    def _connect(self):
        """Establish database connection."""
        self.conn = sqlite3.connect(self.connection_string, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        # Enable foreign key constraints
        self.conn.execute("PRAGMA foreign_keys = ON")
        logger.info(f"Connected to SQLite database: {self.connection_string}")

    def _initialize_schema(self):
        """Initialize database schema if tables don't exist."""
        schema_path = os.path.join(
            os.path.dirname(__file__),
            'schema.sql'
        )

        with open(schema_path, 'r') as f:
            schema_sql = f.read()

        self.conn.executescript(schema_sql)
        self.conn.commit()
        logger.debug("Database schema initialized")

    @contextmanager
    def get_cursor(self):
        """
        Context manager for database cursors.

        Commits on success, rolls back and re-raises on error.

        Yields:
            Database cursor

        Example:
            >>> with db.get_cursor() as cursor:
            ...     cursor.execute("SELECT * FROM users")
            ...     rows = cursor.fetchall()
        """
        cursor = self.conn.cursor()
        try:
            yield cursor
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            cursor.close()

    def close(self):
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.info("Database connection closed")

    def test_connection(self):
        """
        Verify that the store is reachable and its tables are in place.

        Raises:
            RuntimeError: If a table or the original_settings column is missing
        """
        with self.get_cursor() as cursor:
            cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            tables = {row['name'] for row in cursor.fetchall()}

            for table in (USERS_TABLE, SHOT_LOGS_TABLE):
                if table not in tables:
                    raise RuntimeError(f"Database table not found: {table}")

            cursor.execute(f"PRAGMA table_info({SHOT_LOGS_TABLE})")
            columns = {row['name'] for row in cursor.fetchall()}
            if 'original_settings' not in columns:
                raise RuntimeError(
                    "shot_logs.original_settings column not found. "
                    "Run migrations/add_original_settings_column.py"
                )

    # ===========================
    # Username Operations
    # ===========================

    def username_exists(self, username: str) -> bool:
        """Check if a username is already registered."""
        with self.get_cursor() as cursor:
            cursor.execute(f"SELECT username FROM {USERS_TABLE} WHERE username = ?", (username,))
            return cursor.fetchone() is not None

    def create_username(self, username: str):
        """
        Register a new username.

        Raises:
            sqlite3.IntegrityError: If the username is already taken
        """
        with self.get_cursor() as cursor:
            cursor.execute(f"INSERT INTO {USERS_TABLE} (username) VALUES (?)", (username,))

        logger.info(f"Created username: {username}")

    def get_or_create_username(self, username: str) -> bool:
        """
        Register a username unless it already exists.

        Returns:
            True if the username was created, False if it already existed
        """
        if self.username_exists(username):
            return False

        self.create_username(username)
        return True

    def list_usernames(self) -> List[str]:
        """Get all registered usernames."""
        with self.get_cursor() as cursor:
            cursor.execute(f"SELECT username FROM {USERS_TABLE} ORDER BY username")
            return [row['username'] for row in cursor.fetchall()]

    # ===========================
    # Shot Log Operations
    # ===========================

    def save_shot_log(self, username: str, shot_log: ShotLog) -> ShotLog:
        """
        Save a new shot log for a user.

        Args:
            username: Owner of the log (must be registered)
            shot_log: Log to save; an id is generated when it has none

        Returns:
            The same ShotLog instance with its id assigned

        Raises:
            ValueError: If required shot log data is missing or invalid
            sqlite3.IntegrityError: If the username is not registered
        """
        shot_log.validate()

        log_id = shot_log.id or str(uuid.uuid4())
        record = self._to_record(shot_log)
        record['id'] = log_id
        columns = ['id', 'username', 'timestamp', *JSON_COLUMNS, 'notes', 'rating', 'created_at']
        values = [
            record['id'], username, record['timestamp'],
            *[record[c] for c in JSON_COLUMNS],
            record['notes'], record['rating'], datetime.now().isoformat(),
        ]

        with self.get_cursor() as cursor:
            cursor.execute(f"""
                INSERT INTO {SHOT_LOGS_TABLE} ({', '.join(columns)})
                VALUES ({', '.join('?' * len(columns))})
            """, values)

        shot_log.id = log_id
        logger.info(f"Saved shot log {shot_log.id} for {username}")
        return shot_log

    def update_shot_log(self, username: str, shot_log: ShotLog) -> bool:
        """
        Update an existing shot log owned by a user.

        Args:
            username: Owner of the log
            shot_log: Log carrying the new values and the existing id

        Returns:
            True if a row was updated, False if no such log exists for the user
        """
        if shot_log.id is None:
            raise ValueError("Cannot update a shot log without an id")

        shot_log.validate()
        record = self._to_record(shot_log)
        columns = ['timestamp', *JSON_COLUMNS, 'notes', 'rating']
        assignments = ', '.join(f"{c} = ?" for c in columns)

        with self.get_cursor() as cursor:
            cursor.execute(f"""
                UPDATE {SHOT_LOGS_TABLE} SET {assignments}
                WHERE id = ? AND username = ?
            """, [*[record[c] for c in columns], shot_log.id, username])
            updated = cursor.rowcount > 0

        if updated:
            logger.info(f"Updated shot log {shot_log.id} for {username}")
        else:
            logger.warning(f"Shot log {shot_log.id} not found for {username}")
        return updated

    def get_shot_log(self, username: str, log_id: str) -> Optional[ShotLog]:
        """Get one shot log by id, or None if the user has no such log."""
        with self.get_cursor() as cursor:
            cursor.execute(
                f"SELECT * FROM {SHOT_LOGS_TABLE} WHERE id = ? AND username = ?",
                (log_id, username)
            )
            row = cursor.fetchone()

        return self._from_row(row) if row else None

    def load_shot_logs(self, username: str) -> List[ShotLog]:
        """
        Load all shot logs for a user.

        Returns:
            Shot logs, newest first
        """
        with self.get_cursor() as cursor:
            cursor.execute(f"""
                SELECT * FROM {SHOT_LOGS_TABLE}
                WHERE username = ?
                ORDER BY timestamp DESC
            """, (username,))
            rows = cursor.fetchall()

        return [self._from_row(row) for row in rows]

    def delete_shot_log(self, username: str, log_id: str) -> bool:
        """
        Delete a shot log owned by a user.

        Returns:
            True if a log was deleted
        """
        with self.get_cursor() as cursor:
            cursor.execute(
                f"DELETE FROM {SHOT_LOGS_TABLE} WHERE id = ? AND username = ?",
                (log_id, username)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted shot log {log_id} for {username}")
        return deleted

    @staticmethod
    def _to_record(shot_log: ShotLog) -> Dict[str, Optional[str]]:
        """Flatten a ShotLog into column values, JSON-encoding embedded records."""
        data = shot_log.to_dict()
        record = {
            'id': data['id'],
            'timestamp': data['timestamp'],
            'notes': data['notes'],
            'rating': data['rating'],
        }
        for column in JSON_COLUMNS:
            record[column] = json.dumps(data[column])
        return record

    @staticmethod
    def _from_row(row: sqlite3.Row) -> ShotLog:
        """Rebuild a ShotLog from a shot_logs row."""
        data = {
            'id': row['id'],
            'timestamp': row['timestamp'],
            'notes': row['notes'],
            'rating': row['rating'],
        }
        for column in JSON_COLUMNS:
            value = row[column] if column in row.keys() else None
            data[column] = json.loads(value) if value else None
        return ShotLog.from_dict(data)

    def reset_database(self) -> Dict[str, int]:
        """Reset entire database by deleting all data.

        Returns:
            Dictionary with counts of deleted records
        """
        with self.get_cursor() as cursor:
            # Get counts before deletion
            cursor.execute(f"SELECT COUNT(*) FROM {SHOT_LOGS_TABLE}")
            shot_log_count = cursor.fetchone()[0]

            cursor.execute(f"SELECT COUNT(*) FROM {USERS_TABLE}")
            user_count = cursor.fetchone()[0]

            # Delete all data (order matters due to foreign keys)
            cursor.execute(f"DELETE FROM {SHOT_LOGS_TABLE}")
            cursor.execute(f"DELETE FROM {USERS_TABLE}")

        logger.info(f"Database reset: {user_count} users, {shot_log_count} shot logs deleted")

        return {
            'users': user_count,
            'shot_logs': shot_log_count,
        }

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
