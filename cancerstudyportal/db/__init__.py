"""Database-related portal functionality."""

from cancerstudyportal.db.database_connection import (
    DBConnection,
    DBCursor,
    DBCredentials,
)
