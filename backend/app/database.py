"""
Database session and base configuration.

Re-exports the shared DatabaseManager. Initialization happens explicitly in
main.py startup, not at import time.
"""

from ghsync.db import Base, db, get_db

__all__ = ["Base", "db", "get_db"]
