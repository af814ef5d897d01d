"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Every ORM model inherits from db.base.Base
    - Engine and sessions live in infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
