"""Database Infrastructure — async engine/session factories and SQLAlchemy Base.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite for local SQLite, asyncpg for PostgreSQL: both native async drivers
"""
