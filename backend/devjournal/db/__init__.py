"""Database Infrastructure — async session factory and SQLAlchemy Base.

Invariants:
    - One async engine per process (owned by DatabaseSessionManager on app.state)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local runs and tests
"""
