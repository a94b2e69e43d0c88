"""Database package — declarative Base and standalone session factory.

Invariants:
    - Single async engine per process (built in the app lifespan)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
