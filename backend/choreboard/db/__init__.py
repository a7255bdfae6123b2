"""Database Infrastructure: SQLAlchemy Base shared by every ORM model.

Invariants:
    - Single async engine per process (owned by infrastructure.database.Store)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite driver: the store is one local file, no server process
"""
