"""Database Infrastructure — declarative Base and identifier factory.

Invariants:
    - All ORM models inherit from db.base.Base
    - All sessions are async (AsyncSession)
"""
