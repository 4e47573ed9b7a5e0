"""Database Package — SQLAlchemy declarative Base shared by all ORM models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Engines and sessions live in infrastructure/database.py, not here
"""
