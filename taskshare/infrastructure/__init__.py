"""Infrastructure Layer — database access, repositories and cross-cutting concerns.

Invariants:
    - SQLAlchemy errors never escape as-is (mapped to DatabaseError)
    - Repositories implement the protocols declared in core/repository_protocols

Design Decisions:
    - Repositories own their commits; services never call commit()
"""
