"""Services Layer — async orchestration of the pure core around repositories.

Invariants:
    - Services never build SQL; persistence goes through core/repository_protocols
    - Every operation receives the requester id explicitly
"""
