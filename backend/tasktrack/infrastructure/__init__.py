"""Infrastructure Layer — durable storage, locking, and cross-cutting concerns.

Invariants:
    - Infrastructure never decides domain policy (no transition rules here)
    - All filesystem failures mapped to StoreError (core/errors.py)
"""
