"""Core Layer — pure domain logic, no IO, no threads, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: transition policy
      is testable without touching the disk
"""
