"""Services Layer — lifecycle orchestration and the agent-tool adapter.

Invariants:
    - TaskLifecycleService is the only component that enforces domain rules
    - Tool dispatch uses explicit dict mapping (no auto-discovery)
"""
