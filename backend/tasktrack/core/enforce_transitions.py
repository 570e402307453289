"""Status Transition Rules — pure policy over the three-valued status domain.

Invariants:
    - Allowed edges: NEW → IN_PROGRESS, IN_PROGRESS → DONE, IN_PROGRESS → NEW
    - Every edge leaving DONE is illegal (terminal state)
    - Total functions: every (current, target) pair has an answer, nothing raises

Design Decisions:
    - Single ALLOWED_TRANSITIONS table is the source of truth; the predicate
      and the enumeration both read it, so they cannot disagree
    - Rejection is signalled one layer up (TaskLifecycleService), not here
"""

from tasktrack.core.domain_types import TaskStatus


ALLOWED_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.NEW: frozenset({TaskStatus.IN_PROGRESS}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.DONE, TaskStatus.NEW}),
    TaskStatus.DONE: frozenset(),
}


def allowed_transitions(current: TaskStatus) -> frozenset[TaskStatus]:
    """Targets reachable from current in one step."""
    return ALLOWED_TRANSITIONS[current]


def can_transition(current: TaskStatus, target: TaskStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def is_terminal(status: TaskStatus) -> bool:
    """True when no edge leaves status."""
    return not ALLOWED_TRANSITIONS[status]


def format_allowed(current: TaskStatus) -> str:
    """Diagnostic listing, e.g. 'IN_PROGRESS → DONE, IN_PROGRESS → NEW'."""
    # Sorted by declaration order of the enum so messages are stable
    ordered = [s for s in TaskStatus if s in ALLOWED_TRANSITIONS[current]]
    return ", ".join(f"{current.value} → {s.value}" for s in ordered)
