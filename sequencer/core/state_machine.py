"""Generic State Machine for visibility transitions.

This module provides a reusable state machine pattern for managing
the two visibility flags the publishing layer keeps consistent:
document visibility (published/unpublished) and channel submission
status (active/inactive).

Example:
    sm = create_document_state_machine("unpublished")
    sm.transition(DocumentVisibility.PUBLISHED)

    # Publishing twice is a no-op
    sm.ensure(DocumentVisibility.PUBLISHED)
"""

from enum import Enum
from typing import Generic, TypeVar

from sequencer.core.exceptions import SequencerError

T = TypeVar("T", bound=str | Enum)

# Type alias for transition maps
TransitionMap = dict[T, list[T]]


class InvalidTransitionError(SequencerError):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, current: T, target: T, allowed: list[T] | None = None):
        self.current = current
        self.target = target
        self.allowed = allowed or []
        self.error_code = "INVALID_TRANSITION"
        allowed_str = ", ".join(str(s) for s in self.allowed) if self.allowed else "none"
        super().__init__(
            message=f"Invalid transition from '{current}' to '{target}'. "
            f"Allowed transitions: {allowed_str}",
            context={
                "current": str(current),
                "target": str(target),
                "allowed": [str(s) for s in self.allowed],
            },
        )


class StateMachine(Generic[T]):
    """Generic state machine for status transitions.

    Provides a type-safe way to manage status transitions with
    explicit allowed transitions defined upfront.

    Attributes:
        current: Current state
        transitions: Map of allowed transitions from each state
    """

    def __init__(self, initial: T, transitions: TransitionMap[T]):
        """Initialize state machine.

        Args:
            initial: Initial state
            transitions: Map of state -> list of allowed target states
        """
        self._current = initial
        self._transitions = transitions

    @property
    def current(self) -> T:
        """Get current state."""
        return self._current

    @property
    def allowed_transitions(self) -> list[T]:
        """Get list of states we can transition to from current state."""
        return self._transitions.get(self._current, [])

    def transition(self, target: T) -> None:
        """Perform transition to target state.

        Args:
            target: Target state

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if target not in self.allowed_transitions:
            raise InvalidTransitionError(
                current=self._current,
                target=target,
                allowed=self.allowed_transitions,
            )
        self._current = target

    def ensure(self, target: T) -> bool:
        """Move to target unless already there.

        Reapplying a transition to a state that already holds is a no-op,
        which keeps publish and deactivate safe to retry.

        Args:
            target: Target state

        Returns:
            True if a transition happened, False if already in target

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if self._current == target:
            return False
        self.transition(target)
        return True

    def __str__(self) -> str:
        return f"StateMachine(current={self._current})"

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current!r}, allowed={self.allowed_transitions!r})"


# ============================================
# Predefined Transition Maps
# ============================================


def get_document_transitions() -> TransitionMap:
    """Get transition map for DocumentVisibility."""
    from sequencer.models.document import DocumentVisibility

    return {
        DocumentVisibility.UNPUBLISHED: [DocumentVisibility.PUBLISHED],
        DocumentVisibility.PUBLISHED: [DocumentVisibility.UNPUBLISHED],
    }


def get_submission_transitions() -> TransitionMap:
    """Get transition map for SubmissionStatus."""
    from sequencer.models.submission import SubmissionStatus

    return {
        SubmissionStatus.ACTIVE: [SubmissionStatus.INACTIVE],
        SubmissionStatus.INACTIVE: [SubmissionStatus.ACTIVE],  # Re-listed by the channel
    }


# ============================================
# Factory Functions
# ============================================


def create_document_state_machine(initial_status: str | None = None) -> StateMachine:
    """Create a state machine for document visibility.

    Args:
        initial_status: Initial status (default: UNPUBLISHED)

    Returns:
        Configured StateMachine for a document
    """
    from sequencer.models.document import DocumentVisibility

    initial = DocumentVisibility(initial_status) if initial_status else DocumentVisibility.UNPUBLISHED
    return StateMachine(initial, get_document_transitions())


def create_submission_state_machine(initial_status: str | None = None) -> StateMachine:
    """Create a state machine for channel submission status.

    Args:
        initial_status: Initial status (default: ACTIVE)

    Returns:
        Configured StateMachine for a submission
    """
    from sequencer.models.submission import SubmissionStatus

    initial = SubmissionStatus(initial_status) if initial_status else SubmissionStatus.ACTIVE
    return StateMachine(initial, get_submission_transitions())
