"""Ordering and duplicate checks over a stream of entities.

The guard is a pure fold: ``SequenceGuard.check`` takes the state left by
the previous row and returns the next state together with whether the
row should be emitted. A reader threads that state through one pass and
never shares it, which is what makes a pass single-use.
"""

from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional

from snapflow.common.exceptions import MultipleRevisionsError, OrderingViolationError
from snapflow.entities.models import Entity


class GuardPhase(str, Enum):
    AWAITING_FIRST = "awaiting_first"
    TRACKING = "tracking"


class GuardState(NamedTuple):
    """Identifier and timestamp of the last accepted entity."""

    phase: GuardPhase
    last_id: Optional[int] = None
    last_timestamp: Optional[datetime] = None


class GuardResult(NamedTuple):
    state: GuardState
    usable: bool


class SequenceGuard:
    """Enforces ascending identifiers and collapses exact duplicates.

    For an entity with identifier ``id`` and timestamp ``ts``:

    - ``id`` below the last accepted identifier aborts the pass with
      ``OrderingViolationError``.
    - ``id`` equal to the last one with a different ``ts`` aborts with
      ``MultipleRevisionsError``.
    - ``id`` and ``ts`` both equal to the last ones is an exact duplicate:
      it is not usable and the state does not change.
    - Anything else is accepted and becomes the new state.
    """

    @staticmethod
    def initial_state() -> GuardState:
        return GuardState(GuardPhase.AWAITING_FIRST)

    @staticmethod
    def check(state: GuardState, entity: Entity) -> GuardResult:
        """Fold one entity into the guard state.

        Args:
            state: State returned for the previous entity
            entity: Decoded entity to check

        Returns:
            The next state and whether ``entity`` should be emitted

        Raises:
            OrderingViolationError: If identifiers went backwards
            MultipleRevisionsError: If an identifier repeats with another timestamp
        """
        accepted = GuardResult(GuardState(GuardPhase.TRACKING, entity.id, entity.timestamp), True)

        if state.phase == GuardPhase.AWAITING_FIRST:
            return accepted

        if entity.id < state.last_id:
            raise OrderingViolationError(
                f"Id of {entity.id} must be greater or equal to previous id of {state.last_id}",
                details={"id": entity.id, "previous_id": state.last_id},
            )

        if entity.id == state.last_id:
            if entity.timestamp != state.last_timestamp:
                raise MultipleRevisionsError(
                    f"Id of {entity.id} has multiple records",
                    details={
                        "id": entity.id,
                        "timestamp": entity.timestamp.isoformat(),
                        "previous_timestamp": state.last_timestamp.isoformat(),
                    },
                )
            # Same id and timestamp: a second copy of an accepted row
            return GuardResult(state, False)

        return accepted
