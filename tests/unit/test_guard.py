"""Unit tests for the sequence guard fold."""

from datetime import datetime, timezone

import pytest

from snapflow.common.exceptions import MultipleRevisionsError, OrderingViolationError
from snapflow.entities import Node
from snapflow.reader.guard import GuardPhase, GuardState, SequenceGuard


def _node(id: int, day: int) -> Node:
    return Node(
        id=id,
        timestamp=datetime(2024, 1, day, tzinfo=timezone.utc),
        latitude=0.0,
        longitude=0.0,
    )


def _fold(nodes):
    state = SequenceGuard.initial_state()
    emitted = []
    for node in nodes:
        state, usable = SequenceGuard.check(state, node)
        if usable:
            emitted.append(node)
    return state, emitted


class TestSequenceGuard:
    """Test ordering and duplicate handling."""

    def test_initial_state_awaits_first(self):
        state = SequenceGuard.initial_state()
        assert state.phase == GuardPhase.AWAITING_FIRST
        assert state.last_id is None
        assert state.last_timestamp is None

    def test_first_entity_is_accepted_even_with_id_zero(self):
        state, usable = SequenceGuard.check(SequenceGuard.initial_state(), _node(0, 1))
        assert usable
        assert state == GuardState(GuardPhase.TRACKING, 0, datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_ascending_ids_are_all_emitted(self):
        nodes = [_node(1, 1), _node(2, 1), _node(10, 3)]
        state, emitted = _fold(nodes)
        assert emitted == nodes
        assert state.last_id == 10

    def test_exact_duplicate_is_suppressed(self):
        first = _node(1, 1)
        state, emitted = _fold([first, _node(1, 1)])
        assert emitted == [first]
        assert state.last_id == 1

    def test_duplicate_leaves_state_unchanged(self):
        state, _ = SequenceGuard.check(SequenceGuard.initial_state(), _node(5, 2))
        result = SequenceGuard.check(state, _node(5, 2))
        assert result.usable is False
        assert result.state is state

    def test_same_id_different_timestamp_fails(self):
        with pytest.raises(MultipleRevisionsError, match="Id of 1 has multiple records"):
            _fold([_node(1, 1), _node(1, 2)])

    def test_descending_id_fails(self):
        state, _ = SequenceGuard.check(SequenceGuard.initial_state(), _node(2, 1))
        with pytest.raises(OrderingViolationError) as exc_info:
            SequenceGuard.check(state, _node(1, 1))
        assert exc_info.value.details == {"id": 1, "previous_id": 2}

    def test_descending_after_duplicate_still_fails(self):
        with pytest.raises(OrderingViolationError):
            _fold([_node(3, 1), _node(3, 1), _node(2, 1)])
