"""Tests for action_states — the submission transition table.

Tests cover:
    - Edit, create and delete paths walk only allowed edges
    - Terminal states are never left
    - Illegal edges raise IllegalTransitionError
"""

import pytest

from dashboard.core.action_states import (
    ALLOWED_TRANSITIONS, TERMINAL_STATES, ActionState, ActionTrail,
)
from dashboard.core.errors import IllegalTransitionError

S = ActionState


def _walk(*states):
    trail = ActionTrail()
    for state in states:
        trail.advance(state)
    return trail


def test_trail_starts_idle():
    trail = ActionTrail()
    assert trail.current is S.IDLE
    assert not trail.finished


def test_edit_success_path():
    trail = _walk(
        S.VALIDATING, S.VALID, S.DETECTING_CONFLICT, S.PROCEED, S.PERSISTING, S.SUCCESS,
    )
    assert trail.finished
    assert trail.states[0] is S.IDLE


def test_create_path_skips_conflict_detection():
    trail = _walk(S.VALIDATING, S.VALID, S.PROCEED, S.PERSISTING, S.DOMAIN_ERROR)
    assert trail.current is S.DOMAIN_ERROR


def test_delete_path_skips_validation():
    trail = _walk(S.PROCEED, S.PERSISTING, S.SUCCESS)
    assert trail.finished


@pytest.mark.parametrize("path", [
    (S.PERSISTING,),
    (S.SUCCESS,),
    (S.VALIDATING, S.PROCEED),
    (S.VALIDATING, S.VALID, S.SUCCESS),
    (S.PROCEED, S.DETECTING_CONFLICT),
])
def test_illegal_edges_raise(path):
    trail = ActionTrail()
    with pytest.raises(IllegalTransitionError):
        for state in path:
            trail.advance(state)


def test_terminal_states_have_no_outgoing_edges():
    for state in TERMINAL_STATES:
        assert state not in ALLOWED_TRANSITIONS


def test_detecting_conflict_only_reachable_from_valid():
    sources = [s for s, targets in ALLOWED_TRANSITIONS.items()
               if S.DETECTING_CONFLICT in targets]
    assert sources == [S.VALID]


def test_illegal_transition_error_names_both_states():
    trail = _walk(S.PROCEED, S.PERSISTING, S.SUCCESS)
    with pytest.raises(IllegalTransitionError) as exc_info:
        trail.advance(S.PERSISTING)
    assert exc_info.value.current == "success"
    assert exc_info.value.requested == "persisting"
