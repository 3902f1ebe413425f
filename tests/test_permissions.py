"""Tests for ensure_authorized."""

from waypoint_tracker.adapters.permission import StaticPermissionGate
from waypoint_tracker.domain.models import PermissionStatus
from waypoint_tracker.services import ensure_authorized


def test_granted_without_request():
    gate = StaticPermissionGate.granted()
    assert ensure_authorized(gate) is True
    assert gate.request_count == 0


def test_prompt_then_granted():
    gate = StaticPermissionGate(PermissionStatus.PROMPT, PermissionStatus.GRANTED)
    assert ensure_authorized(gate) is True
    assert gate.request_count == 1


def test_prompt_then_denied():
    gate = StaticPermissionGate.denied()
    assert ensure_authorized(gate) is False
    assert gate.request_count == 1


def test_request_error_fails_closed():
    class RaisingGate:
        def check(self):
            return PermissionStatus.PROMPT

        def request(self):
            raise RuntimeError("dialog crashed")

    assert ensure_authorized(RaisingGate()) is False
