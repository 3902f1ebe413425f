"""Tests for the permission gates."""

import pytest

from waypoint_tracker.adapters.permission import ConsentFilePermissionGate, StaticPermissionGate
from waypoint_tracker.config import PermissionConfig, StorageConfig
from waypoint_tracker.domain.errors import PermissionDeniedError
from waypoint_tracker.domain.models import PermissionStatus
from waypoint_tracker.services import ensure_authorized


@pytest.fixture
def storage(tmp_path) -> StorageConfig:
    return StorageConfig(data_dir=tmp_path / "consent")


def make_gate(storage, answers=None):
    calls = []

    def prompt():
        calls.append(True)
        return answers.pop(0)

    gate = ConsentFilePermissionGate(
        storage, PermissionConfig(), prompt if answers is not None else None
    )
    return gate, calls


class TestConsentFilePermissionGate:
    def test_no_record_means_prompt(self, storage):
        gate, _ = make_gate(storage)
        assert gate.check() is PermissionStatus.PROMPT

    def test_granted_answer_is_remembered(self, storage):
        gate, calls = make_gate(storage, [True])

        assert ensure_authorized(gate) is True
        assert ensure_authorized(gate) is True
        assert len(calls) == 1

        fresh, _ = make_gate(storage)
        assert fresh.check() is PermissionStatus.GRANTED

    def test_denied_answer_is_recorded(self, storage):
        gate, _ = make_gate(storage, [False])
        assert gate.request() is PermissionStatus.DENIED
        assert gate.check() is PermissionStatus.DENIED

    def test_denied_record_asks_again(self, storage):
        gate, calls = make_gate(storage, [False, True])
        assert ensure_authorized(gate) is False
        assert ensure_authorized(gate) is True
        assert len(calls) == 2

    def test_without_prompt_request_raises_and_gate_fails_closed(self, storage):
        gate, _ = make_gate(storage)
        with pytest.raises(PermissionDeniedError):
            gate.request()
        assert ensure_authorized(gate) is False

    def test_corrupt_record_means_prompt(self, storage):
        gate, _ = make_gate(storage)
        gate.path.parent.mkdir(parents=True)
        gate.path.write_text('{"location": "maybe"}', encoding="utf-8")
        assert gate.check() is PermissionStatus.PROMPT

    def test_revoke_forgets_answer(self, storage):
        gate, _ = make_gate(storage, [True])
        gate.request()
        gate.revoke()
        assert gate.check() is PermissionStatus.PROMPT


class TestStaticPermissionGate:
    def test_denied_factory(self):
        gate = StaticPermissionGate.denied()
        assert gate.check() is PermissionStatus.PROMPT
        assert gate.request() is PermissionStatus.DENIED
        assert gate.check() is PermissionStatus.DENIED
        assert (gate.check_count, gate.request_count) == (2, 1)
