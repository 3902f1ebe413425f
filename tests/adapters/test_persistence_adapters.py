"""Tests for the route stores and their codec."""

import json
import os

import pytest

from tests.fakes import track
from waypoint_tracker.adapters.persistence import InMemoryRouteStore, JsonFileRouteStore
from waypoint_tracker.adapters.persistence.codec import decode_route, encode_route
from waypoint_tracker.config import StorageConfig
from waypoint_tracker.domain.errors import MalformedPersistedDataError, PersistenceWriteError
from waypoint_tracker.domain.models import Coordinate


@pytest.fixture
def file_store(tmp_path) -> JsonFileRouteStore:
    return JsonFileRouteStore(StorageConfig(data_dir=tmp_path / "store"))


class TestCodec:
    def test_persisted_layout_is_lat_lng_records(self):
        payload = encode_route([Coordinate(10.5, -20.25)])
        assert json.loads(payload) == [{"lat": 10.5, "lng": -20.25}]

    def test_decode_ignores_extra_fields(self):
        coords = decode_route('[{"lat": 1, "lng": 2, "alt": 3}]')
        assert coords == (Coordinate(1.0, 2.0),)

    @pytest.mark.parametrize(
        "payload",
        [
            "",
            "not json",
            '{"lat": 1, "lng": 2}',
            '[{"lat": 1}]',
            '[{"lat": "north", "lng": 2}]',
            '[{"lat": 95, "lng": 2}]',
            b"\xff\xfe",
        ],
    )
    def test_decode_rejects_malformed_payloads(self, payload):
        with pytest.raises(MalformedPersistedDataError):
            decode_route(payload)


class TestJsonFileRouteStore:
    def test_load_without_file_returns_none(self, file_store):
        assert file_store.load() is None

    @pytest.mark.parametrize("length", [0, 1, 15])
    def test_save_then_load_round_trip(self, file_store, length):
        route = track(length)
        file_store.save(route)
        assert file_store.load() == tuple(route)

    def test_save_overwrites_whole_route(self, file_store):
        file_store.save(track(5))
        file_store.save(track(2, start=(1.0, 1.0)))
        assert file_store.load() == tuple(track(2, start=(1.0, 1.0)))

    def test_save_leaves_no_temporary_files(self, file_store):
        file_store.save(track(3))
        assert os.listdir(file_store.path.parent) == [file_store.path.name]

    def test_malformed_file_is_treated_as_absent(self, file_store):
        file_store.path.parent.mkdir(parents=True)
        file_store.path.write_text("[{", encoding="utf-8")
        assert file_store.load() is None

    def test_clear_removes_route(self, file_store):
        file_store.save(track(3))
        file_store.clear()
        assert file_store.load() is None
        file_store.clear()  # already gone

    def test_write_failure_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        store = JsonFileRouteStore(StorageConfig(data_dir=blocker / "sub"))

        with pytest.raises(PersistenceWriteError) as excinfo:
            store.save(track(1))
        assert excinfo.value.location == str(store.path)

    def test_failed_write_keeps_previous_route(self, file_store, monkeypatch):
        file_store.save(track(2))

        def broken_replace(src, dst):
            raise OSError("replace failed")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(PersistenceWriteError):
            file_store.save(track(4))

        assert file_store.load() == tuple(track(2))
        assert os.listdir(file_store.path.parent) == [file_store.path.name]


class TestInMemoryRouteStore:
    @pytest.mark.parametrize("length", [0, 1, 15])
    def test_round_trip(self, length):
        store = InMemoryRouteStore()
        store.save(track(length))
        assert store.load() == tuple(track(length))

    def test_holds_a_copy_not_a_reference(self):
        store = InMemoryRouteStore()
        route = track(2)
        store.save(route)
        route.append(Coordinate(0, 0))
        assert len(store.load()) == 2

    def test_simulated_failures(self):
        store = InMemoryRouteStore(fail_next_saves=1)
        with pytest.raises(PersistenceWriteError):
            store.save(track(1))
        store.save(track(1))
        assert store.save_count == 1

    def test_clear(self):
        store = InMemoryRouteStore()
        store.save(track(3))
        store.clear()
        assert store.load() is None
