"""Tests for the render sinks."""

import json
import logging

import pytest

from tests.fakes import RecordingRenderSink, track
from waypoint_tracker.adapters.rendering import (
    CompositeRenderSink,
    FoliumRouteRenderer,
    LoggingRenderSink,
)
from waypoint_tracker.config import RenderingConfig
from waypoint_tracker.domain.models import ErrorKind
from waypoint_tracker.logging_setup import JsonFormatter


@pytest.fixture
def renderer(tmp_path) -> FoliumRouteRenderer:
    return FoliumRouteRenderer(RenderingConfig(output_path=tmp_path / "out" / "map.html"))


class TestFoliumRouteRenderer:
    def test_waypoints_write_the_map(self, renderer):
        for i, point in enumerate(track(3)):
            renderer.on_waypoint_added(point, i)

        assert renderer.coordinates == tuple(track(3))
        html = renderer.config.output_path.read_text(encoding="utf-8")
        assert "Home" in html
        assert "L.polyline" in html
        assert " km" in html

    def test_destination_label_once_complete(self, renderer):
        renderer.on_route_loaded(track(2))
        assert "Destination" not in renderer.render_html()

        renderer.on_destination_reached(track(2)[-1])

        assert renderer.complete
        assert "Destination" in renderer.render_html()

    def test_single_point_has_no_polyline(self, renderer):
        renderer.on_waypoint_added(track(1)[0], 0)
        assert "L.polyline" not in renderer.render_html()

    def test_repeated_index_replaces_tail(self, renderer):
        renderer.on_route_loaded(track(3))
        replacement = track(1, start=(1.0, 1.0))[0]
        renderer.on_waypoint_added(replacement, 1)
        assert renderer.coordinates == (track(3)[0], replacement)

    def test_reset_renders_empty_map(self, renderer):
        renderer.on_route_loaded(track(3))
        renderer.on_destination_reached(track(3)[-1])
        renderer.on_route_reset()

        assert renderer.coordinates == ()
        assert not renderer.complete
        assert renderer.config.output_path.exists()

    def test_tracking_flags_and_errors(self, renderer):
        renderer.on_tracking_started()
        assert renderer.tracking
        renderer.on_error(ErrorKind.SAMPLE_TIMED_OUT, "slow")
        renderer.on_tracking_stopped()
        assert not renderer.tracking
        assert renderer.last_error == (ErrorKind.SAMPLE_TIMED_OUT, "slow")

    def test_auto_save_off(self, tmp_path):
        renderer = FoliumRouteRenderer(
            RenderingConfig(output_path=tmp_path / "map.html"), auto_save=False
        )
        renderer.on_route_loaded(track(2))
        assert not (tmp_path / "map.html").exists()
        assert renderer.save() == tmp_path / "map.html"
        assert (tmp_path / "map.html").exists()


class TestCompositeRenderSink:
    def test_failing_sink_does_not_block_others(self):
        class Exploding:
            def __getattr__(self, name):
                def fail(*args):
                    raise RuntimeError(name)

                return fail

        recorder = RecordingRenderSink()
        composite = CompositeRenderSink([Exploding(), recorder])

        composite.on_tracking_started()
        composite.on_waypoint_added(track(1)[0], 0)
        composite.on_error(ErrorKind.PERSISTENCE_WRITE, "disk full")

        assert recorder.events == [
            ("tracking_started",),
            ("waypoint_added", track(1)[0], 0),
            ("error", ErrorKind.PERSISTENCE_WRITE, "disk full"),
        ]


class TestLoggingRenderSink:
    def test_logs_events(self, caplog):
        sink = LoggingRenderSink("waypoint_tracker.test_sink")
        with caplog.at_level(logging.INFO, logger="waypoint_tracker.test_sink"):
            sink.on_waypoint_added(track(1)[0], 0)
            sink.on_error(ErrorKind.SAMPLE_UNAVAILABLE, "no fix")

        assert "Point 1: 10.0, 20.0" in caplog.text
        assert caplog.records[-1].levelno == logging.ERROR
        assert caplog.records[-1].kind == "sample_unavailable"


def test_json_formatter_keeps_extra_fields():
    record = logging.makeLogRecord(
        {"name": "x", "levelname": "INFO", "msg": "Point %d", "args": (3,), "index": 2}
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "Point 3"
    assert payload["index"] == 2
    assert payload["level"] == "INFO"
