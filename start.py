"""Console host for the waypoint tracker.

Builds the default container, initializes the tracker and then reads
simple commands from stdin while sampling runs in the background. The
rendered map is rewritten to WPT_RENDER_OUTPUT_PATH after every change.
"""

from __future__ import annotations

import logging
import sys

from waypoint_tracker import Container, RouteTracker, get_config
from waypoint_tracker.logging_setup import configure_logging

logger = logging.getLogger("waypoint_tracker.start")

HELP = "Commandes : status | start | stop | reset | quit"


def ask_yes_no(question: str) -> bool:
    answer = input(f"{question} (o/n) : ").strip().lower()
    return answer in {"o", "oui", "y", "yes"}


def print_status(tracker: RouteTracker) -> None:
    snap = tracker.snapshot()
    print(f"État : {snap.state.name} | points : {snap.num_points}/{snap.max_points}")
    print(f"Distance : {snap.total_distance_km:.3f} km")
    if snap.permission_denied:
        print("Permission de localisation refusée.")
    if snap.destination is not None:
        print(f"Destination : {snap.destination.latitude}, {snap.destination.longitude}")


def main() -> int:
    config = get_config()
    configure_logging(config.observability)

    container = Container.create_default(
        config,
        prompt=lambda: ask_yes_no("Autoriser l'accès à votre position ?"),
    )
    tracker: RouteTracker = container.resolve(RouteTracker)

    print("=== Waypoint tracker ===")
    print(f"Carte : {config.rendering.output_path}")
    tracker.initialize()
    print_status(tracker)
    print(HELP)

    try:
        while True:
            try:
                command = input("> ").strip().lower()
            except EOFError:
                break

            if command in {"q", "quit", "exit"}:
                break
            elif command == "status":
                print_status(tracker)
            elif command == "start":
                tracker.initialize()
                print_status(tracker)
            elif command == "stop":
                tracker.stop()
                print_status(tracker)
            elif command == "reset":
                if ask_yes_no("Êtes-vous sûr de réinitialiser la route ?"):
                    tracker.reset()
                print_status(tracker)
            elif command:
                print(HELP)
    except KeyboardInterrupt:
        print()
    finally:
        tracker.close()
        logger.info("Tracker closed")

    return 0


if __name__ == "__main__":
    sys.exit(main())
