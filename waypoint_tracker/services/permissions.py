"""Location authorization: check, then request, failing closed."""

from __future__ import annotations

import logging

from ..domain.models import PermissionStatus
from ..ports.permission import PermissionGatePort

logger = logging.getLogger(__name__)


def ensure_authorized(gate: PermissionGatePort) -> bool:
    """Make sure location access is granted.

    Checks the current status and, if it is not GRANTED, issues an
    explicit request. Any error raised by the gate counts as a denial.

    Returns:
        True if access is granted, False otherwise.
    """
    try:
        status = gate.check()
        if status is PermissionStatus.GRANTED:
            return True

        logger.info("Requesting location permission", extra={"status": status.value})
        status = gate.request()
    except Exception as e:
        logger.error(
            "Error while checking or requesting location permission",
            extra={"gate": type(gate).__name__, "error": str(e)},
        )
        return False

    if status is not PermissionStatus.GRANTED:
        logger.warning("Location permission not granted", extra={"status": status.value})
        return False
    return True
