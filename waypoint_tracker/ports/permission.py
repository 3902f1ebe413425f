"""Permission port - Location access authorization.

The gate reports and requests location permission from the host
platform. The check-then-request sequence lives in
services/permissions.py (ensure_authorized).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import PermissionStatus


class PermissionGatePort(Protocol):
    """Port for location permission.

    Implementations:
    - adapters/permission/static_gate.py (StaticPermissionGate)
    - adapters/permission/consent_gate.py (ConsentFilePermissionGate)
    """

    def check(self) -> PermissionStatus:
        """Return the current authorization without prompting."""
        ...

    def request(self) -> PermissionStatus:
        """Ask for authorization, possibly prompting the user.

        Returns:
            The status after the request was answered.
        """
        ...
