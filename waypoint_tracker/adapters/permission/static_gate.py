"""Permission gate with a fixed answer."""

from __future__ import annotations

from dataclasses import dataclass, field

from ...domain.models import PermissionStatus


@dataclass
class StaticPermissionGate:
    """Gate that always reports the same status.

    ``check`` returns ``initial`` until the first ``request``; after that
    both return ``on_request``. Counters let tests assert how the gate
    was used.
    """

    initial: PermissionStatus = PermissionStatus.GRANTED
    on_request: PermissionStatus = PermissionStatus.GRANTED

    check_count: int = field(default=0, init=False)
    request_count: int = field(default=0, init=False)
    _requested: bool = field(default=False, init=False, repr=False)

    @classmethod
    def granted(cls) -> StaticPermissionGate:
        return cls(PermissionStatus.GRANTED, PermissionStatus.GRANTED)

    @classmethod
    def denied(cls) -> StaticPermissionGate:
        return cls(PermissionStatus.PROMPT, PermissionStatus.DENIED)

    def check(self) -> PermissionStatus:
        self.check_count += 1
        return self.on_request if self._requested else self.initial

    def request(self) -> PermissionStatus:
        self.request_count += 1
        self._requested = True
        return self.on_request
