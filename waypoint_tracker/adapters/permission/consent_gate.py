"""Consent file permission gate.

Remembers the user's answer to "may this app use your location?" in a
small JSON record next to the stored route, and asks through an
injected prompt callable when no answer is recorded yet.

A gate without a prompt cannot obtain consent and answers DENIED.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ...config import PermissionConfig, StorageConfig, get_config
from ...domain.errors import PermissionDeniedError
from ...domain.models import PermissionStatus

Prompt = Callable[[], bool]


@dataclass
class ConsentFilePermissionGate:
    """Permission gate persisting consent in ``<data_dir>/<consent_key>.json``.

    Attributes:
        storage: Storage configuration (directory of the consent record)
        config: Permission configuration (record name)
        prompt: Asks the user; returns True when access is granted
    """

    storage: StorageConfig = field(default_factory=lambda: get_config().storage)
    config: PermissionConfig = field(default_factory=lambda: get_config().permission)
    prompt: Optional[Prompt] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self.storage.data_dir / f"{self.config.consent_key}.json"

    def check(self) -> PermissionStatus:
        """Return the recorded answer, or PROMPT when none is usable."""
        try:
            record = json.loads(self.path.read_text(encoding="utf-8"))
            return PermissionStatus(record["location"])
        except FileNotFoundError:
            return PermissionStatus.PROMPT
        except (OSError, ValueError, KeyError, TypeError) as e:
            self._logger.warning(
                "Consent record unreadable",
                extra={"path": str(self.path), "error": str(e)},
            )
            return PermissionStatus.PROMPT

    def request(self) -> PermissionStatus:
        """Ask the user and record the answer.

        Raises:
            PermissionDeniedError: If no prompt is configured.
        """
        if self.prompt is None:
            raise PermissionDeniedError(
                "No prompt available to request location access",
                status=PermissionStatus.PROMPT.value,
            )

        status = PermissionStatus.GRANTED if self.prompt() else PermissionStatus.DENIED
        self._record(status)
        return status

    def revoke(self) -> None:
        """Forget the recorded answer so the next request prompts again."""
        self.path.unlink(missing_ok=True)

    def _record(self, status: PermissionStatus) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({"location": status.value}), encoding="utf-8"
            )
        except OSError as e:
            # The answer still holds for this session.
            self._logger.warning(
                "Could not record consent",
                extra={"path": str(self.path), "error": str(e)},
            )
