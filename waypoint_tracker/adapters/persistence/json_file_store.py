"""JSON file route store.

The route lives in a single named record, ``<data_dir>/<route_key>.json``.
Writes go to a temporary file in the same directory and are moved into
place with ``os.replace``, so a reader never sees a partial route.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ...config import StorageConfig, get_config
from ...domain.errors import MalformedPersistedDataError, PersistenceWriteError
from ...domain.models import Coordinate
from .codec import decode_route, encode_route


@dataclass
class JsonFileRouteStore:
    """Route store backed by a JSON file.

    This adapter implements RouteStorePort.

    Attributes:
        config: Storage configuration (directory, record name)
    """

    config: StorageConfig = field(default_factory=lambda: get_config().storage)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self.config.route_path

    def load(self) -> Optional[tuple[Coordinate, ...]]:
        """Load the stored route.

        Returns:
            Stored coordinates, or None if the file is missing,
            unreadable or malformed.
        """
        try:
            payload = self.path.read_bytes()
        except FileNotFoundError:
            self._logger.debug("No stored route", extra={"path": str(self.path)})
            return None
        except OSError as e:
            self._logger.warning(
                "Stored route unreadable",
                extra={"path": str(self.path), "error": str(e)},
            )
            return None

        try:
            coordinates = decode_route(payload)
        except MalformedPersistedDataError as e:
            self._logger.warning(
                "Stored route is malformed, ignoring it",
                extra={"path": str(self.path), "error": str(e)},
            )
            return None

        self._logger.info(
            "Stored route loaded",
            extra={"path": str(self.path), "points": len(coordinates)},
        )
        return coordinates

    def save(self, coordinates: Sequence[Coordinate]) -> None:
        """Atomically overwrite the stored route.

        Raises:
            PersistenceWriteError: If the file cannot be written.
        """
        payload = encode_route(coordinates)
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise PersistenceWriteError(
                "Failed to save route",
                location=str(self.path),
                cause=e,
            )
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    self._logger.debug(
                        "Temporary route file left behind", extra={"tmp": tmp_name}
                    )

        self._logger.debug(
            "Route saved",
            extra={"path": str(self.path), "points": len(coordinates)},
        )

    def clear(self) -> None:
        """Delete the stored route. Missing files are not an error.

        Raises:
            PersistenceWriteError: If the file exists but cannot be removed.
        """
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceWriteError(
                "Failed to clear route",
                location=str(self.path),
                cause=e,
            )
        self._logger.info("Stored route cleared", extra={"path": str(self.path)})
