"""Serialization of routes to the persisted ``[{lat, lng}, ...]`` layout.

Decoding validates every record with pydantic; any structural or range
problem raises MalformedPersistedDataError so stores can treat the
payload as absent.
"""

from __future__ import annotations

import json
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ...domain.errors import MalformedPersistedDataError
from ...domain.models import Coordinate


class PersistedPoint(BaseModel):
    """One stored waypoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(ge=-180, le=180, allow_inf_nan=False)


_ROUTE_ADAPTER = TypeAdapter(list[PersistedPoint])


def encode_route(coordinates: Sequence[Coordinate]) -> str:
    """Serialize coordinates to the persisted JSON text."""
    points = [PersistedPoint(lat=c.latitude, lng=c.longitude) for c in coordinates]
    return _ROUTE_ADAPTER.dump_json(points).decode("utf-8")


def decode_route(payload: str | bytes) -> tuple[Coordinate, ...]:
    """Parse persisted JSON text back into coordinates.

    Raises:
        MalformedPersistedDataError: If the payload is not a list of
            valid ``{lat, lng}`` records.
    """
    try:
        points = _ROUTE_ADAPTER.validate_json(payload)
    except (ValidationError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedPersistedDataError("Stored route is malformed", cause=e)
    return tuple(Coordinate(latitude=p.lat, longitude=p.lng) for p in points)
