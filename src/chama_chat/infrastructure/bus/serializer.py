"""Wire format for events on the Redis bus: {"event": <type>, "data": {...}}."""
from __future__ import annotations

import json
from typing import Any

from pydantic_core import to_json


def serialize_event(event_type: str, data: dict[str, Any]) -> str:
    return to_json({"event": event_type, "data": data}).decode()


def deserialize_event(raw: str | bytes) -> tuple[str, dict[str, Any]]:
    envelope = json.loads(raw)
    if not isinstance(envelope, dict) or "event" not in envelope:
        raise ValueError("Malformed bus event")
    return envelope["event"], envelope.get("data") or {}
