from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields
from typing import Any

WIRE_FIELDS: tuple[str, ...] = (
    "latency_ms",
    "jitter_ms",
    "signal_strength_db",
    "packet_loss_rate",
    "bandwidth_mbps",
    "snr_db",
    "timestamp",
)


class MetricsFormatError(ValueError):
    """Simulator output could not be decoded into a complete record."""


@dataclass(frozen=True)
class MetricsRecord:
    latency_ms: float
    jitter_ms: float
    signal_strength_db: float
    packet_loss_rate: float
    bandwidth_mbps: float
    snr_db: float
    timestamp: int

    def to_wire(self) -> dict[str, float | int]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_wire())

    @classmethod
    def from_wire(cls, payload: Any) -> MetricsRecord:
        if not isinstance(payload, dict):
            raise MetricsFormatError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        missing = [name for name in WIRE_FIELDS if payload.get(name) is None]
        if missing:
            raise MetricsFormatError(f"Missing required fields: {', '.join(missing)}")

        values: dict[str, Any] = {}
        for field in fields(cls):
            raw = payload[field.name]
            if field.name == "timestamp":
                values[field.name] = _to_int(field.name, raw)
            else:
                values[field.name] = _to_float(field.name, raw)
        _check_ranges(values)
        return cls(**values)

    @classmethod
    def from_json(cls, text: str) -> MetricsRecord:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise MetricsFormatError(f"Invalid JSON: {e.msg}") from e
        return cls.from_wire(payload)


def _to_float(name: str, v: Any) -> float:
    # bool is an int subclass; reject it explicitly.
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise MetricsFormatError(f"Field '{name}' must be a number")
    value = float(v)
    if not math.isfinite(value):
        raise MetricsFormatError(f"Field '{name}' must be finite")
    return value


def _to_int(name: str, v: Any) -> int:
    value = _to_float(name, v)
    if not value.is_integer():
        raise MetricsFormatError(f"Field '{name}' must be an integer")
    return int(value)


def _check_ranges(values: dict[str, Any]) -> None:
    if values["latency_ms"] <= 0:
        raise MetricsFormatError("Field 'latency_ms' must be positive")
    if values["jitter_ms"] < 0:
        raise MetricsFormatError("Field 'jitter_ms' must not be negative")
    if not 0.0 <= values["packet_loss_rate"] <= 100.0:
        raise MetricsFormatError("Field 'packet_loss_rate' must be between 0 and 100")
    if values["bandwidth_mbps"] <= 0:
        raise MetricsFormatError("Field 'bandwidth_mbps' must be positive")
    if values["timestamp"] <= 0:
        raise MetricsFormatError("Field 'timestamp' must be positive")
