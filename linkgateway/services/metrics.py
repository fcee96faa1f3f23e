from __future__ import annotations

import logging
import random
import time

from linkgateway.clients.simulator import SimulatorClient, SimulatorError
from linkgateway.models.metrics import MetricsFormatError, MetricsRecord

# Uniform bounds for synthetic records, inclusive.
SYNTHETIC_RANGES: dict[str, tuple[float, float]] = {
    "latency_ms": (15.0, 19.0),
    "jitter_ms": (0.1, 5.0),
    "signal_strength_db": (-85.0, -45.0),
    "packet_loss_rate": (0.0, 2.0),
    "bandwidth_mbps": (50.0, 1000.0),
    "snr_db": (-75.0, -55.0),
}


def extract_json_object(output: str) -> str:
    """Return the text between the first '{' and the last '}' of ``output``.

    The simulator prints banner lines (seed, init messages) before the JSON
    payload, so the object is located by its outermost braces rather than by
    parsing the whole output.

    >>> extract_json_object('seed: 42\\n{"a": 1}\\n')
    '{"a": 1}'
    """
    start = output.find("{")
    end = output.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise MetricsFormatError("Could not locate a JSON object in simulator output")
    return output[start : end + 1]


def parse_simulator_output(output: str) -> MetricsRecord:
    return MetricsRecord.from_json(extract_json_object(output))


def generate_synthetic_metrics(rng: random.Random | None = None) -> MetricsRecord:
    rng = rng or random.Random()
    values = {name: rng.uniform(low, high) for name, (low, high) in SYNTHETIC_RANGES.items()}
    return MetricsRecord(**values, timestamp=int(time.time()))


class MetricsAcquirer:
    def __init__(
        self,
        *,
        client: SimulatorClient,
        logger: logging.Logger | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._client = client
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._rng = rng

    @property
    def mode(self) -> str:
        return self._client.mode.value

    async def fetch(self) -> MetricsRecord:
        try:
            output = await self._client.fetch_raw()
            record = parse_simulator_output(output)
        except (SimulatorError, MetricsFormatError) as e:
            self._logger.warning(
                "Simulator fetch failed (mode=%s), using synthetic metrics: %s",
                self.mode,
                e,
            )
            return self.synthesize()
        except Exception:  # noqa: BLE001 - fetch never fails for the caller
            self._logger.exception(
                "Unexpected error fetching simulator metrics (mode=%s), using synthetic metrics",
                self.mode,
            )
            return self.synthesize()

        self._logger.debug("Received metrics from simulator: %s", record)
        return record

    async def is_available(self) -> bool:
        try:
            return await self._client.probe()
        except Exception as e:  # noqa: BLE001 - probe reports, never raises
            self._logger.warning("Simulator not available (mode=%s): %s", self.mode, e)
            return False

    def synthesize(self) -> MetricsRecord:
        return generate_synthetic_metrics(self._rng)
