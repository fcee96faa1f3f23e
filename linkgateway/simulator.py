"""Microwave radio link simulator.

Run with ``--json`` to print a seed banner followed by one metrics object, the
format the gateway's process strategy consumes. Without it, a human-readable
report is printed every few seconds until interrupted.
"""

from __future__ import annotations

import argparse
import random
import sys
import time

from linkgateway.models.metrics import MetricsRecord

BASE_LATENCY_MS = 15.0
LATENCY_VARIATION_MS = 2.0
JITTER_RANGE_MS = 5.0
SIGNAL_STRENGTH_MIN_DB = -85.0
SIGNAL_STRENGTH_MAX_DB = -45.0
PACKET_LOSS_MAX_PERCENT = 2.0
BANDWIDTH_MIN_MBPS = 50.0
BANDWIDTH_MAX_MBPS = 1000.0


class LinkSimulator:
    def __init__(self, *, seed: int | None = None) -> None:
        self.seed = int(time.time()) if seed is None else seed
        self._rng = random.Random(self.seed)

    def generate(self) -> MetricsRecord:
        signal = self._rng.uniform(SIGNAL_STRENGTH_MIN_DB, SIGNAL_STRENGTH_MAX_DB)
        # Bandwidth follows signal quality, floored at 10% of the usable span.
        quality = (signal - SIGNAL_STRENGTH_MIN_DB) / (
            SIGNAL_STRENGTH_MAX_DB - SIGNAL_STRENGTH_MIN_DB
        )
        quality = max(0.1, min(1.0, quality))
        return MetricsRecord(
            latency_ms=BASE_LATENCY_MS
            + self._rng.uniform(-LATENCY_VARIATION_MS, LATENCY_VARIATION_MS),
            jitter_ms=self._rng.uniform(0.1, JITTER_RANGE_MS),
            signal_strength_db=signal,
            packet_loss_rate=self._rng.uniform(0.0, PACKET_LOSS_MAX_PERCENT),
            bandwidth_mbps=BANDWIDTH_MIN_MBPS
            + (BANDWIDTH_MAX_MBPS - BANDWIDTH_MIN_MBPS) * quality,
            snr_db=signal + self._rng.uniform(10.0, 20.0),
            timestamp=int(time.time()),
        )


def render_json(record: MetricsRecord) -> str:
    return "\n".join(
        [
            "{",
            f'  "latency_ms": {record.latency_ms:.2f},',
            f'  "jitter_ms": {record.jitter_ms:.2f},',
            f'  "signal_strength_db": {record.signal_strength_db:.2f},',
            f'  "packet_loss_rate": {record.packet_loss_rate:.3f},',
            f'  "bandwidth_mbps": {record.bandwidth_mbps:.2f},',
            f'  "snr_db": {record.snr_db:.2f},',
            f'  "timestamp": {record.timestamp}',
            "}",
        ]
    )


def render_report(record: MetricsRecord) -> str:
    return "\n".join(
        [
            "=== Microwave Link Metrics ===",
            f"Latency: {record.latency_ms:.2f} ms",
            f"Jitter: {record.jitter_ms:.2f} ms",
            f"Signal Strength: {record.signal_strength_db:.2f} dBm",
            f"Packet Loss Rate: {record.packet_loss_rate:.3f}%",
            f"Bandwidth: {record.bandwidth_mbps:.2f} Mbps",
            f"SNR: {record.snr_db:.2f} dB",
            f"Timestamp: {record.timestamp}",
            "=============================",
        ]
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Simulate microwave radio link metrics.")
    parser.add_argument("--json", action="store_true", help="print one JSON snapshot and exit")
    parser.add_argument(
        "--interval", type=float, default=5.0, help="seconds between reports (default: 5)"
    )
    parser.add_argument(
        "--count", type=int, default=0, help="stop after N reports (default: run forever)"
    )
    args = parser.parse_args(argv)

    simulator = LinkSimulator()
    print(f"Link simulator initialized with seed: {simulator.seed}")

    if args.json:
        print(render_json(simulator.generate()))
        return 0

    print("Starting microwave link simulation...")
    print("Press Ctrl+C to stop\n")
    emitted = 0
    try:
        while args.count <= 0 or emitted < args.count:
            if emitted:
                time.sleep(args.interval)
            print(render_report(simulator.generate()), flush=True)
            emitted += 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
