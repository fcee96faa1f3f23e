from __future__ import annotations

import logging
import random

import pytest

from linkgateway.clients.simulator import SimulatorError
from linkgateway.models.metrics import MetricsFormatError, MetricsRecord
from linkgateway.services.metrics import (
    SYNTHETIC_RANGES,
    MetricsAcquirer,
    extract_json_object,
    generate_synthetic_metrics,
    parse_simulator_output,
)
from tests.fakes import SAMPLE_OUTPUT, FakeSimulatorClient


def _assert_synthetic(record: MetricsRecord) -> None:
    for name, (low, high) in SYNTHETIC_RANGES.items():
        value = getattr(record, name)
        assert low <= value <= high, f"{name}={value} outside [{low}, {high}]"
    assert record.timestamp > 0


def test_extract_ignores_banner_and_trailing_text() -> None:
    output = 'INIT banner line\n{"latency_ms":16.5,"jitter_ms":1.0}\ntrailing\n'
    assert extract_json_object(output) == '{"latency_ms":16.5,"jitter_ms":1.0}'


@pytest.mark.parametrize("output", ["", "no json here", "} reversed {", "{ unterminated"])
def test_extract_without_brace_pair_fails(output: str) -> None:
    with pytest.raises(MetricsFormatError):
        extract_json_object(output)


def test_parse_simulator_output_decodes_embedded_object() -> None:
    record = parse_simulator_output(SAMPLE_OUTPUT + "trailing\n")
    assert record == MetricsRecord(
        latency_ms=16.5,
        jitter_ms=2.1,
        signal_strength_db=-65.2,
        packet_loss_rate=0.5,
        bandwidth_mbps=500.0,
        snr_db=-55.0,
        timestamp=1754258000,
    )


def test_synthetic_metrics_within_ranges() -> None:
    for _ in range(200):
        _assert_synthetic(generate_synthetic_metrics())


def test_synthetic_metrics_differ_between_calls() -> None:
    first = generate_synthetic_metrics()
    second = generate_synthetic_metrics()
    assert first.latency_ms != second.latency_ms
    assert first.jitter_ms != second.jitter_ms
    assert first.signal_strength_db != second.signal_strength_db


def test_synthetic_metrics_use_injected_rng() -> None:
    a = generate_synthetic_metrics(random.Random(7))
    b = generate_synthetic_metrics(random.Random(7))
    assert a.latency_ms == b.latency_ms
    assert a.snr_db == b.snr_db


@pytest.mark.asyncio
async def test_fetch_returns_simulator_record() -> None:
    simulator = FakeSimulatorClient(output=SAMPLE_OUTPUT)
    record = await MetricsAcquirer(client=simulator).fetch()
    assert record.latency_ms == 16.5
    assert record.timestamp == 1754258000
    assert simulator.fetch_calls == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "simulator",
    [
        FakeSimulatorClient(error=SimulatorError("Simulator exited with code 1")),
        FakeSimulatorClient(error=SimulatorError("Simulator returned HTTP 500")),
        FakeSimulatorClient(error=SimulatorError("Simulator request to /metrics timed out")),
        FakeSimulatorClient(output="Link simulator initialized\nno payload\n"),
        FakeSimulatorClient(output='{"latency_ms": 16.5}'),
        FakeSimulatorClient(error=RuntimeError("boom")),
    ],
    ids=["exit-code", "http-500", "timeout", "no-braces", "missing-fields", "unexpected"],
)
async def test_fetch_falls_back_to_synthetic(simulator: FakeSimulatorClient) -> None:
    record = await MetricsAcquirer(client=simulator).fetch()
    _assert_synthetic(record)


@pytest.mark.asyncio
async def test_fetch_failure_is_logged_on_injected_logger(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("tests.acquirer")
    simulator = FakeSimulatorClient(error=SimulatorError("Simulator exited with code 2"))
    with caplog.at_level(logging.WARNING, logger="tests.acquirer"):
        await MetricsAcquirer(client=simulator, logger=log).fetch()
    records = [r for r in caplog.records if r.name == "tests.acquirer"]
    assert len(records) == 1
    assert records[0].levelno == logging.WARNING
    assert "exited with code 2" in records[0].getMessage()


@pytest.mark.asyncio
async def test_unexpected_failure_is_logged_as_error(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("tests.acquirer")
    simulator = FakeSimulatorClient(error=RuntimeError("boom"))
    with caplog.at_level(logging.WARNING, logger="tests.acquirer"):
        await MetricsAcquirer(client=simulator, logger=log).fetch()
    assert [r.levelno for r in caplog.records if r.name == "tests.acquirer"] == [logging.ERROR]


@pytest.mark.asyncio
async def test_is_available_reports_probe_result() -> None:
    assert await MetricsAcquirer(client=FakeSimulatorClient(available=True)).is_available()
    assert not await MetricsAcquirer(client=FakeSimulatorClient(available=False)).is_available()


@pytest.mark.asyncio
async def test_is_available_false_when_probe_raises() -> None:
    simulator = FakeSimulatorClient(probe_error=SimulatorError("Could not start simulator"))
    assert await MetricsAcquirer(client=simulator).is_available() is False


@pytest.mark.asyncio
async def test_is_available_does_not_affect_fetch() -> None:
    simulator = FakeSimulatorClient(output=SAMPLE_OUTPUT, available=False)
    acquirer = MetricsAcquirer(client=simulator)
    assert await acquirer.is_available() is False
    record = await acquirer.fetch()
    assert record.latency_ms == 16.5
    assert simulator.probe_calls == 1
    assert simulator.fetch_calls == 1


@pytest.mark.asyncio
async def test_fetch_falls_back_on_out_of_range_simulator_values() -> None:
    output = (
        "INIT\n"
        '{"latency_ms": 16.5, "jitter_ms": 2.1, "signal_strength_db": -65.2,'
        ' "packet_loss_rate": 0.5, "bandwidth_mbps": -5.0, "snr_db": -55.0,'
        ' "timestamp": 0}\n'
    )
    record = await MetricsAcquirer(client=FakeSimulatorClient(output=output)).fetch()
    _assert_synthetic(record)
