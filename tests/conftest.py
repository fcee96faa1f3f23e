from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from linkgateway.api import deps
from linkgateway.core.config import Settings, SimulatorMode
from linkgateway.factory import create_app
from tests.fakes import SAMPLE_OUTPUT, FakeSimulatorClient


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=False,
        docs_enabled=False,
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
        simulator_mode=SimulatorMode.PROCESS,
        simulator_command="link-sim-not-installed",
        simulator_url="http://simulator.test:8082",
        simulator_timeout_ms=1000,
    )


@pytest.fixture()
def simulator() -> FakeSimulatorClient:
    return FakeSimulatorClient(output=SAMPLE_OUTPUT)


@pytest.fixture()
def client(settings: Settings, simulator: FakeSimulatorClient) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_simulator_client] = lambda: simulator
    with TestClient(app) as client:
        yield client
