from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from linkgateway.clients.simulator import SimulatorClient
from linkgateway.core.config import Settings
from linkgateway.services.metrics import MetricsAcquirer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_simulator_client(request: Request) -> SimulatorClient:
    return request.app.state.simulator_client


def get_metrics_acquirer(
    client: Annotated[SimulatorClient, Depends(get_simulator_client)],
) -> MetricsAcquirer:
    return MetricsAcquirer(client=client)


Acquirer = Annotated[MetricsAcquirer, Depends(get_metrics_acquirer)]
