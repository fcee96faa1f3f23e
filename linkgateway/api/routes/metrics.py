from __future__ import annotations

import logging
import time

from fastapi import APIRouter

from linkgateway.api.deps import Acquirer
from linkgateway.schemas.metrics import LinkMetrics, MetricsHealth, MetricsReceipt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/metrics")


@router.get("", response_model=LinkMetrics)
async def get_metrics(acquirer: Acquirer) -> LinkMetrics:
    logger.info("Received request for link metrics")
    record = await acquirer.fetch()
    return LinkMetrics.model_validate(record.to_wire())


@router.get("/health", response_model=MetricsHealth, tags=["meta"])
async def metrics_health(acquirer: Acquirer) -> MetricsHealth:
    available = await acquirer.is_available()
    return MetricsHealth(
        status="healthy" if available else "degraded",
        simulator_available=available,
        timestamp=int(time.time() * 1000),
    )


@router.post("", response_model=MetricsReceipt)
async def post_metrics(payload: LinkMetrics) -> MetricsReceipt:
    # Acknowledged only; external metrics are not stored.
    logger.info("Received external metrics: %s", payload.model_dump())
    return MetricsReceipt()
