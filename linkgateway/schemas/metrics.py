from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class LinkMetrics(BaseModel):
    latency_ms: float
    jitter_ms: float
    signal_strength_db: float
    packet_loss_rate: float
    bandwidth_mbps: float
    snr_db: float
    timestamp: int = Field(gt=0)


class MetricsHealth(BaseModel):
    status: Literal["healthy", "degraded"]
    simulator_available: bool
    timestamp: int


class MetricsReceipt(BaseModel):
    status: str = "received"
    message: str = "Metrics received successfully"


class ErrorResponse(BaseModel):
    error: str
    message: str
