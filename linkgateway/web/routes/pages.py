from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from linkgateway.api.deps import get_settings
from linkgateway.core.config import Settings
from linkgateway.web.templates import templates

router = APIRouter()


def _render(request: Request, template: str, title: str, settings: Settings):
    return templates.TemplateResponse(
        request,
        template,
        {
            "request": request,
            "title": title,
            "simulator_mode": settings.simulator_mode.value,
        },
    )


@router.get("/")
def home_page(request: Request, settings: Annotated[Settings, Depends(get_settings)]):
    return _render(request, "home.html", "Microwave Link Gateway", settings)


@router.get("/dashboard")
def dashboard_page(request: Request, settings: Annotated[Settings, Depends(get_settings)]):
    return _render(request, "dashboard.html", "Dashboard", settings)


@router.get("/metrics-page")
def metrics_page(request: Request, settings: Annotated[Settings, Depends(get_settings)]):
    return _render(request, "metrics.html", "Link Metrics", settings)


@router.get("/health-page")
def health_page(request: Request, settings: Annotated[Settings, Depends(get_settings)]):
    return _render(request, "health.html", "Health", settings)
