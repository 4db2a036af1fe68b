"""FastAPI surface for the wildlife alert engine.

Run with:
    uvicorn wildlife_alert.api:app --reload --port 8000

POST /alerts with a JSON body matching the AlertRequest schema, then drive the
alert through /alerts/{id}/dispatch and /alerts/{id}/resolve.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wildlife_alert.errors import (
    AlertNotFound,
    DuplicateAlert,
    InvalidTransition,
    NoStationsAvailable,
)
from wildlife_alert.lifecycle import AlertManager
from wildlife_alert.main import build_manager, load_stations
from wildlife_alert.models import Alert, AlertRequest, AlertStats, Notification, Route
from wildlife_alert.settings import settings

log = logging.getLogger(__name__)


def create_app(manager: AlertManager | None = None) -> FastAPI:
    if manager is None:
        manager = build_manager(load_stations(settings))

    app = FastAPI(
        title="Wildlife Alert Engine",
        version="0.1.0",
        description="Scores wildlife detections, tracks response status and routes ranger teams.",
    )
    app.state.manager = manager
    log.info(
        "Alert API ready: %d stations, provider=%s",
        len(manager.router.stations), type(manager.router.provider).__name__,
    )

    @app.exception_handler(AlertNotFound)
    async def _not_found(request: Request, exc: AlertNotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InvalidTransition)
    async def _invalid_transition(request: Request, exc: InvalidTransition):
        return JSONResponse(
            status_code=409,
            content={"detail": str(exc), "current": exc.current, "requested": exc.requested},
        )

    @app.exception_handler(DuplicateAlert)
    async def _duplicate(request: Request, exc: DuplicateAlert):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(NoStationsAvailable)
    async def _no_stations(request: Request, exc: NoStationsAvailable):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/alerts", response_model=list[Alert])
    async def list_alerts(active: bool = False):
        return manager.active_alerts() if active else manager.alerts

    @app.post("/alerts", response_model=Alert, status_code=201)
    async def create_alert(payload: AlertRequest):
        return manager.create_alert(payload.detection, payload.direction, payload.speed_kmh)

    @app.get("/alerts/{alert_id}", response_model=Alert)
    async def get_alert(alert_id: str):
        return manager.get(alert_id)

    @app.post("/alerts/{alert_id}/dispatch", response_model=Alert)
    async def dispatch_alert(alert_id: str):
        return manager.dispatch(alert_id)

    @app.post("/alerts/{alert_id}/resolve", response_model=Alert)
    async def resolve_alert(alert_id: str):
        return manager.resolve(alert_id)

    @app.get("/alerts/{alert_id}/route", response_model=Route)
    async def route_alert(alert_id: str):
        return await manager.route_for(alert_id)

    @app.get("/stats", response_model=AlertStats)
    async def stats():
        return manager.stats()

    @app.get("/notifications", response_model=list[Notification])
    async def notifications():
        return manager.notifications.items if manager.notifications is not None else []

    @app.post("/notifications/{notification_id}/read")
    async def mark_read(notification_id: str):
        found = manager.notifications is not None and manager.notifications.mark_read(notification_id)
        if not found:
            return JSONResponse(status_code=404, content={"detail": "Notification not found"})
        return {"id": notification_id, "read": True}

    return app


app = create_app()
