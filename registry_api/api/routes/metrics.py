"""Prometheus metrics endpoint.

Open outside production. In production it answers only when METRICS_TOKEN
is configured and the caller presents it as a bearer token or in
X-Metrics-Token.
"""

from __future__ import annotations

import hmac

from fastapi import APIRouter, Header, HTTPException, Request, Response, status
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


def _presented_token(authorization: str | None, x_metrics_token: str | None) -> str | None:
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return x_metrics_token


@router.get("/metrics", include_in_schema=False)
async def metrics_endpoint(
    request: Request,
    authorization: str | None = Header(default=None),
    x_metrics_token: str | None = Header(default=None, alias="X-Metrics-Token"),
) -> Response:
    settings = request.app.state.settings
    if settings.environment == "production":
        if not settings.metrics_token:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

        token = _presented_token(authorization, x_metrics_token)
        if not token or not hmac.compare_digest(token, settings.metrics_token):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
