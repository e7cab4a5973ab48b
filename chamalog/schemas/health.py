"""Readiness report for load balancers and the dashboard's status badge."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    version: str
    environment: str
    database: Literal["connected", "disconnected"]
    missing_tables: list[str] = Field(
        default_factory=list,
        description="Tracking tables not found (run `alembic upgrade head`)",
    )
