"""Pydantic models for health endpoints."""

from datetime import datetime
from typing import Dict

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Response model for service health checks."""

    status: str = "healthy"
    environment: str
    timestamp: datetime
    entity_counts: Dict[str, int] = {}
