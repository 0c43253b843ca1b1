"""Health check response models."""

from pydantic import BaseModel


class DatabaseStatus(BaseModel):
    connected: bool
    type: str
    error: str | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    database: DatabaseStatus
    version: str
    environment: str
