"""Health check payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    environment: Literal["dev", "prod"]
    registration_policy: Literal["signup", "bootstrap"]
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 through the connection pool",
    )
