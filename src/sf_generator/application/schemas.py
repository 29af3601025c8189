"""Pydantic schemas for exposing decoded ids."""
from datetime import datetime

from pydantic import BaseModel, Field


class SnowflakeIdSchema(BaseModel):
    # int64 loses precision in JS clients, so the id travels as a string
    id: str = Field(..., pattern=r"^\d+$")
    timestamp_ms: int
    created_at: datetime
    datacenter_id: int = Field(..., ge=0)
    worker_id: int = Field(..., ge=0)
    sequence: int = Field(..., ge=0)
