"""Schemas para el endpoint de health."""
from typing import Literal
from pydantic import BaseModel


class HealthOut(BaseModel):
    message: str
    timestamp: str
    mongodb: Literal["connected", "disconnected"]
    environment: str
