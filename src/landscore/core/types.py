"""Core type definitions shared across all LandScore modules."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class UserRole(StrEnum):
    """Caller roles produced by the identity collaborator."""

    ADMIN = "admin"
    ANALYST = "analyst"
    VIEWER = "viewer"


class ZoningCode(StrEnum):
    AGRICULTURAL = "AGRICULTURAL"
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    INDUSTRIAL = "INDUSTRIAL"
    MIXED_USE = "MIXED_USE"


class SoilType(StrEnum):
    CLAY = "CLAY"
    LOAM = "LOAM"
    SANDY_LOAM = "SANDY_LOAM"
    RED_SOIL = "RED_SOIL"
    BLACK_SOIL = "BLACK_SOIL"
    ALLUVIAL = "ALLUVIAL"


class CroplandClass(StrEnum):
    PRIME = "PRIME"
    UNIQUE = "UNIQUE"
    STATEWIDE = "STATEWIDE"
    LOCAL = "LOCAL"
    NOT_PRIME = "NOT_PRIME"


class ToolDefinition(BaseModel):
    """Registry entry for an operation exposed to the assistant."""

    id: str
    name: str
    description: str
    version: str
    input_schema: dict[str, Any]
    output_schema: dict[str, Any] = Field(default_factory=dict)
    idempotent: bool = True
    timeout_ms: int = 10_000
