"""Core type definitions shared across all Presolve modules."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class StakeholderType(StrEnum):
    """Category of the filing party."""

    INDIVIDUAL = "Individual"
    ENTERPRISE_LENDER = "Enterprise/Lender"
    NEUTRAL = "Neutral"


class ServiceTrack(StrEnum):
    """Dispute-resolution mode requested by the filing party."""

    NEGOTIATION = "Negotiation"
    MEDIATION = "Mediation"
    ARBITRATION = "Arbitration"


class UrgencyLevel(StrEnum):
    """Priority tier of a filing.

    Each tier implies a response-time expectation (see the wizard definition
    labels); nothing in this package enforces it.
    """

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    IMMEDIATE = "Immediate Action Required"


class HealthStatus(BaseModel):
    """Health check result for an upstream service."""

    service: str
    healthy: bool
    latency_ms: float | None = None
    details: dict[str, Any] = Field(default_factory=dict)
