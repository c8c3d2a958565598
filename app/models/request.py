from __future__ import annotations

from pydantic import BaseModel, Field

from app.models.farming import FarmingAction
from app.models.protocol import UserProtocolActivity


class CoverageRequest(BaseModel):
    address: str | None = None
    protocols: list[str] = Field(default_factory=list, alias="protocolIds")
    chain: str | None = None

    model_config = {"populate_by_name": True}


class GapRequest(BaseModel):
    address: str | None = None
    activity: dict[str, UserProtocolActivity] = Field(default_factory=dict)
    chain: str | None = None

    model_config = {"populate_by_name": True}


class StrategyRequest(BaseModel):
    budget: float | None = Field(default=None, ge=0)
    time_available_hours: float | None = Field(
        default=None, ge=0, alias="timeAvailableHours"
    )
    chain: str | None = None

    model_config = {"populate_by_name": True}


class SequenceRequest(BaseModel):
    actions: list[FarmingAction] | None = None
    protocols: list[str] | None = Field(default=None, alias="protocolIds")
    max_budget: float = Field(ge=0, alias="maxBudget")
    max_time_hours: float = Field(ge=0, alias="maxTimeHours")
    chain: str | None = None

    model_config = {"populate_by_name": True}
