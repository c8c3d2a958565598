from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from app.utils.numbers import clamp, safe_number


class ProtocolCategory(str, Enum):
    DEX = "dex"
    LENDING = "lending"
    BRIDGE = "bridge"
    NFT = "nft"
    SOCIAL = "social"
    GAMING = "gaming"
    DEFI = "defi"


class HistoricalAirdrop(BaseModel):
    name: str
    date: datetime.date
    avg_reward: float = 0.0
    criteria: list[str] = []

    model_config = {"frozen": True}

    @field_validator("date", mode="before")
    @classmethod
    def _epoch_millis(cls, v: Any) -> Any:
        # Older catalog exports store JS millisecond timestamps
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            try:
                return datetime.datetime.fromtimestamp(
                    v / 1000, tz=datetime.timezone.utc
                ).date()
            except (OverflowError, OSError, ValueError) as e:
                raise ValueError(f"timestamp out of range: {v}") from e
        return v

    @field_validator("avg_reward", mode="before")
    @classmethod
    def _non_negative(cls, v: Any) -> float:
        return safe_number(v)


class Requirements(BaseModel):
    min_transactions: int = 0
    min_volume: float = 0.0
    min_time_active: int = 0  # days
    additional_criteria: list[str] = []

    model_config = {"frozen": True}

    @field_validator("min_transactions", "min_time_active", mode="before")
    @classmethod
    def _whole(cls, v: Any) -> int:
        return int(safe_number(v))

    @field_validator("min_volume", mode="before")
    @classmethod
    def _non_negative(cls, v: Any) -> float:
        return safe_number(v)


class ProtocolActivity(BaseModel):
    id: str
    name: str
    chain: str
    category: ProtocolCategory
    user_count: int = 0
    tvl: float = 0.0
    airdrop_likelihood: float = 0.0  # 0-100
    historical_airdrops: list[HistoricalAirdrop] = []
    requirements: Requirements = Requirements()

    model_config = {"frozen": True}

    @field_validator("user_count", mode="before")
    @classmethod
    def _whole(cls, v: Any) -> int:
        return int(safe_number(v))

    @field_validator("tvl", mode="before")
    @classmethod
    def _non_negative(cls, v: Any) -> float:
        return safe_number(v)

    @field_validator("airdrop_likelihood", mode="before")
    @classmethod
    def _percentage(cls, v: Any) -> float:
        return clamp(safe_number(v))


class UserProtocolActivity(BaseModel):
    transactions: int = 0
    volume: float = 0.0
    days_active: int = Field(default=0, alias="daysActive")
    completed_criteria: set[str] = Field(default_factory=set, alias="completedCriteria")

    model_config = {"populate_by_name": True}

    @field_validator("transactions", "days_active", mode="before")
    @classmethod
    def _whole(cls, v: Any) -> int:
        return int(safe_number(v))

    @field_validator("volume", mode="before")
    @classmethod
    def _non_negative(cls, v: Any) -> float:
        return safe_number(v)
