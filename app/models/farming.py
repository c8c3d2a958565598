from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, computed_field, field_validator

from app.models.protocol import ProtocolActivity
from app.utils.numbers import clamp, safe_div, safe_number


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Complexity(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class FarmingAction(BaseModel):
    protocol: str
    action: str
    category: str  # Trading, Lending, Bridge
    estimated_cost: float = 0.0  # gas + protocol fees
    potential_reward: float = 0.0
    time_required: float = 0.0  # minutes
    difficulty: Difficulty = Difficulty.EASY
    priority: Priority = Priority.HIGH

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "protocol": "morpho_base",
                "action": "Deposit and borrow",
                "category": "Lending",
                "estimated_cost": 4.0,
                "potential_reward": 140.0,
                "time_required": 10,
                "difficulty": "medium",
                "priority": "high",
                "roi": 3500.0,
            }
        },
    }

    @field_validator("estimated_cost", "potential_reward", "time_required", mode="before")
    @classmethod
    def _non_negative(cls, v: Any) -> float:
        return safe_number(v)

    @computed_field
    @property
    def roi(self) -> float:
        return safe_div(self.potential_reward, self.estimated_cost) * 100


class FarmingStrategy(BaseModel):
    name: str
    description: str
    target_protocols: list[str] = []
    actions: list[FarmingAction] = []
    total_cost: float = 0.0
    expected_reward: float = 0.0
    timeframe: int = 0  # days
    risk_level: RiskLevel = RiskLevel.LOW
    complexity: Complexity = Complexity.BEGINNER

    @computed_field
    @property
    def expected_roi(self) -> float:
        return safe_div(self.expected_reward, self.total_cost) * 100

    @computed_field
    @property
    def total_time(self) -> float:
        """Summed action time in minutes."""
        return sum(a.time_required for a in self.actions)


class EligibilityGap(BaseModel):
    protocol: str
    current_progress: float = 0.0  # 0-100
    missing_criteria: list[str] = []
    actions_needed: list[FarmingAction] = []
    estimated_cost_to_complete: float = 0.0
    potential_reward: float = 0.0

    @field_validator("current_progress", mode="before")
    @classmethod
    def _percentage(cls, v: Any) -> float:
        return clamp(safe_number(v))


class CoverageReport(BaseModel):
    covered: list[ProtocolActivity] = []
    missed: list[ProtocolActivity] = []
    diversification_score: float = 0.0
    estimated_total_reward: float = 0.0
    recommendations: list[str] = []


class SequenceResult(BaseModel):
    sequence: list[FarmingAction] = []
    total_cost: float = 0.0
    total_time: float = 0.0  # hours
    expected_reward: float = 0.0
    efficiency: float = 0.0


class AirdropPrediction(BaseModel):
    protocol: str
    likelihood: float
    estimated_timeline: str = "Unknown"
    reasoning: list[str] = []
    preparation_steps: list[str] = []


DISCLAIMER = (
    "Reward figures are heuristic estimates derived from historical airdrops, "
    "TVL and protocol activity. Actual eligibility and allocation are decided "
    "solely by each protocol. This is not financial advice."
)
