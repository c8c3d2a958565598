from __future__ import annotations

import pytest

from app.models.farming import Difficulty, FarmingAction, Priority
from app.models.protocol import (
    HistoricalAirdrop,
    ProtocolActivity,
    Requirements,
    UserProtocolActivity,
)


@pytest.fixture
def make_protocol():
    """Factory fixture for creating ProtocolActivity instances."""

    def _make(
        id: str = "test_proto",
        name: str | None = None,
        chain: str = "base",
        category: str = "dex",
        user_count: int = 1000,
        tvl: float = 1_000_000_000,
        airdrop_likelihood: float = 80,
        historical_airdrops: list[HistoricalAirdrop] | None = None,
        min_transactions: int = 5,
        min_volume: float = 100,
        min_time_active: int = 30,
        additional_criteria: list[str] | None = None,
    ) -> ProtocolActivity:
        return ProtocolActivity(
            id=id,
            name=name or id.replace("_", " ").title(),
            chain=chain,
            category=category,
            user_count=user_count,
            tvl=tvl,
            airdrop_likelihood=airdrop_likelihood,
            historical_airdrops=historical_airdrops or [],
            requirements=Requirements(
                min_transactions=min_transactions,
                min_volume=min_volume,
                min_time_active=min_time_active,
                additional_criteria=additional_criteria or [],
            ),
        )

    return _make


@pytest.fixture
def make_airdrop():
    """Factory fixture for creating HistoricalAirdrop instances."""

    def _make(
        name: str = "Season 1",
        date: str = "2024-01-01",
        avg_reward: float = 500,
        criteria: list[str] | None = None,
    ) -> HistoricalAirdrop:
        return HistoricalAirdrop(
            name=name, date=date, avg_reward=avg_reward, criteria=criteria or []
        )

    return _make


@pytest.fixture
def make_activity():
    """Factory fixture for creating UserProtocolActivity instances."""

    def _make(
        transactions: int = 0,
        volume: float = 0,
        days_active: int = 0,
        completed_criteria: set[str] | None = None,
    ) -> UserProtocolActivity:
        return UserProtocolActivity(
            transactions=transactions,
            volume=volume,
            days_active=days_active,
            completed_criteria=completed_criteria or set(),
        )

    return _make


@pytest.fixture
def make_action():
    """Factory fixture for creating FarmingAction instances."""

    def _make(
        protocol: str = "test_proto",
        action: str = "Make a swap",
        category: str = "Trading",
        estimated_cost: float = 2,
        potential_reward: float = 10,
        time_required: float = 5,
        difficulty: Difficulty = Difficulty.EASY,
        priority: Priority = Priority.HIGH,
    ) -> FarmingAction:
        return FarmingAction(
            protocol=protocol,
            action=action,
            category=category,
            estimated_cost=estimated_cost,
            potential_reward=potential_reward,
            time_required=time_required,
            difficulty=difficulty,
            priority=priority,
        )

    return _make
