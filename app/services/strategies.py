from __future__ import annotations

import logging

from app.models.farming import Complexity, FarmingStrategy, RiskLevel
from app.models.protocol import ProtocolActivity
from app.services.actions import generate_actions_for_protocol
from app.services.rewards import estimate_potential_reward
from app.utils.numbers import safe_number

logger = logging.getLogger("strategies")

LAYER2_CHAINS = ("arbitrum", "optimism", "base", "zksync", "linea", "scroll")
BLUE_CHIP_MIN_TVL = 100_000_000
BLUE_CHIP_MIN_USERS = 100_000
QUICK_WIN_MAX_TRANSACTIONS = 5
QUICK_WIN_MIN_LIKELIHOOD = 50
QUICK_WIN_MAX_ACTIONS = 15


def _by_likelihood(protocols: list[ProtocolActivity]) -> list[ProtocolActivity]:
    return sorted(protocols, key=lambda p: p.airdrop_likelihood, reverse=True)


def _build(
    protocols: list[ProtocolActivity],
    *,
    name: str,
    description: str,
    timeframe: int,
    risk_level: RiskLevel,
    complexity: Complexity,
    max_actions: int | None = None,
) -> FarmingStrategy:
    actions = [a for p in protocols for a in generate_actions_for_protocol(p)]
    if max_actions is not None:
        actions = actions[:max_actions]

    return FarmingStrategy(
        name=name,
        description=description,
        target_protocols=[p.id for p in protocols],
        actions=actions,
        total_cost=sum(a.estimated_cost for a in actions),
        expected_reward=sum(estimate_potential_reward(p) for p in protocols),
        timeframe=timeframe,
        risk_level=risk_level,
        complexity=complexity,
    )


def quick_wins_strategy(catalog: list[ProtocolActivity]) -> FarmingStrategy:
    selected = _by_likelihood([
        p for p in catalog
        if p.requirements.min_transactions <= QUICK_WIN_MAX_TRANSACTIONS
        and p.airdrop_likelihood >= QUICK_WIN_MIN_LIKELIHOOD
    ])[:5]
    return _build(
        selected,
        name="Quick Wins",
        description="Low-effort, high-probability airdrops you can complete quickly",
        timeframe=14,
        risk_level=RiskLevel.LOW,
        complexity=Complexity.BEGINNER,
        max_actions=QUICK_WIN_MAX_ACTIONS,
    )


def high_value_strategy(catalog: list[ProtocolActivity]) -> FarmingStrategy:
    selected = sorted(catalog, key=estimate_potential_reward, reverse=True)[:5]
    return _build(
        selected,
        name="High Value",
        description="Focus on protocols with highest potential rewards",
        timeframe=60,
        risk_level=RiskLevel.MEDIUM,
        complexity=Complexity.INTERMEDIATE,
    )


def diversified_strategy(catalog: list[ProtocolActivity]) -> FarmingStrategy:
    # First-seen category order; the earliest protocol wins likelihood ties
    best: dict[str, ProtocolActivity] = {}
    for p in catalog:
        current = best.get(p.category)
        if current is None or p.airdrop_likelihood > current.airdrop_likelihood:
            best[p.category] = p
    return _build(
        list(best.values()),
        name="Diversified",
        description="Spread across all protocol categories for maximum coverage",
        timeframe=90,
        risk_level=RiskLevel.LOW,
        complexity=Complexity.INTERMEDIATE,
    )


def layer2_strategy(catalog: list[ProtocolActivity]) -> FarmingStrategy:
    selected = _by_likelihood([
        p for p in catalog
        if any(chain in p.chain.lower() for chain in LAYER2_CHAINS)
    ])[:6]
    return _build(
        selected,
        name="Layer 2 Focus",
        description="Gas-efficient strategy focused on L2 networks",
        timeframe=45,
        risk_level=RiskLevel.MEDIUM,
        complexity=Complexity.BEGINNER,
    )


def blue_chip_strategy(catalog: list[ProtocolActivity]) -> FarmingStrategy:
    selected = sorted(
        (
            p for p in catalog
            if p.tvl > BLUE_CHIP_MIN_TVL and p.user_count > BLUE_CHIP_MIN_USERS
        ),
        key=lambda p: p.tvl,
        reverse=True,
    )[:5]
    return _build(
        selected,
        name="Blue Chip",
        description="Established protocols with highest likelihood of rewards",
        timeframe=90,
        risk_level=RiskLevel.LOW,
        complexity=Complexity.INTERMEDIATE,
    )


ARCHETYPES = (
    quick_wins_strategy,
    high_value_strategy,
    diversified_strategy,
    layer2_strategy,
    blue_chip_strategy,
)


def generate_strategies(
    catalog: list[ProtocolActivity],
    budget: float,
    time_available_hours: float,
) -> list[FarmingStrategy]:
    """Build every archetype, keep the affordable ones, best ROI first."""
    budget = safe_number(budget)
    max_minutes = safe_number(time_available_hours) * 60
    strategies = [build(catalog) for build in ARCHETYPES]

    affordable = [
        s for s in strategies
        if s.target_protocols
        and s.total_cost <= budget
        and s.total_time <= max_minutes
    ]

    logger.debug(
        f"Strategies: {len(affordable)}/{len(strategies)} within "
        f"budget={budget}, minutes={max_minutes}"
    )
    return sorted(affordable, key=lambda s: s.expected_roi, reverse=True)
