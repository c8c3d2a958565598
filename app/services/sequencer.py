from __future__ import annotations

import logging

from app.config import EngineConfig
from app.models.farming import FarmingAction, SequenceResult
from app.models.protocol import ProtocolActivity
from app.services.actions import generate_actions_for_protocol
from app.utils.numbers import safe_div, safe_number

logger = logging.getLogger("sequencer")


def within_gas_budget(action: FarmingAction, fraction: float) -> bool:
    """Gas spend on an action stays under `fraction` of what it can earn."""
    return action.estimated_cost <= action.potential_reward * fraction


def _rank(action: FarmingAction) -> tuple[bool, float]:
    # roi is 0 for free actions; a free action that earns anything outranks all paid ones
    free = action.estimated_cost == 0 and action.potential_reward > 0
    return free, action.roi


def candidate_actions(
    catalog: list[ProtocolActivity], config: EngineConfig | None = None
) -> list[FarmingAction]:
    config = config or EngineConfig.from_settings()
    return [
        action
        for p in catalog
        if p.airdrop_likelihood >= config.min_likelihood
        for action in generate_actions_for_protocol(p)
    ]


def optimize_action_sequence(
    actions: list[FarmingAction],
    max_budget: float,
    max_time_hours: float,
    config: EngineConfig | None = None,
) -> SequenceResult:
    """Greedy knapsack by ROI under a cost and a time ceiling.

    Actions are taken in descending ROI order and admitted whenever both
    running totals still fit; an action that does not fit is skipped and the
    scan continues. This is an approximation, not an exact solver: a cheaper
    combination of lower-ROI actions can occasionally earn more.
    """
    config = config or EngineConfig.from_settings()
    max_budget = safe_number(max_budget)
    max_minutes = safe_number(max_time_hours) * 60

    candidates = actions
    if config.enforce_gas_budget:
        candidates = [
            a for a in actions
            if within_gas_budget(a, config.max_gas_budget_fraction)
        ]

    sequence: list[FarmingAction] = []
    total_cost = 0.0
    total_minutes = 0.0
    expected_reward = 0.0

    for action in sorted(candidates, key=_rank, reverse=True):
        if (
            total_cost + action.estimated_cost <= max_budget
            and total_minutes + action.time_required <= max_minutes
        ):
            sequence.append(action)
            total_cost += action.estimated_cost
            total_minutes += action.time_required
            expected_reward += action.potential_reward

    logger.debug(
        f"Sequence: picked {len(sequence)}/{len(candidates)} actions, "
        f"cost={total_cost:.2f}/{max_budget}, minutes={total_minutes}/{max_minutes}"
    )

    return SequenceResult(
        sequence=sequence,
        total_cost=total_cost,
        total_time=total_minutes / 60,
        expected_reward=expected_reward,
        efficiency=safe_div(expected_reward, total_cost) * 100,
    )
