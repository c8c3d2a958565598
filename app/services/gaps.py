from __future__ import annotations

import logging

from app.models.farming import EligibilityGap
from app.models.protocol import ProtocolActivity, UserProtocolActivity
from app.services.actions import (
    estimate_completion_cost,
    estimate_partial_completion_cost,
    generate_actions_for_criteria,
    generate_actions_for_protocol,
)
from app.services.rewards import estimate_potential_reward
from app.utils.numbers import clamp, format_amount, safe_div

logger = logging.getLogger("gaps")

PROGRESS_WEIGHT = 0.7
REWARD_PER_COST_WEIGHT = 0.3


def _untouched_gap(protocol: ProtocolActivity) -> EligibilityGap:
    req = protocol.requirements
    return EligibilityGap(
        protocol=protocol.id,
        current_progress=0,
        missing_criteria=[
            f"Make {req.min_transactions} transactions",
            f"Generate ${format_amount(req.min_volume)} volume",
            f"Be active for {req.min_time_active} days",
            *req.additional_criteria,
        ],
        actions_needed=generate_actions_for_protocol(protocol),
        estimated_cost_to_complete=estimate_completion_cost(protocol),
        potential_reward=estimate_potential_reward(protocol),
    )


def _partial_gap(
    protocol: ProtocolActivity, activity: UserProtocolActivity
) -> EligibilityGap | None:
    req = protocol.requirements
    missing: list[str] = []
    criteria: list[str] = []

    if activity.transactions < req.min_transactions:
        missing.append(
            f"Need {req.min_transactions - activity.transactions} more transactions"
        )
        criteria.append("transactions")

    if activity.volume < req.min_volume:
        missing.append(f"Need ${req.min_volume - activity.volume:.2f} more volume")
        criteria.append("volume")

    if activity.days_active < req.min_time_active:
        missing.append(
            f"Need {req.min_time_active - activity.days_active} more active days"
        )
        criteria.append("time")

    for criterion in req.additional_criteria:
        if criterion not in activity.completed_criteria and criterion not in criteria:
            missing.append(criterion)
            criteria.append(criterion)

    if not missing:
        return None

    # Volume and time shortfalls reduce the numerator but have no slot in the
    # denominator, so progress can bottom out at 0 before every field is met
    total = req.min_transactions + len(req.additional_criteria)
    progress = clamp(safe_div(total - len(missing), total) * 100)

    return EligibilityGap(
        protocol=protocol.id,
        current_progress=progress,
        missing_criteria=missing,
        actions_needed=generate_actions_for_criteria(protocol, criteria),
        estimated_cost_to_complete=estimate_partial_completion_cost(protocol, criteria),
        potential_reward=estimate_potential_reward(protocol),
    )


def _gap_score(gap: EligibilityGap) -> float:
    return (
        gap.current_progress * PROGRESS_WEIGHT
        + safe_div(gap.potential_reward, gap.estimated_cost_to_complete)
        * REWARD_PER_COST_WEIGHT
    )


def identify_eligibility_gaps(
    user_activity: dict[str, UserProtocolActivity],
    catalog: list[ProtocolActivity],
) -> list[EligibilityGap]:
    """Per-protocol shortfalls, closest-to-complete and best reward/cost first."""
    gaps: list[EligibilityGap] = []

    for protocol in catalog:
        activity = user_activity.get(protocol.id)
        if activity is None:
            gaps.append(_untouched_gap(protocol))
            continue
        gap = _partial_gap(protocol, activity)
        if gap is not None:
            gaps.append(gap)

    logger.debug(f"Eligibility gaps: {len(gaps)} of {len(catalog)} protocols")
    return sorted(gaps, key=_gap_score, reverse=True)
