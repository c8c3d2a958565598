from __future__ import annotations

from dataclasses import dataclass

from app.models.farming import Difficulty, FarmingAction, Priority
from app.models.protocol import ProtocolActivity, ProtocolCategory
from app.services.rewards import estimate_potential_reward

L1_GAS_COST = 15.0
L2_GAS_COST = 2.0


@dataclass(frozen=True)
class ActionTemplate:
    action: str
    category: str
    cost_multiplier: float
    time_required: float  # minutes
    difficulty: Difficulty


ACTION_TEMPLATES: dict[ProtocolCategory, tuple[ActionTemplate, ...]] = {
    ProtocolCategory.DEX: (
        ActionTemplate("Make a swap", "Trading", 1.0, 5, Difficulty.EASY),
    ),
    ProtocolCategory.LENDING: (
        ActionTemplate("Deposit and borrow", "Lending", 2.0, 10, Difficulty.MEDIUM),
    ),
    ProtocolCategory.BRIDGE: (
        ActionTemplate("Bridge assets", "Bridge", 1.5, 8, Difficulty.EASY),
    ),
}


def base_gas_cost(chain: str) -> float:
    return L1_GAS_COST if "ethereum" in chain.lower() else L2_GAS_COST


def generate_actions_for_protocol(protocol: ProtocolActivity) -> list[FarmingAction]:
    templates = ACTION_TEMPLATES.get(protocol.category, ())
    if not templates:
        return []

    base_cost = base_gas_cost(protocol.chain)
    # Reward is spread evenly over the transactions the protocol asks for
    per_tx_reward = estimate_potential_reward(protocol) / max(
        protocol.requirements.min_transactions, 1
    )

    return [
        FarmingAction(
            protocol=protocol.id,
            action=t.action,
            category=t.category,
            estimated_cost=base_cost * t.cost_multiplier,
            potential_reward=per_tx_reward,
            time_required=t.time_required,
            difficulty=t.difficulty,
            priority=Priority.HIGH,
        )
        for t in templates
    ]


def generate_actions_for_criteria(
    protocol: ProtocolActivity, criteria: list[str]
) -> list[FarmingAction]:
    """One action per missing criterion: the action whose category is named in
    the criterion, else the protocol's first action."""
    all_actions = generate_actions_for_protocol(protocol)
    if not all_actions:
        return []

    actions: list[FarmingAction] = []
    for criterion in criteria:
        text = criterion.lower()
        relevant = next(
            (a for a in all_actions if a.category.lower() in text),
            all_actions[0],
        )
        actions.append(relevant)
    return actions


def estimate_completion_cost(protocol: ProtocolActivity) -> float:
    actions = generate_actions_for_protocol(protocol)
    needed = protocol.requirements.min_transactions
    return sum(a.estimated_cost for a in actions[:needed])


def estimate_partial_completion_cost(
    protocol: ProtocolActivity, criteria: list[str]
) -> float:
    return sum(
        a.estimated_cost for a in generate_actions_for_criteria(protocol, criteria)
    )
