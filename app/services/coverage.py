from __future__ import annotations

import logging
from collections.abc import Iterable

from app.config import EngineConfig
from app.models.farming import CoverageReport
from app.models.protocol import ProtocolActivity, ProtocolCategory
from app.services.rewards import estimate_potential_reward

logger = logging.getLogger("coverage")

# Fixed denominator: the closed set of known categories, not what the catalog holds
KNOWN_CATEGORY_COUNT = len(ProtocolCategory)


def analyze_current_farming(
    user_protocol_ids: Iterable[str],
    catalog: list[ProtocolActivity],
    config: EngineConfig | None = None,
) -> CoverageReport:
    """Which catalog protocols a wallet already farms, and what it is missing."""
    config = config or EngineConfig.from_settings()
    user_ids = set(user_protocol_ids)

    covered = [p for p in catalog if p.id in user_ids]
    missed = sorted(
        (
            p for p in catalog
            if p.id not in user_ids and p.airdrop_likelihood >= config.min_likelihood
        ),
        key=lambda p: p.airdrop_likelihood,
        reverse=True,
    )

    categories = {p.category for p in covered}
    diversification_score = min(100.0, len(categories) / KNOWN_CATEGORY_COUNT * 100)
    estimated_total_reward = sum(estimate_potential_reward(p) for p in covered)

    recommendations: list[str] = []
    if diversification_score < 50:
        recommendations.append(
            "Increase diversification across different protocol categories"
        )
    if len(missed) > 5:
        recommendations.append(
            f"You're missing {len(missed)} high-potential protocols"
        )
    if covered:
        avg_tx_needed = sum(
            p.requirements.min_transactions for p in covered
        ) / len(covered)
        if avg_tx_needed > 10:
            recommendations.append(
                "Focus on completing requirements for protocols you already use"
            )

    logger.debug(
        f"Coverage: covered={len(covered)}, missed={len(missed)}, "
        f"diversification={diversification_score:.1f}"
    )

    return CoverageReport(
        covered=covered,
        missed=missed,
        diversification_score=diversification_score,
        estimated_total_reward=estimated_total_reward,
        recommendations=recommendations,
    )
