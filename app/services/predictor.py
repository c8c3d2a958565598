from __future__ import annotations

import logging

from app.config import EngineConfig
from app.models.farming import AirdropPrediction
from app.models.protocol import HistoricalAirdrop, ProtocolActivity
from app.utils.numbers import clamp, format_amount

logger = logging.getLogger("predictor")

HIGH_TVL = 100_000_000
LARGE_USER_BASE = 50_000
REGULAR_INTERVAL_DAYS = 365

HIGH_TVL_BOOST = 15
USER_BASE_BOOST = 10
REGULAR_HISTORY_BOOST = 20


def average_days_between(airdrops: list[HistoricalAirdrop]) -> float:
    """Mean gap between consecutive drops; a single drop counts as yearly."""
    if len(airdrops) < 2:
        return float(REGULAR_INTERVAL_DAYS)
    dates = sorted(a.date for a in airdrops)
    intervals = [(later - earlier).days for earlier, later in zip(dates, dates[1:])]
    return sum(intervals) / len(intervals)


def estimate_timeline(likelihood: float) -> str:
    if likelihood > 70:
        return "3-6 months"
    if likelihood > 50:
        return "6-12 months"
    if likelihood > 30:
        return "12+ months"
    return "Unknown"


def preparation_steps(protocol: ProtocolActivity) -> list[str]:
    req = protocol.requirements
    return [
        f"Use {protocol.name} regularly ({req.min_transactions}+ transactions)",
        f"Maintain active position for {req.min_time_active}+ days",
        f"Generate at least ${format_amount(req.min_volume)} in volume",
        *req.additional_criteria,
    ]


def predict_protocol(protocol: ProtocolActivity) -> AirdropPrediction:
    reasoning: list[str] = []
    likelihood = protocol.airdrop_likelihood
    never_dropped = not protocol.historical_airdrops

    if protocol.tvl > HIGH_TVL and never_dropped:
        reasoning.append("High TVL without token - potential future airdrop")
        likelihood += HIGH_TVL_BOOST

    if protocol.user_count > LARGE_USER_BASE and never_dropped:
        reasoning.append("Large user base without reward distribution")
        likelihood += USER_BASE_BOOST

    if not never_dropped:
        if average_days_between(protocol.historical_airdrops) < REGULAR_INTERVAL_DAYS:
            reasoning.append("History of regular airdrops")
            likelihood += REGULAR_HISTORY_BOOST

    likelihood = clamp(likelihood)
    return AirdropPrediction(
        protocol=protocol.id,
        likelihood=likelihood,
        estimated_timeline=estimate_timeline(likelihood),
        reasoning=reasoning,
        preparation_steps=preparation_steps(protocol),
    )


def predict_future_airdrops(
    catalog: list[ProtocolActivity], config: EngineConfig | None = None
) -> list[AirdropPrediction]:
    config = config or EngineConfig.from_settings()
    predictions = [
        prediction
        for prediction in map(predict_protocol, catalog)
        if prediction.likelihood >= config.min_likelihood
    ]
    logger.debug(f"Predictions: {len(predictions)} of {len(catalog)} above threshold")
    return sorted(predictions, key=lambda p: p.likelihood, reverse=True)
