from __future__ import annotations

import logging

from fastapi import APIRouter

from app.config import EngineConfig, settings
from app.models.farming import DISCLAIMER
from app.models.request import (
    CoverageRequest,
    GapRequest,
    SequenceRequest,
    StrategyRequest,
)
from app.services.actions import generate_actions_for_protocol
from app.services.cache import result_cache
from app.services.coverage import analyze_current_farming
from app.services.gaps import identify_eligibility_gaps
from app.services.predictor import predict_future_airdrops
from app.services.protocol_db import protocol_db
from app.services.sequencer import candidate_actions, optimize_action_sequence
from app.services.strategies import generate_strategies
from app.utils.address import normalize_wallet_address, validate_wallet_address
from app.utils.errors import error_response

logger = logging.getLogger("routes.farming")

router = APIRouter(prefix="/v1/farming")


def _validate_chain(chain: str | None) -> str | None:
    if chain and chain.lower() not in protocol_db.chains:
        return f"Unsupported chain: '{chain}'. Supported: {protocol_db.chains}"
    return None


def _validate_address(address: str | None) -> str | None:
    if address is not None and not validate_wallet_address(address.strip()):
        return f"Invalid wallet address: '{address}'"
    return None


@router.get("/protocols")
async def list_protocols(chain: str | None = None):
    err = _validate_chain(chain)
    if err:
        return error_response(400, err)

    catalog = protocol_db.catalog(chain)
    return {
        "count": len(catalog),
        "protocols": [p.model_dump(mode="json") for p in catalog],
    }


@router.post("/coverage")
async def farming_coverage(req: CoverageRequest):
    err = _validate_chain(req.chain) or _validate_address(req.address)
    if err:
        logger.warning(f"400 coverage: {err}")
        return error_response(400, err)

    address = normalize_wallet_address(req.address) if req.address else None
    logger.info(f"Coverage for address={address}, protocols={len(req.protocols)}")

    report = analyze_current_farming(
        req.protocols, protocol_db.catalog(req.chain), EngineConfig.from_settings()
    )
    return {
        "address": address,
        **report.model_dump(mode="json"),
        "disclaimer": DISCLAIMER,
    }


@router.post("/gaps")
async def farming_gaps(req: GapRequest):
    err = _validate_chain(req.chain) or _validate_address(req.address)
    if err:
        logger.warning(f"400 gaps: {err}")
        return error_response(400, err)

    address = normalize_wallet_address(req.address) if req.address else None
    logger.info(f"Gaps for address={address}, tracked={len(req.activity)}")

    gaps = identify_eligibility_gaps(req.activity, protocol_db.catalog(req.chain))
    return {
        "address": address,
        "gaps": [g.model_dump(mode="json") for g in gaps],
        "disclaimer": DISCLAIMER,
    }


@router.post("/strategies")
async def farming_strategies(req: StrategyRequest):
    err = _validate_chain(req.chain)
    if err:
        return error_response(400, err)

    budget = req.budget if req.budget is not None else settings.default_budget
    hours = (
        req.time_available_hours
        if req.time_available_hours is not None
        else settings.default_time_hours
    )
    chain = req.chain.lower() if req.chain else None

    def _compute() -> dict:
        strategies = generate_strategies(protocol_db.catalog(chain), budget, hours)
        return {
            "budget": budget,
            "time_available_hours": hours,
            "strategies": [s.model_dump(mode="json") for s in strategies],
            "disclaimer": DISCLAIMER,
        }

    return result_cache.get_or_compute(("strategies", chain, budget, hours), _compute)


@router.post("/sequence")
async def farming_sequence(req: SequenceRequest):
    err = _validate_chain(req.chain)
    if err:
        return error_response(400, err)

    if req.actions is not None:
        actions = req.actions
    elif req.protocols is not None:
        actions = [
            a for p in protocol_db.get_many(req.protocols)
            for a in generate_actions_for_protocol(p)
        ]
    else:
        actions = candidate_actions(protocol_db.catalog(req.chain), EngineConfig.from_settings())

    logger.info(
        f"Sequence over {len(actions)} actions, budget={req.max_budget}, "
        f"hours={req.max_time_hours}"
    )
    result = optimize_action_sequence(
        actions, req.max_budget, req.max_time_hours, EngineConfig.from_settings()
    )
    return result.model_dump(mode="json")


@router.get("/predictions")
async def farming_predictions(chain: str | None = None):
    err = _validate_chain(chain)
    if err:
        return error_response(400, err)

    chain = chain.lower() if chain else None

    def _compute() -> dict:
        predictions = predict_future_airdrops(
            protocol_db.catalog(chain), EngineConfig.from_settings()
        )
        return {
            "predictions": [p.model_dump(mode="json") for p in predictions],
            "disclaimer": DISCLAIMER,
        }

    return result_cache.get_or_compute(("predictions", chain), _compute)
