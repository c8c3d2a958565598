from __future__ import annotations

import pytest

from app.config import EngineConfig
from app.services.predictor import (
    average_days_between,
    estimate_timeline,
    predict_future_airdrops,
    predict_protocol,
    preparation_steps,
)


class TestAverageDaysBetween:
    def test_single_airdrop_counts_as_yearly(self, make_airdrop):
        assert average_days_between([make_airdrop()]) == 365

    def test_unsorted_input(self, make_airdrop):
        airdrops = [
            make_airdrop(date="2024-07-01"),
            make_airdrop(date="2024-01-01"),
            make_airdrop(date="2024-04-01"),
        ]
        # 91 days then 91 days
        assert average_days_between(airdrops) == pytest.approx(91.0)

    def test_does_not_reorder_input(self, make_airdrop):
        airdrops = [make_airdrop(name="late", date="2024-07-01"), make_airdrop(name="early")]
        average_days_between(airdrops)
        assert [a.name for a in airdrops] == ["late", "early"]


class TestEstimateTimeline:
    @pytest.mark.parametrize(
        "likelihood,expected",
        [
            (100, "3-6 months"),
            (71, "3-6 months"),
            (70, "6-12 months"),
            (51, "6-12 months"),
            (50, "12+ months"),
            (31, "12+ months"),
            (30, "Unknown"),
            (0, "Unknown"),
        ],
    )
    def test_buckets(self, likelihood, expected):
        assert estimate_timeline(likelihood) == expected


class TestPredictProtocol:
    def test_tokenless_high_tvl_large_user_base(self, make_protocol):
        p = make_protocol(tvl=2e8, user_count=60_000, airdrop_likelihood=50)
        prediction = predict_protocol(p)
        assert prediction.likelihood == 75
        assert prediction.estimated_timeline == "3-6 months"
        assert prediction.reasoning == [
            "High TVL without token - potential future airdrop",
            "Large user base without reward distribution",
        ]

    def test_regular_history(self, make_protocol, make_airdrop):
        p = make_protocol(
            tvl=5e9, user_count=1_000_000, airdrop_likelihood=30,
            historical_airdrops=[
                make_airdrop(date="2024-01-01"), make_airdrop(date="2024-06-01"),
            ],
        )
        prediction = predict_protocol(p)
        # History blocks the tokenless boosts
        assert prediction.reasoning == ["History of regular airdrops"]
        assert prediction.likelihood == 50

    def test_single_past_airdrop_gets_no_boost(self, make_protocol, make_airdrop):
        p = make_protocol(airdrop_likelihood=45, historical_airdrops=[make_airdrop()])
        prediction = predict_protocol(p)
        assert prediction.reasoning == []
        assert prediction.likelihood == 45

    def test_sparse_history_no_boost(self, make_protocol, make_airdrop):
        p = make_protocol(
            airdrop_likelihood=45,
            historical_airdrops=[
                make_airdrop(date="2021-01-01"), make_airdrop(date="2023-01-01"),
            ],
        )
        assert predict_protocol(p).likelihood == 45

    def test_clamped_to_100(self, make_protocol):
        p = make_protocol(tvl=1e10, user_count=1_000_000, airdrop_likelihood=95)
        assert predict_protocol(p).likelihood == 100

    def test_thresholds_are_strict(self, make_protocol):
        p = make_protocol(tvl=1e8, user_count=50_000, airdrop_likelihood=45)
        prediction = predict_protocol(p)
        assert prediction.reasoning == []
        assert prediction.likelihood == 45


class TestPreparationSteps:
    def test_structured_requirements_then_extras(self, make_protocol):
        p = make_protocol(
            id="linea_bridge", name="Linea Bridge",
            min_transactions=4, min_volume=500, min_time_active=60,
            additional_criteria=["Complete Linea Voyage quests"],
        )
        assert preparation_steps(p) == [
            "Use Linea Bridge regularly (4+ transactions)",
            "Maintain active position for 60+ days",
            "Generate at least $500 in volume",
            "Complete Linea Voyage quests",
        ]


class TestPredictFutureAirdrops:
    def test_threshold_and_order(self, make_protocol):
        catalog = [
            make_protocol(id="low", tvl=0, user_count=0, airdrop_likelihood=39),
            make_protocol(id="edge", tvl=0, user_count=0, airdrop_likelihood=40),
            make_protocol(id="boosted", tvl=2e8, user_count=0, airdrop_likelihood=30),
            make_protocol(id="top", tvl=0, user_count=0, airdrop_likelihood=90),
        ]
        predictions = predict_future_airdrops(catalog, EngineConfig(min_likelihood=40))
        assert [p.protocol for p in predictions] == ["top", "boosted", "edge"]
        assert predictions[1].likelihood == 45

    def test_empty_catalog(self):
        assert predict_future_airdrops([]) == []

    def test_deterministic(self, make_protocol):
        catalog = [make_protocol(id=f"p{i}", airdrop_likelihood=40 + i) for i in range(5)]
        first = [p.model_dump() for p in predict_future_airdrops(catalog)]
        second = [p.model_dump() for p in predict_future_airdrops(catalog)]
        assert first == second
