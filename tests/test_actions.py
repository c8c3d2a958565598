from __future__ import annotations

import pytest

from app.models.farming import Difficulty, Priority
from app.models.protocol import ProtocolCategory
from app.services.actions import (
    ACTION_TEMPLATES,
    base_gas_cost,
    estimate_completion_cost,
    estimate_partial_completion_cost,
    generate_actions_for_criteria,
    generate_actions_for_protocol,
)


class TestBaseGasCost:
    def test_ethereum_mainnet(self):
        assert base_gas_cost("ethereum") == 15

    def test_case_insensitive(self):
        assert base_gas_cost("Ethereum") == 15

    def test_layer2_flat(self):
        assert base_gas_cost("base") == 2
        assert base_gas_cost("arbitrum") == 2


class TestGenerateActionsForProtocol:
    def test_dex_scenario(self, make_protocol):
        """tvl=1e9, likelihood=80, minTx=5 → reward 800, 160 per action."""
        p = make_protocol(
            id="dex_one", chain="ethereum", category="dex",
            tvl=1e9, airdrop_likelihood=80, min_transactions=5,
        )
        actions = generate_actions_for_protocol(p)
        assert len(actions) == 1
        action = actions[0]
        assert action.protocol == "dex_one"
        assert action.action == "Make a swap"
        assert action.category == "Trading"
        assert action.potential_reward == pytest.approx(160.0)
        assert action.estimated_cost == 15
        assert action.time_required == 5
        assert action.difficulty == Difficulty.EASY
        assert action.roi == pytest.approx(160.0 / 15 * 100)

    def test_dex_on_l2_cost(self, make_protocol):
        action = generate_actions_for_protocol(
            make_protocol(chain="base", category="dex")
        )[0]
        assert action.estimated_cost == 2
        assert action.roi == pytest.approx(action.potential_reward / 2 * 100)

    def test_lending_template(self, make_protocol):
        action = generate_actions_for_protocol(
            make_protocol(chain="ethereum", category="lending")
        )[0]
        assert action.action == "Deposit and borrow"
        assert action.estimated_cost == 30
        assert action.time_required == 10
        assert action.difficulty == Difficulty.MEDIUM

    def test_bridge_template(self, make_protocol):
        action = generate_actions_for_protocol(
            make_protocol(chain="linea", category="bridge")
        )[0]
        assert action.action == "Bridge assets"
        assert action.estimated_cost == pytest.approx(3.0)
        assert action.time_required == 8
        assert action.difficulty == Difficulty.EASY

    @pytest.mark.parametrize("category", ["nft", "social", "gaming", "defi"])
    def test_categories_without_templates(self, make_protocol, category):
        assert generate_actions_for_protocol(make_protocol(category=category)) == []

    def test_every_action_is_high_priority(self, make_protocol):
        for category in ("dex", "lending", "bridge"):
            for a in generate_actions_for_protocol(make_protocol(category=category)):
                assert a.priority == Priority.HIGH

    def test_zero_min_transactions_does_not_divide_by_zero(self, make_protocol):
        p = make_protocol(tvl=1e9, airdrop_likelihood=80, min_transactions=0)
        action = generate_actions_for_protocol(p)[0]
        assert action.potential_reward == pytest.approx(800.0)

    def test_template_table_keys(self):
        assert set(ACTION_TEMPLATES) == {
            ProtocolCategory.DEX, ProtocolCategory.LENDING, ProtocolCategory.BRIDGE,
        }


class TestGenerateActionsForCriteria:
    def test_one_action_per_criterion(self, make_protocol):
        p = make_protocol(category="dex")
        actions = generate_actions_for_criteria(p, ["transactions", "volume", "time"])
        assert len(actions) == 3
        assert all(a.action == "Make a swap" for a in actions)

    def test_matches_category_named_in_criterion(self, make_protocol):
        p = make_protocol(category="bridge")
        actions = generate_actions_for_criteria(p, ["Bridge at least twice"])
        assert actions[0].category == "Bridge"

    def test_no_templates_no_actions(self, make_protocol):
        p = make_protocol(category="social")
        assert generate_actions_for_criteria(p, ["transactions"]) == []

    def test_empty_criteria(self, make_protocol):
        assert generate_actions_for_criteria(make_protocol(), []) == []


class TestCompletionCost:
    def test_full_completion_cost(self, make_protocol):
        p = make_protocol(chain="ethereum", category="lending", min_transactions=5)
        # One template, so only one action can be counted
        assert estimate_completion_cost(p) == 30

    def test_zero_required_transactions(self, make_protocol):
        assert estimate_completion_cost(make_protocol(min_transactions=0)) == 0

    def test_partial_completion_cost(self, make_protocol):
        p = make_protocol(chain="base", category="dex")
        assert estimate_partial_completion_cost(p, ["transactions", "volume"]) == 4
