from __future__ import annotations

from app.models.protocol import ProtocolActivity

# $1 of estimate per $1M TVL when a protocol has never dropped
TVL_PER_REWARD_UNIT = 1_000_000
MAX_TVL_REWARD = 1000.0


def estimate_potential_reward(protocol: ProtocolActivity) -> float:
    """Expected reward: historical mean (or a TVL proxy) scaled by likelihood."""
    weight = protocol.airdrop_likelihood / 100

    history = protocol.historical_airdrops
    if history:
        avg_reward = sum(a.avg_reward for a in history) / len(history)
        return avg_reward * weight

    base_estimate = min(protocol.tvl / TVL_PER_REWARD_UNIT, MAX_TVL_REWARD)
    return base_estimate * weight
