from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PairingPolicy
from .pairing.base import PairingStrategy
from .pairing.latest_open_strategy import LatestOpenPairing
from .pairing.stack_strategy import StackPairing


@dataclass
class PairingStrategyFactory:
    """Factory Pattern: map a named pairing policy to its strategy."""

    def for_policy(self, policy: PairingPolicy) -> PairingStrategy:
        policy = PairingPolicy(policy)
        if policy == PairingPolicy.LIFO_STACK:
            return StackPairing()
        return LatestOpenPairing()
