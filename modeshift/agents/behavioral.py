"""
Discrete choice model for mode split.

A multinomial logit over negative generalized costs: each mode's utility is
its persona-adjusted cost divided by a temperature, and probabilities are
the softmax of those utilities. Unavailable modes carry an infinite cost and
receive probability zero.
"""

from __future__ import annotations

from typing import Any, Protocol, Union

import numpy as np
from numpy.typing import NDArray

from .base import BehavioralModel, ModeSplit, Persona

# Cost sensitivity of the choice rule
SOFTMAX_TEMPERATURE = 0.6


class SupportsCostArray(Protocol):
    def as_array(self) -> NDArray: ...


def softmax(costs: Any, temperature: float = SOFTMAX_TEMPERATURE) -> NDArray:
    """
    Softmax over a cost vector (high cost = low probability).

    p_i = exp(-c_i/T - max_j(-c_j/T)) / sum_k exp(-c_k/T - max_j(-c_j/T))

    Infinite costs map to exactly zero probability.
    """
    costs = np.asarray(costs, dtype=float)
    finite = np.isfinite(costs)
    if not finite.any():
        raise ValueError("No options available for choice")

    utilities = np.full(costs.shape, -np.inf)
    utilities[finite] = -costs[finite] / temperature

    # Numerical stability: subtract max
    scaled = utilities - utilities[finite].max()
    exp_util = np.exp(scaled)
    return exp_util / exp_util.sum()


class SoftmaxChoiceModel(BehavioralModel):
    """
    Cost-based logit with persona preference adjustment.

    Car cost is scaled by (0.7 + 0.6 * car_dependency) and transit cost by
    (1.2 - 0.5 * transit_affinity) before the softmax; carpool, shuttle and
    taxi costs are used as-is.
    """

    def __init__(self, temperature: float = SOFTMAX_TEMPERATURE):
        self.temperature = temperature

    def adjust_costs(self, costs: NDArray, persona: Persona) -> NDArray:
        """Fold persona attitudes into the effective cost of car and transit."""
        adjusted = np.array(costs, dtype=float)
        adjusted[0] *= 0.7 + persona.car_dependency * 0.6
        adjusted[1] *= 1.2 - persona.transit_affinity * 0.5
        return adjusted

    def choice_probabilities(
        self,
        costs: NDArray,
        persona: Persona,
    ) -> NDArray:
        """Compute logit choice probabilities."""
        return softmax(self.adjust_costs(costs, persona), self.temperature)

    def mode_split(
        self,
        costs: Union[SupportsCostArray, NDArray],
        persona: Persona,
    ) -> ModeSplit:
        if hasattr(costs, "as_array"):
            costs = costs.as_array()
        return ModeSplit.from_array(self.choice_probabilities(costs, persona))

    def describe(self) -> dict[str, Any]:
        return {"model": type(self).__name__, "temperature": self.temperature}


_default_model = SoftmaxChoiceModel()


def compute_mode_split(
    costs: Union[SupportsCostArray, NDArray],
    persona: Persona,
) -> ModeSplit:
    """Mode split for a persona facing a cost vector, with default temperature."""
    return _default_model.mode_split(costs, persona)
