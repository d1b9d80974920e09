from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import torch

from bayes_core.state import AppState, BallColor, BoxConfig

COLORS: Tuple[BallColor, BallColor] = (BallColor.RED, BallColor.BLUE)
BOX_PRIOR = 0.5


@dataclass
class BayesianEngineConfig:
    dtype: torch.dtype = torch.float64
    device: torch.device = torch.device("cpu")


@dataclass(frozen=True)
class ProbabilityReport:
    box1: BoxConfig
    box2: BoxConfig
    evidence: Optional[BallColor]
    priors: Tuple[float, float]
    likelihoods: Tuple[Dict[BallColor, float], Dict[BallColor, float]]
    marginals: Dict[BallColor, float]
    posteriors: Tuple[float, float]

    @property
    def boxes(self) -> Tuple[BoxConfig, BoxConfig]:
        return (self.box1, self.box2)

    def likelihood(self, box_index: int, color: BallColor) -> float:
        return self.likelihoods[box_index][color]

    def marginal(self, color: BallColor) -> float:
        return self.marginals[color]


class BayesianEngine:
    """Computes priors, likelihoods, marginals and posteriors for two boxes."""

    def __init__(self, config: Optional[BayesianEngineConfig] = None) -> None:
        self.config = config or BayesianEngineConfig()

    def priors(self) -> torch.Tensor:
        return torch.full(
            (2,), BOX_PRIOR, dtype=self.config.dtype, device=self.config.device
        )

    def likelihoods(self, box1: BoxConfig, box2: BoxConfig) -> torch.Tensor:
        """Rows are boxes, columns are (red, blue). Empty boxes give zeros."""
        for box in (box1, box2):
            if box.red < 0 or box.blue < 0:
                raise ValueError(f"Ball counts must be non-negative: {box}")

        counts = torch.tensor(
            [[box1.red, box1.blue], [box2.red, box2.blue]],
            dtype=self.config.dtype,
            device=self.config.device,
        )
        totals = counts.sum(dim=1, keepdim=True)
        return torch.where(totals > 0, counts / totals.clamp_min(1.0), torch.zeros_like(counts))

    def compute(
        self,
        box1: BoxConfig,
        box2: BoxConfig,
        evidence: Optional[BallColor] = None,
    ) -> ProbabilityReport:
        priors = self.priors()
        likelihoods = self.likelihoods(box1, box2)
        marginals = priors @ likelihoods

        posteriors = priors
        if evidence is not None:
            column = COLORS.index(evidence)
            evidence_prob = marginals[column]
            if evidence_prob > 0:
                posteriors = likelihoods[:, column] * priors / evidence_prob

        likelihood_rows = likelihoods.tolist()
        marginal_values = marginals.tolist()
        prior_values = priors.tolist()
        posterior_values = posteriors.tolist()

        return ProbabilityReport(
            box1=box1,
            box2=box2,
            evidence=evidence,
            priors=(prior_values[0], prior_values[1]),
            likelihoods=(
                dict(zip(COLORS, likelihood_rows[0])),
                dict(zip(COLORS, likelihood_rows[1])),
            ),
            marginals=dict(zip(COLORS, marginal_values)),
            posteriors=(posterior_values[0], posterior_values[1]),
        )

    def report(self, state: AppState) -> ProbabilityReport:
        return self.compute(state.box1, state.box2, state.evidence)


def compute_report(
    box1: BoxConfig,
    box2: BoxConfig,
    evidence: Optional[BallColor] = None,
) -> ProbabilityReport:
    return BayesianEngine().compute(box1, box2, evidence)
