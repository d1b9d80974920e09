from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from bayes_core.bayesian import COLORS, ProbabilityReport

THEOREM_EXPLANATION = """What is Bayes' Theorem?

Bayes' Theorem is a way to update our beliefs when we get new information. In the context of this app:
- Prior Belief: Initially, we assume there's a 50/50 chance we're picking from Box 1 or Box 2.
- Evidence: We then "observe" a ball and see its color (e.g., red). This is our new evidence.
- Posterior Belief: Bayes' Theorem helps us calculate the updated probability that the ball came from a specific box, given the color we saw.

As you change the number of balls or the observed color, you can see how the evidence changes the final probabilities!"""

OBSERVE_HINT = "Observe a ball to calculate the posterior probabilities!"


def format_percent(value: float) -> str:
    if math.isnan(value):
        return "0.0%"
    return f"{value * 100:.1f}%"


@dataclass
class ProbabilityRow:
    label: str
    value: float
    fraction: Optional[str] = None

    def render(self, width: int = 20) -> str:
        fraction = self.fraction or ""
        return f"{self.label:<{width}} {fraction:>7}  ({format_percent(self.value)})"


@dataclass
class CalculationCard:
    title: str
    description: str
    rows: List[ProbabilityRow]
    formula: Optional[str] = None

    def render(self) -> str:
        lines = [self.title, "-" * len(self.title), self.description]
        if self.formula:
            lines.append(f"Bayes' Formula: {self.formula}")
        lines.extend(row.render() for row in self.rows)
        return "\n".join(lines)


def build_cards(report: ProbabilityReport) -> List[CalculationCard]:
    cards = [
        CalculationCard(
            title="1. Prior Probabilities",
            description="Initially, we assume it's equally likely we're picking from either box.",
            rows=[
                ProbabilityRow(f"P(Box {idx + 1})", prior, "1/2")
                for idx, prior in enumerate(report.priors)
            ],
        ),
        CalculationCard(
            title="2. Likelihoods",
            description="The probability of picking a certain color, given the box.",
            rows=[
                ProbabilityRow(
                    f"P({color.label} | Box {idx + 1})",
                    report.likelihood(idx, color),
                    f"{box.count(color)}/{box.total}",
                )
                for color in COLORS
                for idx, box in enumerate(report.boxes)
            ],
        ),
        CalculationCard(
            title="3. Marginal Likelihood",
            description=(
                "The overall probability of observing each color across both boxes. "
                "This is the denominator in Bayes' formula."
            ),
            rows=[ProbabilityRow(f"P({color.label})", report.marginal(color)) for color in COLORS],
        ),
    ]

    if report.evidence is not None:
        label = report.evidence.label
        cards.append(
            CalculationCard(
                title=f"4. Posterior Probabilities (After observing a {label} ball)",
                description=(
                    f"After observing a {report.evidence.value} ball, "
                    "we update our beliefs about which box was chosen."
                ),
                formula=f"P(Box | {label}) = [P({label} | Box) * P(Box)] / P({label})",
                rows=[
                    ProbabilityRow(f"P(Box {idx + 1} | {label})", posterior)
                    for idx, posterior in enumerate(report.posteriors)
                ],
            )
        )
    return cards


def render_report(report: ProbabilityReport) -> str:
    blocks = [card.render() for card in build_cards(report)]
    if report.evidence is None:
        blocks.append(OBSERVE_HINT)
    return "\n\n".join(blocks)
