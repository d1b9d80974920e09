from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from bayes_core.bayesian import ProbabilityReport
from bayes_core.report import format_percent

logger = logging.getLogger(__name__)


class ExplanationStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class ExplanationConfig:
    provider: Optional[str] = None
    model: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 512
    style_guidelines: List[str] = field(
        default_factory=lambda: [
            "Explain for a curious beginner; avoid heavy notation.",
            "Walk through prior, likelihood, marginal and posterior in that order.",
            "Say why the observed color shifts belief toward one box.",
            "Keep it under 200 words.",
        ]
    )

    def runtime(self) -> Dict[str, float]:
        runtime: Dict[str, float] = {"temperature": self.temperature}
        if self.model:
            runtime["model"] = self.model  # type: ignore[assignment]
        return runtime


def build_explanation_prompt(report: ProbabilityReport, guidelines: Optional[List[str]] = None) -> str:
    if report.evidence is None:
        raise ValueError("An explanation needs an observed ball color.")

    guidelines = guidelines if guidelines is not None else ExplanationConfig().style_guidelines
    style_block = "\n".join(f"- {item}" for item in guidelines) or "- Keep the explanation short and clear."
    boxes_block = "\n".join(
        f"- Box {idx + 1}: {box.red} red, {box.blue} blue"
        for idx, box in enumerate(report.boxes)
    )
    posterior_block = "\n".join(
        f"- P(Box {idx + 1} | {report.evidence.label}) = {format_percent(posterior)}"
        for idx, posterior in enumerate(report.posteriors)
    )

    prompt = f"""You are a patient statistics tutor explaining Bayes' Theorem.

Style:
{style_block}

Setup (each box is equally likely to be picked beforehand):
{boxes_block}

Observed ball: {report.evidence.value}
P({report.evidence.label}) = {format_percent(report.marginal(report.evidence))}

Computed posteriors:
{posterior_block}

Explain step by step why the posteriors came out this way.
Explanation:"""
    return prompt


class ExplanationRequest:
    """Fetches a text explanation for a report and records the outcome.

    Failures are kept on the request as a message; they are never raised.
    """

    def __init__(
        self,
        config: Optional[ExplanationConfig] = None,
        engine_factory: Optional[Callable[[], object]] = None,
    ) -> None:
        self.config = config or ExplanationConfig()
        self._engine_factory = engine_factory or self._default_engine
        self.status = ExplanationStatus.IDLE
        self.text: Optional[str] = None
        self.error: Optional[str] = None

    def _default_engine(self):
        from bayes_core.api import get_engine

        return get_engine(self.config.provider, runtime=self.config.runtime())

    def run(self, report: ProbabilityReport) -> ExplanationStatus:
        self.status = ExplanationStatus.PENDING
        self.text = None
        self.error = None

        try:
            prompt = build_explanation_prompt(report, self.config.style_guidelines)
            engine = self._engine_factory()
            text = engine.generate(prompt, max_tokens=self.config.max_tokens)
        except Exception as exc:
            logger.warning("Explanation request failed: %s", exc)
            self.status = ExplanationStatus.FAILURE
            self.error = f"Could not fetch an explanation: {exc}"
            return self.status

        if not text:
            self.status = ExplanationStatus.FAILURE
            self.error = "Could not fetch an explanation: the service returned no text."
            return self.status

        self.status = ExplanationStatus.SUCCESS
        self.text = text
        return self.status

    def message(self) -> str:
        if self.status is ExplanationStatus.SUCCESS:
            return self.text or ""
        if self.status is ExplanationStatus.FAILURE:
            return self.error or "Could not fetch an explanation."
        if self.status is ExplanationStatus.PENDING:
            return "Fetching explanation..."
        return ""
