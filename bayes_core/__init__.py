from .inputs import parse_count
from .state import (
    AppState,
    BallColor,
    BoxConfig,
    Observe,
    Reset,
    Session,
    SetCount,
    apply_action,
)
from .bayesian import BayesianEngine, BayesianEngineConfig, ProbabilityReport, compute_report
from .report import format_percent, render_report
from .layout import Ball, layout_box
from .api import get_engine, GeminiEngine, GroqEngine, OpenAIEngine
from .explain import ExplanationConfig, ExplanationRequest, ExplanationStatus, build_explanation_prompt
