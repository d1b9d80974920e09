from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from bayes_core.inputs import parse_count

logger = logging.getLogger(__name__)


class BallColor(str, Enum):
    RED = "red"
    BLUE = "blue"

    @property
    def label(self) -> str:
        return self.value.capitalize()


BOX_NAMES = ("box1", "box2")


@dataclass(frozen=True)
class BoxConfig:
    red: int = 0
    blue: int = 0

    @property
    def total(self) -> int:
        return self.red + self.blue

    def count(self, color: BallColor) -> int:
        return self.red if color is BallColor.RED else self.blue


@dataclass(frozen=True)
class AppState:
    box1: BoxConfig = BoxConfig(red=3, blue=7)
    box2: BoxConfig = BoxConfig(red=6, blue=4)
    evidence: Optional[BallColor] = None

    def box(self, name: str) -> BoxConfig:
        if name not in BOX_NAMES:
            raise ValueError(f"Unknown box: {name}")
        return getattr(self, name)


@dataclass(frozen=True)
class SetCount:
    box: str
    color: BallColor
    value: Union[str, int, None]


@dataclass(frozen=True)
class Observe:
    color: BallColor


@dataclass(frozen=True)
class Reset:
    pass


Action = Union[SetCount, Observe, Reset]


def apply_action(state: AppState, action: Action) -> AppState:
    """Return the state that results from ``action``.

    Rejected input and re-observation leave ``state`` untouched.
    """
    if isinstance(action, SetCount):
        count = parse_count(action.value)
        if count is None:
            logger.warning("Rejected %s %s count: %r", action.box, action.color.value, action.value)
            return state
        box = replace(state.box(action.box), **{action.color.value: count})
        return replace(state, **{action.box: box})

    if isinstance(action, Observe):
        if state.evidence is not None:
            logger.debug(
                "Ignoring observe %s; %s already observed",
                action.color.value,
                state.evidence.value,
            )
            return state
        return replace(state, evidence=action.color)

    if isinstance(action, Reset):
        return replace(state, evidence=None)

    raise TypeError(f"Unsupported action: {action!r}")


class Session:
    """Owns the current configuration record for an application shell."""

    def __init__(self, state: Optional[AppState] = None) -> None:
        self.initial_state = state or AppState()
        self.state = self.initial_state

    def dispatch(self, action: Action) -> AppState:
        self.state = apply_action(self.state, action)
        return self.state

    def set_count(self, box: str, color: BallColor, value: Union[str, int, None]) -> AppState:
        return self.dispatch(SetCount(box=box, color=color, value=value))

    def observe(self, color: BallColor) -> AppState:
        return self.dispatch(Observe(color=color))

    def reset(self) -> AppState:
        return self.dispatch(Reset())
