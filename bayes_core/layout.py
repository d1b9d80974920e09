from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import torch

from bayes_core.state import BallColor, BoxConfig

BALL_GLYPHS = {BallColor.RED: "R", BallColor.BLUE: "B"}
MAX_DRAWN_BALLS = 100


@dataclass(frozen=True)
class Ball:
    color: BallColor
    highlight: bool = False
    dim: bool = False

    def glyph(self) -> str:
        glyph = BALL_GLYPHS[self.color]
        if self.highlight:
            return f"[{glyph}]"
        if self.dim:
            return f" {glyph.lower()} "
        return f" {glyph} "


def drawn_counts(box: BoxConfig, max_balls: int = MAX_DRAWN_BALLS) -> Tuple[int, int]:
    """Red and blue counts to draw, scaled down to at most ``max_balls``."""
    if box.total <= max_balls:
        return box.red, box.blue
    red = round(max_balls * box.red / box.total)
    return red, max_balls - red


def layout_box(
    box: BoxConfig,
    evidence: Optional[BallColor] = None,
    seed: Optional[int] = None,
    generator: Optional[torch.Generator] = None,
    max_balls: int = MAX_DRAWN_BALLS,
) -> List[Ball]:
    """Shuffle a box's balls for display, marking them against the evidence."""
    red, blue = drawn_counts(box, max_balls)
    colors = [BallColor.RED] * red + [BallColor.BLUE] * blue
    if generator is None:
        generator = torch.Generator()
        if seed is None:
            generator.seed()
        else:
            generator.manual_seed(seed)

    order = torch.randperm(len(colors), generator=generator).tolist()
    return [
        Ball(
            color=colors[idx],
            highlight=evidence is colors[idx],
            dim=evidence is not None and evidence is not colors[idx],
        )
        for idx in order
    ]


def render_box(title: str, box: BoxConfig, balls: List[Ball], per_row: int = 10) -> str:
    lines = [title, f"{box.red} Red * {box.blue} Blue"]
    if not balls:
        lines.append("(empty)")
    elif len(balls) < box.total:
        lines.append(f"(drawing {len(balls)} of {box.total} balls to scale)")
    for start in range(0, len(balls), per_row):
        lines.append("".join(ball.glyph() for ball in balls[start : start + per_row]))
    return "\n".join(lines)
