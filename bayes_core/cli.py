"""Terminal front end for the two-box Bayes' Theorem demo.

Usage:
    bayes-boxes                              show the default boxes
    bayes-boxes --box1 2 8 --observe red     configure, observe, report
    bayes-boxes --observe blue --explain     ask a language model to explain
    bayes-boxes --interactive                edit boxes and observe step by step
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, List, Optional

from bayes_core.bayesian import BayesianEngine
from bayes_core.inputs import MAX_COUNT, parse_count
from bayes_core.explain import ExplanationConfig, ExplanationRequest, ExplanationStatus
from bayes_core.layout import layout_box, render_box
from bayes_core.report import THEOREM_EXPLANATION, render_report
from bayes_core.state import BOX_NAMES, AppState, BallColor, BoxConfig, Session

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  set <box1|box2> <red|blue> <count>   change a ball count (blank clears to 0)
  observe <red|blue>                   observe a ball of that color
  reset                                forget the observation
  explain                              fetch a plain-language explanation
  balls                                show the shuffled box contents
  show                                 show the calculation
  about                                what is Bayes' Theorem?
  help                                 this message
  quit                                 leave"""


class Shell:
    """Interprets one command line at a time against a session."""

    def __init__(
        self,
        session: Optional[Session] = None,
        engine: Optional[BayesianEngine] = None,
        explanation_config: Optional[ExplanationConfig] = None,
        engine_factory: Optional[Callable[[], object]] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.session = session or Session()
        self.engine = engine or BayesianEngine()
        self.explanation_config = explanation_config or ExplanationConfig()
        self.engine_factory = engine_factory
        self.seed = seed
        self.done = False

    def report_text(self) -> str:
        return render_report(self.engine.report(self.session.state))

    def balls_text(self) -> str:
        state = self.session.state
        blocks = []
        for idx, name in enumerate(BOX_NAMES):
            seed = None if self.seed is None else self.seed + idx
            box = state.box(name)
            balls = layout_box(box, state.evidence, seed=seed)
            blocks.append(render_box(f"Box {idx + 1}", box, balls))
        return "\n\n".join(blocks)

    def explain_text(self) -> str:
        request = ExplanationRequest(self.explanation_config, engine_factory=self.engine_factory)
        request.run(self.engine.report(self.session.state))
        return request.message()

    def execute(self, line: str) -> str:
        parts = line.strip().split()
        if not parts:
            return ""
        command, args = parts[0].lower(), parts[1:]

        if command in ("quit", "exit"):
            self.done = True
            return ""
        if command == "help":
            return HELP_TEXT
        if command == "about":
            return THEOREM_EXPLANATION
        if command == "show":
            return self.report_text()
        if command == "balls":
            return self.balls_text()
        if command == "explain":
            return self.explain_text()
        if command == "reset":
            self.session.reset()
            return self.report_text()
        if command == "observe":
            color = _parse_color(args[0] if args else "")
            if color is None:
                return "Usage: observe <red|blue>"
            if self.session.state.evidence is not None:
                return f"A {self.session.state.evidence.value} ball is already observed. Use 'reset' first."
            self.session.observe(color)
            return self.report_text()
        if command == "set":
            if len(args) not in (2, 3) or args[0] not in BOX_NAMES:
                return "Usage: set <box1|box2> <red|blue> <count>"
            color = _parse_color(args[1])
            if color is None:
                return "Usage: set <box1|box2> <red|blue> <count>"
            value = args[2] if len(args) == 3 else ""
            before = self.session.state
            after = self.session.set_count(args[0], color, value)
            if after is before:
                shown = value if len(value) <= 20 else value[:17] + "..."
                return f"Ignored '{shown}': counts must be whole numbers from 0 to {MAX_COUNT}."
            return self.report_text()

        return f"Unknown command: {command}. Type 'help' for commands."


def _parse_color(value: str) -> Optional[BallColor]:
    try:
        return BallColor(value.lower())
    except ValueError:
        return None


def _count(value: str) -> int:
    count = parse_count(value)
    if count is None or not value.strip():
        raise argparse.ArgumentTypeError(
            f"count must be a whole number from 0 to {MAX_COUNT}: {value!r}"
        )
    return count


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bayes-boxes",
        description="Interactive Bayes' Theorem demo with two boxes of red and blue balls.",
    )
    parser.add_argument("--box1", nargs=2, type=_count, metavar=("RED", "BLUE"), default=[3, 7])
    parser.add_argument("--box2", nargs=2, type=_count, metavar=("RED", "BLUE"), default=[6, 4])
    parser.add_argument("--observe", choices=[color.value for color in BallColor])
    parser.add_argument("--explain", action="store_true", help="fetch a language-model explanation")
    parser.add_argument("--provider", help="explanation provider (gemini, groq, openai)")
    parser.add_argument("--model", help="explanation model name")
    parser.add_argument("--seed", type=int, help="seed for the ball shuffle")
    parser.add_argument("--show-balls", action="store_true", help="draw the box contents")
    parser.add_argument("--interactive", "-i", action="store_true")
    parser.add_argument(
        "--log-level",
        default=os.getenv("BAYES_BOXES_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    return parser


def run_interactive(
    shell: Shell,
    read: Optional[Callable[[str], str]] = None,
    show_balls: bool = False,
) -> int:
    read = read or input
    print("Bayes' Theorem: An Interactive Learning Experience")
    print("=" * 50)
    if show_balls:
        print(shell.balls_text())
        print()
    print(shell.report_text())
    print()
    print("Type 'help' for commands.")
    while not shell.done:
        try:
            line = read("> ")
        except EOFError:
            break
        output = shell.execute(line)
        if output:
            print(output)
            print()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.interactive and args.explain:
        parser.error("--explain cannot be combined with --interactive; use the 'explain' command instead")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    state = AppState(
        box1=BoxConfig(red=args.box1[0], blue=args.box1[1]),
        box2=BoxConfig(red=args.box2[0], blue=args.box2[1]),
    )
    shell = Shell(
        session=Session(state),
        explanation_config=ExplanationConfig(provider=args.provider, model=args.model),
        seed=args.seed,
    )
    logger.info("Starting with box1=%s box2=%s", state.box1, state.box2)

    if args.observe:
        shell.session.observe(BallColor(args.observe))

    if args.interactive:
        return run_interactive(shell, show_balls=args.show_balls)

    if args.show_balls:
        print(shell.balls_text())
        print()
    print(shell.report_text())

    if args.explain:
        print("Fetching explanation...", file=sys.stderr)
        request = ExplanationRequest(shell.explanation_config)
        status = request.run(shell.engine.report(shell.session.state))
        print()
        print(request.message())
        if status is ExplanationStatus.FAILURE:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
