import pytest

from bayes_core import (
    AppState,
    BallColor,
    BayesianEngine,
    BoxConfig,
    Observe,
    Reset,
    Session,
    SetCount,
    apply_action,
    parse_count,
)
from bayes_core.inputs import MAX_COUNT


def test_defaults_match_example_boxes():
    state = AppState()
    assert state.box1 == BoxConfig(red=3, blue=7)
    assert state.box2 == BoxConfig(red=6, blue=4)
    assert state.evidence is None


def test_set_count_returns_new_state():
    state = AppState()
    updated = apply_action(state, SetCount("box2", BallColor.BLUE, "9"))

    assert updated is not state
    assert updated.box2 == BoxConfig(red=6, blue=9)
    assert state.box2 == BoxConfig(red=6, blue=4)


def test_blank_count_is_zero():
    updated = apply_action(AppState(), SetCount("box1", BallColor.RED, ""))
    assert updated.box1.red == 0


@pytest.mark.parametrize("raw", ["-2", "abc", "1.5", -1])
def test_rejected_count_leaves_state_unchanged(raw):
    state = AppState()
    assert apply_action(state, SetCount("box1", BallColor.RED, raw)) is state


def test_oversized_digit_string_is_rejected():
    state = AppState()
    assert apply_action(state, SetCount("box1", BallColor.RED, "9" * 5000)) is state


def test_unknown_box_raises():
    with pytest.raises(ValueError):
        apply_action(AppState(), SetCount("box3", BallColor.RED, "1"))


def test_observe_only_from_no_evidence():
    state = apply_action(AppState(), Observe(BallColor.RED))
    assert state.evidence is BallColor.RED

    again = apply_action(state, Observe(BallColor.BLUE))
    assert again is state
    assert again.evidence is BallColor.RED


def test_reset_clears_evidence_and_restores_priors():
    session = Session()
    session.observe(BallColor.BLUE)
    session.set_count("box1", BallColor.RED, 5)
    session.reset()

    assert session.state.evidence is None
    assert session.state.box1 == BoxConfig(red=5, blue=7)
    assert BayesianEngine().report(session.state).posteriors == (0.5, 0.5)


def test_session_dispatch_tracks_latest_state():
    session = Session(AppState(box1=BoxConfig(1, 1)))
    session.dispatch(Observe(BallColor.RED))
    session.dispatch(Reset())
    session.dispatch(Observe(BallColor.BLUE))

    assert session.state.evidence is BallColor.BLUE
    assert session.initial_state.evidence is None


def test_parse_count():
    assert parse_count("  12 ") == 12
    assert parse_count("") == 0
    assert parse_count(None) == 0
    assert parse_count(4) == 4
    assert parse_count(-4) is None
    assert parse_count("3abc") is None
    assert parse_count(True) is None


def test_count_upper_bound():
    assert parse_count(MAX_COUNT) == MAX_COUNT
    assert parse_count(str(MAX_COUNT)) == MAX_COUNT
    assert parse_count(MAX_COUNT + 1) is None
    assert parse_count("9" * 4000) is None
