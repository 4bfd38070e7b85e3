import pytest

from conftest import T0, at
from esiritori.core.errors import ErrorCode, MissingValueError, ValidationError
from esiritori.core.scoring import ScoreHistory, ScoreReason, ScoringPolicy, tally
from esiritori.core.turn import Turn
from esiritori.core.values import PlayerId

ALICE = PlayerId("alice")
BOB = PlayerId("bob")


def test_score_history_is_a_value():
    a = ScoreHistory(BOB, 1, 2, 10, ScoreReason.CORRECT_ANSWER, T0)
    b = ScoreHistory(BOB, 1, 2, 10, "correct_answer", T0)
    assert a == b
    assert b.reason is ScoreReason.CORRECT_ANSWER


@pytest.mark.parametrize(
    "args, code",
    [
        ((BOB, 0, 1, 10), ErrorCode.SCORE_HISTORY_INVALID_ROUND_NUMBER),
        ((BOB, 11, 1, 10), ErrorCode.SCORE_HISTORY_INVALID_ROUND_NUMBER),
        ((BOB, 1, 0, 10), ErrorCode.SCORE_HISTORY_INVALID_TURN_NUMBER),
        ((BOB, 1, 11, 10), ErrorCode.SCORE_HISTORY_INVALID_TURN_NUMBER),
        ((BOB, 1, 1, 0), ErrorCode.SCORE_HISTORY_INVALID_POINTS),
    ],
)
def test_score_history_validation(args, code):
    with pytest.raises(ValidationError) as exc:
        ScoreHistory(*args, ScoreReason.CORRECT_ANSWER, T0)
    assert exc.value.code == code


def test_score_history_requires_player():
    with pytest.raises(MissingValueError) as exc:
        ScoreHistory(None, 1, 1, 10, ScoreReason.CORRECT_ANSWER, T0)
    assert exc.value.code == ErrorCode.SCORE_HISTORY_INVALID_PLAYER_ID


def test_unknown_reason_is_rejected():
    with pytest.raises(ValueError):
        ScoreHistory(BOB, 1, 1, 10, "bonus", T0)


def test_policy_builds_records():
    turn = Turn.create_initial(ALICE, 60, T0)
    policy = ScoringPolicy(correct_answer_points=7, drawer_penalty_points=3)

    hit = policy.correct_answer(BOB, 2, turn, at(10))
    assert (hit.player_id, hit.round_number, hit.turn_number) == (BOB, 2, 1)
    assert (hit.points, hit.reason, hit.timestamp) == (7, ScoreReason.CORRECT_ANSWER, at(10))

    miss = policy.drawer_penalty(2, turn, at(60))
    assert miss.player_id == ALICE
    assert (miss.points, miss.reason) == (3, ScoreReason.DRAWER_PENALTY)
    assert miss.signed_points == -3


def test_policy_rejects_non_positive_points():
    with pytest.raises(ValueError):
        ScoringPolicy(correct_answer_points=0)


def test_tally_keeps_player_order_and_sums_signed_points():
    records = [
        ScoreHistory(BOB, 1, 1, 10, ScoreReason.CORRECT_ANSWER, T0),
        ScoreHistory(ALICE, 1, 2, 5, ScoreReason.DRAWER_PENALTY, T0),
        ScoreHistory(BOB, 1, 3, 10, ScoreReason.CORRECT_ANSWER, T0),
    ]
    totals = tally([ALICE, BOB, PlayerId("carol")], records)
    assert list(totals.items()) == [(ALICE, -5), (BOB, 20), (PlayerId("carol"), 0)]
