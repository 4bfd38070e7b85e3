import pytest

from esiritori.core.errors import ErrorCode, ValidationError
from esiritori.core.values import Answer, GameId, GameSettings, PlayerId, PlayerName


def test_identifiers_are_trimmed_and_compared_by_value():
    assert GameId("  abc ") == GameId("abc")
    assert hash(PlayerId("p1 ")) == hash(PlayerId("p1"))
    assert str(GameId("abc")) == "abc"


@pytest.mark.parametrize("raw", ["", "   ", None, 42])
def test_identifiers_reject_blank_or_non_string(raw):
    with pytest.raises(ValidationError) as exc:
        GameId(raw)
    assert exc.value.code == ErrorCode.GAME_INVALID_ID
    with pytest.raises(ValidationError) as exc:
        PlayerId(raw)
    assert exc.value.code == ErrorCode.PLAYER_INVALID_ID


def test_new_ids_are_unique():
    assert GameId.new_id() != GameId.new_id()
    assert PlayerId.new_id() != PlayerId.new_id()


def test_player_name_limits():
    assert PlayerName(" Alice ").value == "Alice"
    assert PlayerName("あ" * 20).value == "あ" * 20
    for bad in ("", "   ", "x" * 21):
        with pytest.raises(ValidationError) as exc:
            PlayerName(bad)
        assert exc.value.code == ErrorCode.PLAYER_INVALID_NAME


def test_answer_accepts_hiragana_only():
    assert Answer(" ねこ ").value == "ねこ"
    with pytest.raises(ValidationError) as exc:
        Answer("ネコ")
    assert exc.value.code == ErrorCode.ANSWER_INVALID_CHARACTERS
    with pytest.raises(ValidationError) as exc:
        Answer("neko")
    assert exc.value.code == ErrorCode.ANSWER_INVALID_CHARACTERS


def test_answer_length_limit():
    assert len(Answer("あ" * 50).value) == 50
    with pytest.raises(ValidationError) as exc:
        Answer("あ" * 51)
    assert exc.value.code == ErrorCode.ANSWER_TOO_LONG


def test_empty_answer_is_a_value_that_matches_nothing():
    empty = Answer.empty()
    assert empty == Answer("")
    assert empty.is_empty
    assert not empty.is_correct("")
    assert not Answer("ねこ").is_correct("   ")


def test_answer_comparison_trims_guess():
    answer = Answer("ねこ")
    assert answer.is_correct(" ねこ ")
    assert answer.is_correct(Answer("ねこ"))
    assert not answer.is_correct("いぬ")
    assert not answer.is_correct("ネコ")


def test_game_settings_bounds():
    settings = GameSettings(time_limit_seconds=30, round_count=10, player_count=8)
    assert settings == GameSettings(30, 10, 8)


@pytest.mark.parametrize(
    "args, code",
    [
        ((25, 3, 4), ErrorCode.GAME_SETTINGS_INVALID_TIME_LIMIT),
        ((301, 3, 4), ErrorCode.GAME_SETTINGS_INVALID_TIME_LIMIT),
        ((60, 0, 4), ErrorCode.GAME_SETTINGS_INVALID_ROUND_COUNT),
        ((60, 11, 4), ErrorCode.GAME_SETTINGS_INVALID_ROUND_COUNT),
        ((60, 3, 1), ErrorCode.GAME_SETTINGS_INVALID_PLAYER_COUNT),
        ((60, 3, 9), ErrorCode.GAME_SETTINGS_INVALID_PLAYER_COUNT),
        ((True, 3, 4), ErrorCode.GAME_SETTINGS_INVALID_TIME_LIMIT),
    ],
)
def test_game_settings_rejects_out_of_range(args, code):
    with pytest.raises(ValidationError) as exc:
        GameSettings(*args)
    assert exc.value.code == code


def test_error_string_includes_code():
    with pytest.raises(ValidationError) as exc:
        GameSettings(25, 3, 4)
    assert str(exc.value).startswith("GAME_SETTINGS_INVALID_TIME_LIMIT: ")
