import copy

import orjson
import pytest

from conftest import at
from esiritori.core import schemas
from esiritori.core.errors import DocumentError, ErrorCode, ValidationError
from esiritori.core.scoring import ScoreHistory, ScoreReason
from esiritori.core.values import Answer, PlayerId


@pytest.fixture()
def scored(drawing):
    drawing.check_answer("ねこ", PlayerId("bob"), at(30))
    drawing.add_score_history(ScoreHistory(PlayerId("bob"), 1, 1, 10, ScoreReason.CORRECT_ANSWER, at(30)), at(30))
    drawing.add_score_history(ScoreHistory(PlayerId("alice"), 1, 1, 5, ScoreReason.DRAWER_PENALTY, at(31)), at(31))
    return drawing


def as_dict(game):
    return schemas.document_to_dict(schemas.to_document(game))


def test_round_trip_preserves_every_field(scored):
    restored = schemas.loads(schemas.dumps(scored))

    assert restored == scored
    assert restored.status == scored.status
    assert restored.settings == scored.settings
    assert restored.created_at == scored.created_at
    assert restored.updated_at == scored.updated_at
    assert [(p.id, p.name, p.is_ready, p.is_drawer) for p in restored.players] == [
        (p.id, p.name, p.is_ready, p.is_drawer) for p in scored.players
    ]
    assert restored.score_histories == scored.score_histories
    assert restored.current_round.round_number == scored.current_round.round_number
    assert restored.current_round.started_at == scored.current_round.started_at

    turn, original = restored.current_turn, scored.current_turn
    assert turn.answer == Answer("ねこ")
    assert turn.status == original.status
    assert turn.correct_player_ids == original.correct_player_ids
    assert (turn.started_at, turn.ended_at) == (original.started_at, original.ended_at)
    assert as_dict(restored) == as_dict(scored)


def test_document_uses_camel_case_and_string_vocabulary(scored):
    data = as_dict(scored)

    assert data["schemaVersion"] == schemas.SCHEMA_VERSION
    assert data["status"] == "playing"
    assert data["settings"] == {"timeLimit": 60, "roundCount": 2, "playerCount": 4}
    assert data["players"][0]["status"] == "ready"
    assert data["players"][0]["isDrawer"] is True
    turn = data["currentRound"]["currentTurn"]
    assert turn["status"] == "finished"
    assert turn["correctPlayerIds"] == ["bob"]
    assert [record["reason"] for record in data["scoreRecords"]] == ["correct_answer", "drawer_penalty"]


def test_unset_answer_serializes_as_null(playing):
    data = as_dict(playing)
    assert data["currentRound"]["currentTurn"]["answer"] is None
    assert schemas.from_document(schemas.parse_document(data)).current_turn.answer is None


def test_empty_answer_stays_distinct_from_unset(playing):
    data = as_dict(playing)
    data["currentRound"]["currentTurn"]["answer"] = ""

    game = schemas.from_document(schemas.parse_document(data))

    assert game.current_turn.answer == Answer.empty()
    assert as_dict(game)["currentRound"]["currentTurn"]["answer"] == ""


def test_indent_option(playing):
    assert b"\n  " in schemas.dumps(playing, indent=True)
    assert b"\n" not in schemas.dumps(playing)


def test_unknown_keys_are_ignored(playing):
    data = as_dict(playing)
    data["spectators"] = []
    assert schemas.from_document(schemas.parse_document(data)) == playing


def test_invalid_json_raises_document_error():
    with pytest.raises(DocumentError) as exc:
        schemas.loads(b"{not json")
    assert exc.value.code == ErrorCode.DOCUMENT_INVALID


def test_missing_fields_raise_document_error(playing):
    data = as_dict(playing)
    del data["players"]
    with pytest.raises(DocumentError) as exc:
        schemas.parse_document(data)
    assert exc.value.code == ErrorCode.DOCUMENT_INVALID
    assert exc.value.errors


def test_unknown_enum_value_is_rejected(playing):
    data = as_dict(playing)
    data["status"] = "paused"
    with pytest.raises(DocumentError):
        schemas.loads(orjson.dumps(data))


def test_unsupported_version(playing):
    data = as_dict(playing)
    data["schemaVersion"] = 99
    with pytest.raises(DocumentError) as exc:
        schemas.loads(orjson.dumps(data))
    assert exc.value.code == ErrorCode.DOCUMENT_UNSUPPORTED_VERSION


def test_domain_validation_still_applies(drawing):
    data = copy.deepcopy(as_dict(drawing))
    data["currentRound"]["currentTurn"]["answer"] = "cat"
    with pytest.raises(ValidationError) as exc:
        schemas.loads(orjson.dumps(data))
    assert exc.value.code == ErrorCode.ANSWER_INVALID_CHARACTERS


def test_old_documents_with_not_started_turns_load(lobby):
    data = as_dict(lobby)
    data["currentRound"]["currentTurn"]["status"] = "not_started"
    game = schemas.loads(orjson.dumps(data))
    assert game.current_turn.status.value == "not_started"


def test_timestamps_without_timezone_are_rejected(lobby):
    data = as_dict(lobby)
    data["createdAt"] = data["createdAt"].replace("Z", "").replace("+00:00", "")
    data["updatedAt"] = data["updatedAt"].replace("Z", "").replace("+00:00", "")
    with pytest.raises(ValidationError) as exc:
        schemas.loads(orjson.dumps(data))
    assert exc.value.code == ErrorCode.GAME_INVALID_TIMESTAMP


def test_player_status_must_agree_with_ready_flag(lobby):
    data = as_dict(lobby)
    data["players"][1]["status"] = "ready"
    with pytest.raises(DocumentError) as exc:
        schemas.loads(orjson.dumps(data))
    assert exc.value.code == ErrorCode.DOCUMENT_INVALID
