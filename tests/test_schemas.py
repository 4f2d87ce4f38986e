from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from quiz_core.schemas import Comment, Player, PlayerVote, QuestionConfig, to_epoch_ms


def test_player_create_and_serialize() -> None:
    player = Player(
        id="p-1",
        name="Alice",
        score=120,
        rank=1,
        correct_count=4,
        incorrect_count=1,
        correct_rate=0.8,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )

    restored = Player.from_json(player.to_json())

    assert restored.to_dict() == player.to_dict()
    assert restored.created_at.utcoffset() == timedelta(0)


def test_player_counts_validation() -> None:
    with pytest.raises(ValidationError):
        _ = Player(id="p-2", name="Bob", correct_count=-1)
    with pytest.raises(ValidationError):
        _ = Player(id="p-3", name="Carol", correct_rate=1.5)


def test_naive_timestamps_are_utc() -> None:
    comment = Comment(content="hello", offset=3, created_at=datetime(2026, 1, 1))
    vote = PlayerVote(
        player_id="p-1",
        question_id=1,
        option_id=2,
        time=datetime(2026, 1, 1, 8, tzinfo=timezone(timedelta(hours=8))),
        is_answer=True,
    )

    assert comment.created_at.tzinfo is not None
    assert to_epoch_ms(comment.created_at) == 1767225600000
    assert to_epoch_ms(vote.time) == 1767225600000


def test_question_from_config_dict() -> None:
    data: dict[str, object] = {
        "id": 1,
        "text": "Capital of France?",
        "options": [{"id": 1, "text": "Paris"}, {"id": 2, "text": "Rome"}],
        "answers": [1],
    }

    question = QuestionConfig.from_dict(data)

    assert question.to_dict() == data
    assert question.is_answer(1)
    assert not question.is_answer(2)


def test_question_answers_must_name_options() -> None:
    with pytest.raises(ValidationError):
        _ = QuestionConfig(
            id=1,
            text="Q",
            options=[{"id": 1, "text": "a"}],
            answers=[3],
        )


def test_question_option_ids_unique() -> None:
    with pytest.raises(ValidationError):
        _ = QuestionConfig(
            id=1,
            text="Q",
            options=[{"id": 1, "text": "a"}, {"id": 1, "text": "b"}],
        )


def test_player_correct_rate_is_a_fraction() -> None:
    player = Player(id="p-4", name="Dana", correct_count=3, incorrect_count=1, correct_rate=0.75)
    assert player.correct_rate == 0.75

    with pytest.raises(ValidationError):
        _ = Player(id="p-5", name="Eve", correct_count=3, incorrect_count=1, correct_rate=75.0)
