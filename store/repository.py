"""
SQLite-backed game store: question bank, leaderboard snapshot and event logs.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType

from quiz_core.schemas import Comment, Player, PlayerVote, QuestionConfig, to_epoch_ms

from .database import connect, initialize_database, new_run_db_path
from .errors import InitializationError, StoreError, WriteError

logger = logging.getLogger(__name__)

_INSERT_PLAYER_SQL = """
INSERT INTO player (
    id, name, score, rank, correctCount,
    incorrectCount, correctRate, createAt
)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""
_INSERT_COMMENT_SQL = "INSERT INTO comment VALUES (?, ?, ?)"
_INSERT_QUESTION_SQL = "INSERT INTO question VALUES (?, ?)"
_INSERT_OPTION_SQL = "INSERT INTO option VALUES (?, ?, ?, ?)"
_INSERT_VOTE_SQL = "INSERT INTO vote VALUES (?, ?, ?, ?, ?)"


def _player_row(player: Player) -> tuple[object, ...]:
    return (
        player.id,
        player.name,
        player.score,
        player.rank,
        player.correct_count,
        player.incorrect_count,
        player.correct_rate,
        to_epoch_ms(player.created_at),
    )


def _vote_row(vote: PlayerVote) -> tuple[object, ...]:
    return (
        vote.player_id,
        vote.question_id,
        vote.option_id,
        to_epoch_ms(vote.time),
        1 if vote.is_answer else 0,
    )


def _option_rows(questions: Sequence[QuestionConfig]) -> list[tuple[object, ...]]:
    rows: list[tuple[object, ...]] = []
    for question in questions:
        for option in question.options:
            is_answer = 1 if question.is_answer(option.id) else 0
            rows.append((option.id, question.id, option.text, is_answer))
    return rows


class GameStore:
    """Owns one per-run SQLite file and every write made to it.

    The store is built once at process start and handed to the game loop.
    ``init()`` must complete before any other operation; ``close()`` ends
    the store's lifetime.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path: str = str(db_path)
        self._ready: bool = False
        try:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._connection: sqlite3.Connection | None = connect(self.db_path)
        except (OSError, sqlite3.Error) as exc:
            logger.error(f"Create/open database failed for {self.db_path}: {exc}")
            raise InitializationError(f"Cannot open database {self.db_path}: {exc}") from exc
        logger.info(f"Opened database {self.db_path}")

    @classmethod
    def for_new_run(cls, db_dir: str | Path = "db") -> "GameStore":
        """Create a store on a fresh timestamped file inside ``db_dir``."""
        return cls(new_run_db_path(db_dir))

    def __enter__(self) -> "GameStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._connection is None

    def close(self) -> None:
        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
        self._ready = False
        logger.info(f"Closed database {self.db_path}")

    def init(self) -> None:
        """Create the five game tables if absent. Safe to call repeatedly."""
        if self._connection is None:
            raise StoreError("Store is closed")
        try:
            initialize_database(self._connection)
        except sqlite3.Error as exc:
            logger.error(f"Schema creation failed for {self.db_path}: {exc}")
            raise InitializationError(f"Cannot create schema in {self.db_path}: {exc}") from exc
        self._ready = True
        logger.info(f"Schema ready in {self.db_path}")

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[sqlite3.Connection]:
        if self._connection is None:
            raise StoreError("Store is closed")
        if not self._ready:
            raise StoreError(f"{operation} called before init()")
        connection = self._connection
        try:
            _ = connection.execute("BEGIN")
            yield connection
            _ = connection.execute("COMMIT")
        except sqlite3.Error as exc:
            self._rollback(connection)
            logger.error(f"{operation} failed: {exc}")
            raise WriteError(f"{operation} failed: {exc}") from exc
        except BaseException:
            self._rollback(connection)
            raise

    @staticmethod
    def _rollback(connection: sqlite3.Connection) -> None:
        if connection.in_transaction:
            _ = connection.execute("ROLLBACK")

    # Players

    def insert_players(self, players: Sequence[Player]) -> None:
        with self._transaction("insert_players") as connection:
            self._insert_players(connection, players)

    def clear_players(self) -> None:
        with self._transaction("clear_players") as connection:
            _ = connection.execute("DELETE FROM player")

    def update_players(self, players: Sequence[Player]) -> None:
        """Replace the leaderboard snapshot with ``players``.

        Clear and insert share one transaction, so a failed insert leaves
        the previous snapshot in place.
        """
        with self._transaction("update_players") as connection:
            _ = connection.execute("DELETE FROM player")
            self._insert_players(connection, players)

    def _insert_players(self, connection: sqlite3.Connection, players: Sequence[Player]) -> None:
        rows = [_player_row(player) for player in players]
        if rows:
            _ = connection.executemany(_INSERT_PLAYER_SQL, rows)
        logger.debug(f"Inserted {len(rows)} player rows")

    # Comments

    def insert_comment(self, comment: Comment) -> None:
        with self._transaction("insert_comment") as connection:
            _ = connection.execute(
                _INSERT_COMMENT_SQL,
                (comment.content, comment.offset, to_epoch_ms(comment.created_at)),
            )

    def clear_comment(self) -> None:
        with self._transaction("clear_comment") as connection:
            _ = connection.execute("DELETE FROM comment")

    # Question bank

    def insert_questions(self, questions: Sequence[QuestionConfig]) -> None:
        """Load the question bank; question and option rows commit together."""
        question_rows = [(question.id, question.text) for question in questions]
        option_rows = _option_rows(questions)
        with self._transaction("insert_questions") as connection:
            if question_rows:
                _ = connection.executemany(_INSERT_QUESTION_SQL, question_rows)
            if option_rows:
                _ = connection.executemany(_INSERT_OPTION_SQL, option_rows)
        logger.info(f"Loaded {len(question_rows)} questions with {len(option_rows)} options")

    # Votes

    def insert_player_votes(self, votes: Sequence[PlayerVote]) -> None:
        rows = [_vote_row(vote) for vote in votes]
        with self._transaction("insert_player_votes") as connection:
            if rows:
                _ = connection.executemany(_INSERT_VOTE_SQL, rows)
        logger.debug(f"Inserted {len(rows)} vote rows")

    def clear_player_votes(self) -> None:
        with self._transaction("clear_player_votes") as connection:
            _ = connection.execute("DELETE FROM vote")

    def reset(self) -> None:
        """Clear the comment, vote and player tables. The question bank stays."""
        with self._transaction("reset") as connection:
            _ = connection.execute("DELETE FROM comment")
            _ = connection.execute("DELETE FROM vote")
            _ = connection.execute("DELETE FROM player")
        logger.info(f"Reset game logs in {self.db_path}")
