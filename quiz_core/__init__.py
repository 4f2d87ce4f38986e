"""
Quiz Core Module

Domain schemas shared by the game loop and the persistence layer.

This module provides:
- Audience comments and player votes (event log records)
- Player leaderboard rows (snapshot records)
- Question bank entries with their options and answer ids
"""

__version__ = "0.1.0"

from .schemas import (
    Comment,
    OptionConfig,
    Player,
    PlayerVote,
    QuestionConfig,
)

__all__ = [
    "Comment",
    "OptionConfig",
    "Player",
    "PlayerVote",
    "QuestionConfig",
]
