"""
Store Module

Game state persistence layer.

This module provides:
- SQLite-backed storage for comments, players, votes and the question bank
- One database file per process run
- Transactional batch writes and snapshot replacement for the leaderboard
"""

__version__ = "0.1.0"
