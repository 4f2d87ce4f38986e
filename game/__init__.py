"""
Game Module

Configuration and command line entry points around the store.

This module provides:
- YAML-based question bank and runtime configuration
- CLI for creating a per-run database and resetting game logs
"""

__version__ = "0.1.0"
