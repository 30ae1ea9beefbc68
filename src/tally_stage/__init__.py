"""Shared counter backend: daily tallies, presence and an activity feed."""

__version__ = "0.1.0"
