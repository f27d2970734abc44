"""Trivia night scoring engine.

Walks a live trivia game through its fixed grid of sets, categories and
questions, keeps the per-question ledger, and ranks teams within a game and
across a season (the "royalty" standings).
"""

__version__ = "0.1.0"
