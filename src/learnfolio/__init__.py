"""Learnfolio: a practice stock portfolio, watchlist and savings planner."""

__version__ = "0.1.0"
