"""Debt payoff planner comparing avalanche, snowball and cash flow strategies."""

__version__ = "0.1.0"
