"""Scenarios for generating sample loan portfolios."""

from loan_ledger.scenarios.sample_portfolio import SamplePortfolioScenario

__all__ = ["SamplePortfolioScenario"]
