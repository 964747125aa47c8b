"""Polaris: accessibility audit and scoring engine for rendered document trees."""

__version__ = "0.1.0"
