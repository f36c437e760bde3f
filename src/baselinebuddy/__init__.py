"""Baseline Buddy — flag web-platform features that are not yet Baseline."""

__version__ = "0.1.0"
