"""Marketplace listing research: classification, scoring and filtering."""

__version__ = "0.1.0"
