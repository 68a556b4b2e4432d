"""Utility functions for the AIOS installer."""

from .imports import safe_import

__all__ = ["safe_import"]
