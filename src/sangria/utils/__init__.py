"""Utility helpers for sangria."""

from sangria.utils.logger import get_logger

__all__ = ["get_logger"]
