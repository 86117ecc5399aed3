"""Presentation helpers for adjustment results."""

from .utils import format_money, format_percent, month_name

__all__ = ["format_money", "format_percent", "month_name"]
