"""Post-normalization filtering of candidate deals."""

from .engine import DealFilter, FilterResult

__all__ = ["DealFilter", "FilterResult"]
