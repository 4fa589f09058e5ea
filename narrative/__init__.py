"""
Flavor text from an external language model, with fixed fallbacks.
"""
from .recap import get_match_summary, get_scouting_report

__all__ = ["get_match_summary", "get_scouting_report"]
