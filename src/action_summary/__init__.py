"""Narrative summaries of a footprint and its action plan."""

from .report import paris_narrative, rank_actions, render_summary

__all__ = ["paris_narrative", "rank_actions", "render_summary"]
