"""Agents package — LLM-backed answerers.

  ask_mentor     mentor_agent     Trading Q&A with live-price context
"""

from .mentor_agent.mentor_agent import ask_mentor

__all__ = ["ask_mentor"]
