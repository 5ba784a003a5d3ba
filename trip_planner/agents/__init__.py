"""
Gemini-backed agents for the Trip Planner service.
"""

from trip_planner.agents.base import AgentConfig, BaseAgent
from trip_planner.agents.itinerary import ItineraryAgent

__all__ = ["AgentConfig", "BaseAgent", "ItineraryAgent"]
