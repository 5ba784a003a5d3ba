"""
Base agent class for the trip planner.

This module implements the foundational Agent class that Gemini-backed
agents inherit from: it owns the API client and the model settings.
"""

from dataclasses import dataclass

from google import genai
from google.genai import types


class TripPlannerAgentError(Exception):
    """Base exception for all agent-related errors."""

    pass


class InvalidConfigurationError(TripPlannerAgentError):
    """Exception raised when agent configuration is invalid."""

    pass


@dataclass
class AgentConfig:
    """Configuration for an agent."""

    name: str
    instructions: str
    model: str = "gemini-2.5-flash"
    temperature: float = 0.7
    max_tokens: int | None = None


class BaseAgent:
    """
    Base class for Gemini-backed agents.

    Holds the agent configuration and a `google.genai` client. When no API
    key is passed the client reads GEMINI_API_KEY from the environment.
    """

    def __init__(self, config: AgentConfig, api_key: str | None = None):
        """
        Initialize a base agent.

        Args:
            config: Configuration for the agent
            api_key: Gemini API key (optional)
        """
        self.config = config
        self.client = genai.Client(api_key=api_key) if api_key else genai.Client()

    @property
    def name(self) -> str:
        """Get the name of the agent."""
        return self.config.name

    @property
    def instructions(self) -> str:
        """Get the instructions for the agent."""
        return self.config.instructions

    def _validate_config(self) -> bool:
        """Validate the agent configuration."""
        if not self.config.name:
            raise InvalidConfigurationError("Agent name cannot be empty")
        if not self.config.instructions:
            raise InvalidConfigurationError("Agent instructions cannot be empty")
        return True

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens,
            system_instruction=self.instructions,
        )

    def _user_content(self, text: str) -> list[types.Content]:
        return [
            types.Content(
                role="user",
                parts=[types.Part.from_text(text=text)],
            )
        ]
