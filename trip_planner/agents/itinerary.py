"""
Itinerary agent.

Sends the trip request to Gemini as a single prompt and turns the reply
into an `Itinerary`. The reply is free text: the outermost JSON object is
cut out of it and validated against the itinerary models.
"""

import json

from trip_planner.agents.base import AgentConfig, BaseAgent
from trip_planner.config import AgentModelConfig, GenerationConfig, config
from trip_planner.data.trips import Itinerary, TripRequest
from trip_planner.prompts.templates import build_itinerary_prompt
from trip_planner.utils.error_handling import (
    APIError,
    ItineraryParseError,
    with_retry,
)
from trip_planner.utils.helpers import extract_json_object
from trip_planner.utils.logging import AgentLogger

GENERATION_FAILED = "Failed to generate itinerary. Please try again later."
PARSE_FAILED = "Failed to parse the AI-generated itinerary. Please try again."


class ItineraryAgent(BaseAgent):
    """Agent that generates a day-by-day itinerary for a trip request."""

    def __init__(
        self,
        model_config: AgentModelConfig | None = None,
        generation: GenerationConfig | None = None,
        api_key: str | None = None,
    ):
        model_config = model_config or config.get_agent_model("itinerary")
        agent_config = AgentConfig(
            name="Itinerary Agent",
            instructions=(
                "You are an expert travel planner. Build realistic, "
                "budget-aware itineraries and answer with a single JSON "
                "object in exactly the structure you are given."
            ),
            model=model_config.name,
            temperature=model_config.temperature,
            max_tokens=model_config.max_tokens,
        )
        super().__init__(agent_config, api_key=api_key or config.api.gemini_api_key)
        self._validate_config()
        self.generation = generation or config.generation
        self.log = AgentLogger(self.name)

    async def generate(self, request: TripRequest) -> Itinerary:
        """
        Generate an itinerary for a validated trip request.

        Raises:
            APIError: Gemini could not be reached or returned nothing
            ItineraryParseError: The reply held no valid itinerary JSON
        """
        prompt = build_itinerary_prompt(request)
        call = with_retry(
            max_attempts=self.generation.max_attempts,
            min_wait_seconds=self.generation.retry_min_wait,
            max_wait_seconds=self.generation.retry_max_wait,
        )(self._generate_text)
        text = await call(prompt)
        return self.parse_itinerary(text)

    async def _generate_text(self, prompt: str) -> str:
        self.log.log_llm_input(self.config.model, prompt, self.config.temperature)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.config.model,
                contents=self._user_content(prompt),
                config=self._generation_config(),
            )
        except Exception as e:
            # google-genai raises errors.APIError (with an int .code) for HTTP
            # failures and transport exceptions for network problems
            code = getattr(e, "code", None)
            raise APIError(
                GENERATION_FAILED,
                service_name="gemini",
                status_code=code if isinstance(code, int) else None,
                original_error=e,
            ) from e

        text = response.text
        self.log.log_llm_output(self.config.model, text)
        if not text:
            raise APIError(GENERATION_FAILED, service_name="gemini")
        return text

    def parse_itinerary(self, text: str) -> Itinerary:
        """Extract and validate the itinerary JSON from a model reply."""
        json_str = extract_json_object(text)
        try:
            data = json.loads(json_str)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            # pydantic's ValidationError is a ValueError too
            return Itinerary.model_validate(data)
        except ValueError as e:
            self.log.error(f"Error parsing AI response: {e!s}")
            raise ItineraryParseError(PARSE_FAILED, original_error=e) from e
