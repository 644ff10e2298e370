"""LLM-backed matchmaking helpers.

The core only depends on the :class:`MatchmakingAI` protocol. The OpenAI
implementation bounds every call with a timeout and, on any provider
failure, returns a fixed fallback payload instead of raising: callers never
see :class:`~matchai.core.errors.UpstreamUnavailableError`.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Protocol, TypeVar

import openai
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from matchai.core.errors import UpstreamUnavailableError
from matchai.core.settings import settings
from matchai.models import User
from matchai.schemas.ai import (
    Compatibility,
    ConversationStarters,
    OptimalTime,
    OptimalTimes,
    ProfileInputs,
    ProfileSuggestion,
    VideoDateTips,
)

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)

FALLBACK_PROFILE = ProfileSuggestion(
    bio="Error generating profile. Please try again later.",
    interests=[],
)
FALLBACK_STARTERS = ConversationStarters(
    starters=[
        "Hi there! What's been the highlight of your day so far?",
        "I'd love to know more about your interests. What are you passionate about?",
        "If you could travel anywhere right now, where would you go?",
    ]
)
FALLBACK_TIPS = VideoDateTips(
    tips=[
        "Find a quiet space with good lighting for your video call",
        "Prepare a few topics based on your shared interests",
        "Be yourself and enjoy getting to know each other",
    ]
)
FALLBACK_TIMES = OptimalTimes(
    times=[
        OptimalTime(day="Saturday", time="6:00 PM", confidence=0.9),
        OptimalTime(day="Sunday", time="3:00 PM", confidence=0.8),
        OptimalTime(day="Friday", time="7:30 PM", confidence=0.7),
    ]
)
FALLBACK_COMPATIBILITY = Compatibility(
    score=50,
    reasons=["Unable to calculate detailed compatibility at this time"],
)


class MatchmakingAI(Protocol):
    """Capabilities the application needs from a language model."""

    async def generate_profile(self, inputs: ProfileInputs) -> ProfileSuggestion: ...

    async def generate_conversation_starters(
        self,
        my_interests: list[str],
        their_interests: list[str],
        their_name: str,
    ) -> ConversationStarters: ...

    async def generate_video_date_tips(self, user: User, other: User) -> VideoDateTips: ...

    async def suggest_optimal_times(self) -> OptimalTimes: ...

    async def score_compatibility(self, user: User, other: User) -> Compatibility: ...


def _joined(values: list[str] | None) -> str:
    return ", ".join(values or []) or "none listed"


def _describe(user: User, *, include_goal: bool = False) -> str:
    lines = [
        f"{user.profile_name}, {user.age}, {user.gender}",
        f"Interests: {_joined(user.interests)}",
        f"Bio: {user.bio or 'not provided'}",
    ]
    if include_goal:
        lines.append(f"Looking for: {user.looking_for}")
    return "\n".join(lines)


def _extract_json(text: str) -> str:
    """Return the outermost ``{...}`` span so stray prose around the object is ignored."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise UpstreamUnavailableError("LLM response contained no JSON object")
    return text[start : end + 1]


class OpenAIMatchmakingAI:
    """:class:`MatchmakingAI` backed by the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4o",
        timeout: float = 15.0,
        client: openai.AsyncOpenAI | None = None,
    ) -> None:
        self._model = model
        self._timeout = timeout
        if client is not None:
            self._client: openai.AsyncOpenAI | None = client
        elif api_key:
            self._client = openai.AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        else:
            self._client = None
            logger.info("LLM support disabled (no OPENAI_API_KEY); fallbacks will be served")

    async def _ask(self, prompt: str, schema: type[_ModelT]) -> _ModelT:
        if self._client is None:
            raise UpstreamUnavailableError("LLM provider is not configured")

        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self._model,
                    messages=[{"role": "user", "content": prompt}],
                    response_format={"type": "json_object"},
                ),
                timeout=self._timeout,
            )
        except (openai.OpenAIError, asyncio.TimeoutError) as err:
            raise UpstreamUnavailableError(f"LLM call failed: {err!r}") from err

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamUnavailableError("LLM returned an empty response")

        try:
            return schema.model_validate_json(_extract_json(content))
        except (PydanticValidationError, OverflowError) as err:
            raise UpstreamUnavailableError("LLM response did not match the expected shape") from err

    async def _ask_or_fallback(
        self, capability: str, prompt: str, schema: type[_ModelT], fallback: _ModelT
    ) -> _ModelT:
        t0 = time.monotonic()
        try:
            result = await self._ask(prompt, schema)
        except UpstreamUnavailableError as err:
            logger.warning("LLM %s unavailable, serving fallback: %s", capability, err)
            return fallback.model_copy(deep=True)
        logger.info("LLM %s ok in %.0fms", capability, (time.monotonic() - t0) * 1000)
        return result

    async def generate_profile(self, inputs: ProfileInputs) -> ProfileSuggestion:
        prompt = (
            "Generate an engaging dating profile based on the following information:\n\n"
            f"Interests: {_joined(inputs.interests)}\n"
            f"Age: {inputs.age if inputs.age is not None else 'Not specified'}\n"
            f"Gender: {inputs.gender or 'Not specified'}\n"
            f"Location: {inputs.location or 'Not specified'}\n"
            f"Occupation: {inputs.occupation or 'Not specified'}\n"
            f"Education: {inputs.education or 'Not specified'}\n"
            f"Looking for: {inputs.looking_for or 'Not specified'}\n\n"
            "Generate a compelling bio (maximum 200 characters) and a refined list of interests.\n"
            'Respond in JSON format with fields: "bio" (string) and "interests" (array of strings).'
        )
        return await self._ask_or_fallback("profile", prompt, ProfileSuggestion, FALLBACK_PROFILE)

    async def generate_conversation_starters(
        self,
        my_interests: list[str],
        their_interests: list[str],
        their_name: str,
    ) -> ConversationStarters:
        shared = [interest for interest in my_interests if interest in their_interests]
        shared_line = (
            f"Shared interests: {', '.join(shared)}"
            if shared
            else "We don't seem to have shared interests yet."
        )
        prompt = (
            f"Generate 3 engaging conversation starters for a dating app chat with {their_name}.\n\n"
            f"My interests: {_joined(my_interests)}\n"
            f"{their_name}'s interests: {_joined(their_interests)}\n"
            f"{shared_line}\n\n"
            "Make the conversation starters personal, engaging, and relevant to the shared "
            "interests if any. Each starter should be 1-2 sentences maximum.\n"
            'Respond in JSON format with field: "starters" (array of strings).'
        )
        return await self._ask_or_fallback(
            "conversation_starters", prompt, ConversationStarters, FALLBACK_STARTERS
        )

    async def generate_video_date_tips(self, user: User, other: User) -> VideoDateTips:
        prompt = (
            "Generate 3 personalized tips for a successful video date between these two users:\n\n"
            f"User 1: {_describe(user)}\n\n"
            f"User 2: {_describe(other)}\n\n"
            "Provide specific, actionable tips related to their shared interests or "
            "complementary qualities.\n"
            'Respond in JSON format with field: "tips" (array of strings).'
        )
        return await self._ask_or_fallback("video_date_tips", prompt, VideoDateTips, FALLBACK_TIPS)

    async def suggest_optimal_times(self) -> OptimalTimes:
        prompt = (
            "Suggest 3 optimal times for a video date on a dating app.\n"
            "Consider common free times when people might be available.\n"
            "For each suggestion, include the day of the week, time, and a confidence score (0-1).\n"
            'Respond in JSON format with field: "times" (array of objects with "day", "time", '
            'and "confidence").'
        )
        return await self._ask_or_fallback("optimal_times", prompt, OptimalTimes, FALLBACK_TIMES)

    async def score_compatibility(self, user: User, other: User) -> Compatibility:
        prompt = (
            "Calculate the compatibility between these two dating app users:\n\n"
            f"User 1: {_describe(user, include_goal=True)}\n\n"
            f"User 2: {_describe(other, include_goal=True)}\n\n"
            "Provide a compatibility score (0-100) and 2-3 specific reasons for the score.\n"
            "Consider shared interests, complementary qualities, and relationship goals.\n"
            'Respond in JSON format with fields: "score" (number) and "reasons" (array of strings).'
        )
        return await self._ask_or_fallback(
            "compatibility", prompt, Compatibility, FALLBACK_COMPATIBILITY
        )


_ai_service: OpenAIMatchmakingAI | None = None


def get_ai_service() -> OpenAIMatchmakingAI:
    """Return the process-wide AI service, creating it on first use."""
    global _ai_service
    if _ai_service is None:
        _ai_service = OpenAIMatchmakingAI(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.llm_timeout_seconds,
        )
    return _ai_service
