"""
AI Service wrapper for LiteLLM.

Provides the club's language-model advisor: team split proposals, session level
suggestions and announcement digests.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import litellm
from litellm import acompletion

from domain.models.player import Player

logger = logging.getLogger("spiketime.services.ai")


# Tool definitions for structured outputs
TEAM_SPLIT_TOOL = {
    "type": "function",
    "function": {
        "name": "propose_team_split",
        "description": "Split the roster into two volleyball teams of equal size with similar skill.",
        "parameters": {
            "type": "object",
            "properties": {
                "team_a": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Player ids for Team A. Use the ids exactly as given.",
                },
                "team_b": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Player ids for Team B. Every other player, none repeated.",
                },
                "rationale": {
                    "type": "string",
                    "description": "Brief analysis of why the two teams are balanced.",
                },
            },
            "required": ["team_a", "team_b", "rationale"],
        },
    },
}

SESSION_LEVEL_TOOL = {
    "type": "function",
    "function": {
        "name": "suggest_session_level",
        "description": "Suggest the skill level a session should be advertised at.",
        "parameters": {
            "type": "object",
            "properties": {
                "suggested_level": {
                    "type": "string",
                    "enum": ["beginner", "intermediate", "advanced"],
                    "description": "The suggested optimal skill level for the session.",
                },
                "reasoning": {
                    "type": "string",
                    "description": "One or two sentences explaining the suggestion.",
                },
            },
            "required": ["suggested_level", "reasoning"],
        },
    },
}


@dataclass
class ToolCallResult:
    """Result from a tool-calling LLM invocation."""

    tool_name: str | None
    tool_args: dict[str, Any]
    content: str | None = None
    raw_response: Any = None
    error: str | None = None  # Set when the call itself failed (timeout, rate limit, ...)

    @property
    def failed(self) -> bool:
        return self.error is not None


class AIService:
    """
    Wrapper for LiteLLM chat completions.

    Provides methods for:
    - General completions
    - Tool-calling completions (for structured outputs)
    - Team split proposals
    - Session level suggestions
    - Announcement summaries
    """

    def __init__(
        self,
        model: str,
        api_key: str | None,
        timeout: float = 15.0,
        max_tokens: int = 500,
    ):
        """
        Initialize AIService.

        Args:
            model: LiteLLM model identifier (e.g., "gemini/gemini-2.0-flash")
            api_key: API key for the model provider
            timeout: Hard request timeout in seconds
            max_tokens: Maximum tokens in response
        """
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.max_tokens = max_tokens

        # Retry policy belongs to the caller
        litellm.num_retries = 0

        logger.info(f"AIService initialized with model: {model}")

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ) -> str | None:
        """
        Simple completion without tool calling.

        Returns:
            Generated text or None on error
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        timeout = self.timeout if timeout is None else timeout
        try:
            response = await asyncio.wait_for(
                acompletion(
                    model=self.model,
                    messages=messages,
                    api_key=self.api_key,
                    temperature=temperature,
                    timeout=timeout,
                    max_tokens=max_tokens or self.max_tokens,
                    num_retries=0,
                ),
                timeout=timeout,
            )
            return response.choices[0].message.content
        except asyncio.TimeoutError:
            logger.warning(f"AI hard timeout after {timeout}s")
            return None
        except litellm.RateLimitError as e:
            logger.warning(f"AI rate limited: {e}")
            return None
        except litellm.Timeout as e:
            logger.warning(f"AI timeout: {e}")
            return None
        except Exception as e:
            logger.error(f"AI completion failed: {e}")
            return None

    async def call_with_tools(
        self,
        messages: list[dict[str, str]],
        tools: list[dict[str, Any]],
        tool_choice: str | dict[str, Any] = "auto",
        timeout: float | None = None,
    ) -> ToolCallResult:
        """
        Call LLM with tool definitions and return tool call results.

        Failures never raise (task cancellation aside); they come back as a
        ToolCallResult with ``error`` set.
        """
        timeout = self.timeout if timeout is None else timeout
        try:
            response = await asyncio.wait_for(
                acompletion(
                    model=self.model,
                    messages=messages,
                    api_key=self.api_key,
                    tools=tools,
                    tool_choice=tool_choice,
                    timeout=timeout,
                    max_tokens=2000,  # Room for reasoning models to think before the tool call
                    num_retries=0,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"AI tool call hard timeout after {timeout}s")
            return ToolCallResult(tool_name=None, tool_args={}, error=f"timed out after {timeout}s")
        except litellm.RateLimitError as e:
            logger.warning(f"AI rate limited: {e}")
            return ToolCallResult(tool_name=None, tool_args={}, error="rate limited")
        except litellm.Timeout as e:
            logger.warning(f"AI timeout: {e}")
            return ToolCallResult(tool_name=None, tool_args={}, error="provider timeout")
        except Exception as e:
            logger.error(f"AI tool call failed: {e}")
            return ToolCallResult(tool_name=None, tool_args={}, error=str(e) or type(e).__name__)

        message = response.choices[0].message

        if getattr(message, "tool_calls", None):
            tool_call = message.tool_calls[0]
            try:
                args = json.loads(tool_call.function.arguments)
            except (json.JSONDecodeError, TypeError):
                logger.warning(f"AI returned unparseable arguments for {tool_call.function.name}")
                args = {}
            if not isinstance(args, dict):
                args = {}

            return ToolCallResult(
                tool_name=tool_call.function.name,
                tool_args=args,
                raw_response=response,
            )

        return ToolCallResult(
            tool_name=None,
            tool_args={},
            content=message.content,
            raw_response=response,
        )

    async def propose_team_split(
        self,
        players: list[Player],
        timeout: float | None = None,
    ) -> ToolCallResult:
        """
        Ask the model for two balanced teams of ``len(players) // 2``.

        Only id, name and skill level are sent for each player.
        """
        team_size = len(players) // 2
        roster = "\n".join(
            f"- {p['id']}: {p['name']} ({p['skillLevel']})"
            for p in (player.to_advisor_dict() for player in players)
        )
        messages = [
            {
                "role": "system",
                "content": f"""You are an expert volleyball coach. Create two balanced teams of {team_size} from the {len(players)} players you are given.

Analyze the players' skill levels (Beginner, Intermediate, Advanced) and distribute them as evenly as possible between Team A and Team B.
Try to ensure each team has a similar mix of skill levels. For example, avoid putting all advanced players on one team.

Rules:
- Refer to players only by the id before the colon
- Every player goes on exactly one team
- Each team has exactly {team_size} players""",
            },
            {
                "role": "user",
                "content": f"""Players:
{roster}

Return the two teams and a brief analysis explaining your choices and why the teams are balanced.""",
            },
        ]

        return await self.call_with_tools(
            messages=messages,
            tools=[TEAM_SPLIT_TOOL],
            tool_choice={"type": "function", "function": {"name": "propose_team_split"}},
            timeout=timeout,
        )

    async def suggest_session_level(self, skill_levels: list[str]) -> dict[str, Any]:
        """
        Suggest the optimal session level for the registered players.

        Returns:
            Dict with "suggested_level" and "reasoning" keys, or "error" on failure
        """
        messages = [
            {
                "role": "system",
                "content": """You help a volleyball session administrator pick the skill level for a session.

Given the skill levels of the registered players, suggest the most appropriate session level to maximize engagement and create balanced teams.
The available skill levels are: beginner, intermediate, and advanced.
If most players are intermediate, suggest intermediate. If the levels are mixed, suggest the level that accommodates the majority or gives the best overall experience.""",
            },
            {
                "role": "user",
                "content": f"Registered player skill levels: {', '.join(skill_levels) or 'none'}",
            },
        ]

        result = await self.call_with_tools(
            messages=messages,
            tools=[SESSION_LEVEL_TOOL],
            tool_choice={"type": "function", "function": {"name": "suggest_session_level"}},
        )

        if result.tool_name == "suggest_session_level" and result.tool_args.get("suggested_level"):
            return result.tool_args
        return {"error": result.error or "Failed to suggest a session level"}

    async def summarize_announcements(self, announcements_text: str) -> str | None:
        """Condense recent announcements into a short digest, or None on failure."""
        return await self.complete(
            prompt=f"Here are the announcements:\n{announcements_text}",
            system_prompt=(
                "You summarize club announcements for members. Provide a concise summary "
                "so members can quickly stay up-to-date. Plain text, no more than 4 sentences."
            ),
            temperature=0.3,
        )
