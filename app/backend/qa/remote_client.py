"""
Client for the remote chat-completion service.

Forwards a question together with a dump of the profile and returns the
first completion's text. One attempt per call, bounded by a fixed timeout;
every failure is raised as a RemoteAnswerError subclass so callers can
fall back without inspecting SDK types.
"""
from typing import Dict, List, Optional

import httpx
from groq import (
    APIConnectionError,
    APIError,
    APIResponseValidationError,
    APIStatusError,
    AsyncGroq,
)

from portfolio.profile_store import Profile, PROFILE, profile_summary


DEFAULT_TIMEOUT_SECONDS = 18.0


class RemoteAnswerError(Exception):
    """Base class for remote answering failures."""


class RemoteUnavailable(RemoteAnswerError):
    """Transport failure, timeout or non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteMalformed(RemoteAnswerError):
    """Response body could not be parsed or held no completion choices."""


def build_system_prompt(profile: Profile) -> str:
    return (
        f"You are an AI portfolio assistant for {profile.name}. Be concise, accurate, "
        "and grounded in the profile unless the user asks for general knowledge."
    )


def build_messages(question: str, profile: Profile = PROFILE) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": build_system_prompt(profile)},
        {"role": "system", "content": profile_summary(profile)},
        {"role": "user", "content": question},
    ]


class RemoteAnswerClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        profile: Profile = PROFILE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        temperature: float = 0.3,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.model = model
        self.profile = profile
        self.temperature = temperature
        # retries are disabled: a failure falls through to the local engine
        self._client = AsyncGroq(
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def ask(self, question: str) -> str:
        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=build_messages(question, self.profile),
                temperature=self.temperature,
            )
        except APIStatusError as e:
            raise RemoteUnavailable(f"remote status {e.status_code}", status_code=e.status_code) from e
        except APIConnectionError as e:
            raise RemoteUnavailable(f"remote transport error: {e}") from e
        except (APIResponseValidationError, ValueError) as e:
            raise RemoteMalformed(f"unparseable remote response: {e}") from e
        except APIError as e:
            raise RemoteUnavailable(f"remote error: {e}") from e

        choices = getattr(completion, "choices", None)
        if not isinstance(choices, list):
            raise RemoteMalformed(f"choices is not a list: {type(choices).__name__}")
        if not choices:
            raise RemoteMalformed("no choices")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise RemoteMalformed("first choice has no message content")
        return content.strip()

    async def aclose(self):
        await self._client.close()
