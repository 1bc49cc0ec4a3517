"""Roadmap text generation through hosted LLM APIs"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Union

import requests
from anthropic import Anthropic
from anthropic import APIConnectionError as AnthropicConnectionError
from anthropic import APIError as AnthropicError
from anthropic import APIStatusError as AnthropicStatusError
from openai import APIConnectionError as OpenAIConnectionError
from openai import APIError as OpenAIError
from openai import APIStatusError as OpenAIStatusError
from openai import OpenAI

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
SUPPORTED_PROVIDERS = ("gemini", "openai", "anthropic")


@dataclass(frozen=True)
class Success:
    """Usable Markdown text returned by the model."""

    text: str
    ok = True


@dataclass(frozen=True)
class HttpError:
    """The API answered with a non-success status code."""

    status_code: int
    ok = False

    @property
    def message(self) -> str:
        return f"The server responded with an error (Status: {self.status_code})."


@dataclass(frozen=True)
class SafetyBlocked:
    """No text came back and the model reported a safety stop."""

    ok = False

    @property
    def message(self) -> str:
        return (
            "The response was blocked for safety reasons. "
            "Please try rephrasing your skills or query."
        )


@dataclass(frozen=True)
class MalformedResponse:
    """No usable text came back for any other reason."""

    ok = False

    @property
    def message(self) -> str:
        return "The API returned an empty or invalid response. Please try again."


@dataclass(frozen=True)
class TransportFailure:
    """The request never produced an HTTP response."""

    detail: str
    ok = False

    @property
    def message(self) -> str:
        return (
            "Could not reach the generation service. "
            "Please check your connection and try again."
        )


GenerationResult = Union[Success, HttpError, SafetyBlocked, MalformedResponse, TransportFailure]


def _first_part_text(candidate: Any) -> Optional[str]:
    """Return candidates[0].content.parts[0].text when it is a non-empty string."""
    if not isinstance(candidate, dict):
        return None
    content = candidate.get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if isinstance(text, str) and text:
        return text
    return None


def parse_gemini_payload(payload: Any) -> GenerationResult:
    """Turn a decoded generateContent response body into a result.

    Args:
        payload: Decoded JSON body

    Returns:
        Success with the first candidate's text, SafetyBlocked when that
        candidate has no text and finishReason is SAFETY, otherwise
        MalformedResponse.
    """
    candidates = payload.get("candidates") if isinstance(payload, dict) else None
    if not isinstance(candidates, list) or not candidates:
        return MalformedResponse()

    first = candidates[0]
    text = _first_part_text(first)
    if text is not None:
        return Success(text)

    if isinstance(first, dict) and first.get("finishReason") == "SAFETY":
        return SafetyBlocked()
    return MalformedResponse()


class LLMClient:
    """Unified LLM client supporting Gemini, OpenAI and Anthropic"""

    def __init__(
        self,
        provider: str = "gemini",
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.provider = provider.lower()
        self.timeout = timeout

        if self.provider == "gemini":
            self.api_key = api_key or os.getenv("GEMINI_API_KEY")
            self.model = model or os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
            self.api_base = os.getenv("GEMINI_API_BASE", GEMINI_API_BASE).rstrip('/')
            self.client = None
        elif self.provider == "openai":
            self.client = OpenAI(api_key=api_key or os.getenv("OPENAI_API_KEY"), timeout=timeout)
            self.model = model or os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        elif self.provider == "anthropic":
            self.client = Anthropic(api_key=api_key or os.getenv("ANTHROPIC_API_KEY"), timeout=timeout)
            self.model = model or os.getenv("ANTHROPIC_MODEL", "claude-3-5-haiku-latest")
        else:
            raise ValueError(f"Unsupported LLM provider: {provider}")

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> GenerationResult:
        """Generate roadmap text for a prompt

        Args:
            prompt: Full instruction text

        Returns:
            One of the GenerationResult variants; API failures are never raised
        """
        logger.info(f"Requesting roadmap from {self.provider} model {self.model}")

        if self.provider == "gemini":
            result = self._generate_gemini(prompt)
        elif self.provider == "openai":
            result = self._generate_openai(prompt)
        else:
            result = self._generate_anthropic(prompt)

        if result.ok:
            logger.info(f"Roadmap text received: {len(result.text)} characters")
        else:
            logger.warning(f"Generation failed: {type(result).__name__}")
        return result

    def _generate_gemini(self, prompt: str) -> GenerationResult:
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key or "",
        }

        try:
            response = requests.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            return TransportFailure(str(e))

        if not 200 <= response.status_code < 300:
            logger.error(f"Gemini responded with status {response.status_code}")
            return HttpError(response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Gemini returned a non-JSON body: {e}")
            return MalformedResponse()

        return parse_gemini_payload(body)

    def _generate_openai(self, prompt: str) -> GenerationResult:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIStatusError as e:
            logger.error(f"OpenAI responded with status {e.status_code}")
            return HttpError(e.status_code)
        except OpenAIConnectionError as e:
            logger.error(f"OpenAI request failed: {e}")
            return TransportFailure(str(e))
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            return MalformedResponse()

        if not response.choices:
            return MalformedResponse()
        choice = response.choices[0]
        text = choice.message.content if choice.message else None
        if text:
            return Success(text)
        if choice.finish_reason == "content_filter":
            return SafetyBlocked()
        return MalformedResponse()

    def _generate_anthropic(self, prompt: str) -> GenerationResult:
        try:
            response = self.client.messages.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=4096,
            )
        except AnthropicStatusError as e:
            logger.error(f"Anthropic responded with status {e.status_code}")
            return HttpError(e.status_code)
        except AnthropicConnectionError as e:
            logger.error(f"Anthropic request failed: {e}")
            return TransportFailure(str(e))
        except AnthropicError as e:
            logger.error(f"Anthropic request failed: {e}")
            return MalformedResponse()

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if text:
            return Success(text)
        if response.stop_reason == "refusal":
            return SafetyBlocked()
        return MalformedResponse()
