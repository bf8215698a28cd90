"""
LLM provider abstraction and response parsing utilities.

Provides a provider-agnostic interface for the structuring-hint request:
deterministic sampling, an explicit per-request timeout, exponential
backoff on transient API errors, and tolerant JSON extraction from replies.
"""

import json
import os
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Optional, Tuple, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Retry configuration
MAX_RETRIES = 3
BASE_DELAY = 1.0

# Hard ceiling for a single request, in seconds
DEFAULT_TIMEOUT = float(os.getenv("HINT_TIMEOUT_SECONDS", "30"))

# A labelled résumé is roughly as long as the résumé itself
DEFAULT_MAX_TOKENS = 4096

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable: Tuple[type, ...],
    provider_name: str,
) -> T:
    """
    Run operation, retrying with exponential backoff on transient errors.

    Args:
        operation: Callable that performs one API request
        retryable: Exception types worth retrying (rate limits, overload, timeouts)
        provider_name: Provider label for log messages
    """
    for attempt in range(MAX_RETRIES):
        try:
            return operation()
        except retryable as e:
            if attempt == MAX_RETRIES - 1:
                raise
            delay = BASE_DELAY * (2**attempt)
            logger.warning(
                f"{provider_name}: {type(e).__name__}, retrying in {delay:.1f}s "
                f"(attempt {attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(delay)


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses set _provider_prefix and _default_model, build their SDK
    client in _connect(), list transient SDK errors in _retryable(), and
    implement _call_api() for a single request.
    """

    _provider_prefix: str
    _default_model: str
    _api_key_env: str

    def __init__(
        self,
        model: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        api_key = os.getenv(self._api_key_env)
        if not api_key:
            raise ValueError(f"{self._api_key_env} environment variable not set")

        self.model = model or self._default_model
        self.name = f"{self._provider_prefix}/{self.model}"
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.client = self._connect(api_key)

    @abstractmethod
    def _connect(self, api_key: str) -> Any:
        """Create the SDK client with SDK-level retries disabled."""

    @abstractmethod
    def _retryable(self) -> Tuple[type, ...]:
        """SDK exception types that indicate a transient failure."""

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single API call (no retries)."""

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a response, retrying transient errors with backoff."""
        start_time = time.time()
        response = _retry_with_backoff(
            partial(self._call_api, system_prompt, user_prompt),
            self._retryable(),
            self.name,
        )
        logger.debug(f"{self.name} answered in {time.time() - start_time:.1f}s")
        return response


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    _provider_prefix = "anthropic"
    _default_model = "claude-sonnet-4-20250514"
    _api_key_env = "ANTHROPIC_API_KEY"

    def _connect(self, api_key: str) -> Any:
        # Lazy import - only load the SDK when this provider is used
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install folio[llm]")
        self._sdk = anthropic
        return anthropic.Anthropic(api_key=api_key, timeout=self.timeout, max_retries=0)

    def _retryable(self) -> Tuple[type, ...]:
        return (
            self._sdk.RateLimitError,
            self._sdk.InternalServerError,
            self._sdk.APIConnectionError,
        )

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=0,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return LLMResponse(
            content="".join(block.text for block in response.content if block.type == "text"),
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider."""

    _provider_prefix = "openai"
    _default_model = "gpt-4o-mini"
    _api_key_env = "OPENAI_API_KEY"

    def _connect(self, api_key: str) -> Any:
        # Lazy import - only load the SDK when this provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install folio[llm]")
        self._sdk = openai
        return openai.OpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)

    def _retryable(self) -> Tuple[type, ...]:
        return (
            self._sdk.RateLimitError,
            self._sdk.InternalServerError,
            self._sdk.APIConnectionError,
        )

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=0,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


PROVIDERS = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


# --- Provider Factory ---


def get_provider(
    provider_name: str = None, model: str = None, timeout: float = DEFAULT_TIMEOUT
) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: LLM_PROVIDER env var, then "openai")
        model: Model name (default: provider-specific default)
        timeout: Per-request timeout in seconds

    Returns:
        LLMProvider instance

    Raises:
        ValueError: Unknown provider or missing API key
        ImportError: Provider SDK not installed
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai")

    provider_cls = PROVIDERS.get(provider_name.lower())
    if provider_cls is None:
        raise ValueError(f"Unknown provider: {provider_name}. Use one of {sorted(PROVIDERS)}")

    return provider_cls(model=model, timeout=timeout)


# --- Response Parsing Utilities ---


def parse_json_payload(text: str) -> Optional[Any]:
    """
    Parse a JSON value from an LLM response, handling markdown code fences.

    Tries, in order: the raw text, the text with ``` fences stripped, and the
    outermost [...] or {...} span found in the text.

    Returns:
        The decoded JSON value, or None if nothing parses
    """
    text = text.strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    text = re.sub(r"^```(?:json)?\s*", "", text)
    text = re.sub(r"\s*```$", "", text)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    for open_char, close_char in (("[", "]"), ("{", "}")):
        start = text.find(open_char)
        end = text.rfind(close_char)
        if start != -1 and end > start:
            try:
                return json.loads(text[start : end + 1])
            except json.JSONDecodeError:
                continue

    return None
