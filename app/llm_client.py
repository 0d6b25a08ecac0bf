"""
LLM client abstraction layer to support multiple providers.

This module provides a unified interface for different LLM providers,
making it easy to switch between Ollama and OpenAI API while maintaining
the same interface for the rest of the application.

Clients are built once by the caller (see get_llm_client) and handed to the
translator, nothing in here keeps a process-wide instance.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Dict

from openai import OpenAI

try:
    from ollama import Client as OllamaSDKClient
except ImportError:
    OllamaSDKClient = None

import config

logger = logging.getLogger(__name__)


class LLMResponse:
    """Unified response object for LLM responses."""

    def __init__(self, content: str | None):
        self.message = MessageContent(content)


class MessageContent:
    """Message content wrapper."""

    def __init__(self, content: str | None):
        self.content = content


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def chat(
        self,
        model: str,
        messages: List[Dict[str, str]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send a chat request to the LLM provider."""
        pass


class OllamaClient(LLMClient):
    """Ollama client implementation."""

    def __init__(self, host: str | None = None):
        if OllamaSDKClient is None:
            raise ImportError("ollama package is required for OllamaClient")
        self.client = OllamaSDKClient(host=host or config.OLLAMA_BASE_URL)

    def chat(self, model, messages, temperature=None, max_tokens=None) -> LLMResponse:
        """Send a chat request to Ollama."""
        options = {}
        if temperature is not None:
            options["temperature"] = temperature
        if max_tokens is not None:
            options["num_predict"] = max_tokens
        response = self.client.chat(model=model, messages=messages, options=options or None)
        return LLMResponse(response.message.content)


class OpenAIClient(LLMClient):
    """OpenAI client implementation."""

    def __init__(self, api_key: str | None = None):
        # Use provided API key or get from environment
        api_key = api_key or config.OPENAI_API_KEY
        if not api_key:
            raise ValueError("OpenAI API key is required. Set OPENAI_API_KEY environment variable or pass api_key parameter.")

        self.client = OpenAI(api_key=api_key)

    def chat(self, model, messages, temperature=None, max_tokens=None) -> LLMResponse:
        """Send a chat request to OpenAI."""
        if temperature is None:
            temperature = config.OPENAI_MODEL_PARAMS.get("temperature", 0.7)
        if max_tokens is None:
            max_tokens = config.OPENAI_MODEL_PARAMS.get("max_tokens", 4096)

        response = self.client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens
        )

        content = response.choices[0].message.content if response.choices else None
        return LLMResponse(content)


def get_llm_client(provider: str | None = None) -> LLMClient:
    """Factory function to get the appropriate LLM client based on configuration."""
    provider = (provider or config.LLM_PROVIDER).lower()

    if provider == "openai":
        return OpenAIClient()
    elif provider == "ollama":
        return OllamaClient()
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")


@dataclass
class CompletionOptions:
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 500
    max_attempts: int = 2


def complete_with_retry(
    client: LLMClient,
    prompt: str,
    system_message: str = "You are a helpful assistant.",
    options: CompletionOptions | None = None,
    accept: Callable[[str], bool] | None = None,
) -> str | None:
    """
    Ask the model for a completion, retrying a bounded number of times.

    Each retry is a little more permissive than the previous one: temperature
    goes up by 0.1 and the token allowance by 100. Empty answers, and answers
    `accept` turns down, count as a failed attempt. If the final attempt
    raises, the error is re-raised; if no attempt produced a usable answer,
    None is returned.
    """
    options = options or CompletionOptions()
    messages = [
        {"role": "system", "content": system_message},
        {"role": "user", "content": prompt},
    ]

    for attempt in range(1, options.max_attempts + 1):
        try:
            rsp = client.chat(
                model=options.model,
                messages=messages,
                temperature=options.temperature + (attempt - 1) * 0.1,
                max_tokens=options.max_tokens + (attempt - 1) * 100,
            )
            content = (rsp.message.content or "").strip()
            if content and (accept is None or accept(content)):
                return content
            if content:
                logger.warning("Rejected LLM response on attempt %d/%d", attempt, options.max_attempts)
            else:
                logger.warning("Empty response from LLM on attempt %d/%d", attempt, options.max_attempts)
        except Exception:
            logger.exception("LLM request failed on attempt %d/%d", attempt, options.max_attempts)
            if attempt == options.max_attempts:
                raise

    return None


def enhance_with_llm(
    client: LLMClient,
    prompt: str,
    system_message: str = "You are a helpful assistant.",
    fallback: str = "",
    options: CompletionOptions | None = None,
) -> str:
    """Like complete_with_retry, but never raises: falls back to `fallback`."""
    try:
        result = complete_with_retry(client, prompt, system_message, options)
    except Exception as e:
        logger.error("LLM enhancement failed, using fallback content: %s", e)
        return fallback
    return result or fallback
