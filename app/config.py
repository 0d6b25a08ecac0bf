"""
Configuration settings for the resume localizer.

This file contains configuration for the LLM providers used for translation
and for the localization pipeline itself. Everything can be overridden with
environment variables or a local .env file.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import logging
import os

# LLM Provider Configuration
# Set to "ollama" or "openai"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()

# Model Configuration
# For Ollama: use models like "llama3.1:8b", "mistral:7b", etc.
# For OpenAI: use models like "gpt-4o-mini", "gpt-3.5-turbo", etc.
DEFAULT_MODEL = {
    "ollama": "llama3.1:8b",
    "openai": "gpt-4o-mini"
}

# OpenAI Configuration
# Checked when the client is built, so the pipeline can be imported without a key.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL_PARAMS = {
    "temperature": 0.7,
    "max_tokens": 4096
}

# Ollama Configuration
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

# Translation
TRANSLATION_MODEL = os.getenv("TRANSLATION_MODEL")
TRANSLATION_TEMPERATURE = float(os.getenv("TRANSLATION_TEMPERATURE", "0.2"))
TRANSLATION_MAX_ATTEMPTS = int(os.getenv("TRANSLATION_MAX_ATTEMPTS", "2"))
TRANSLATION_MAX_WORKERS = int(os.getenv("TRANSLATION_MAX_WORKERS", "8"))
TRANSLATION_CACHE_DIR = os.getenv("TRANSLATION_CACHE_DIR") or None
_deadline = os.getenv("TRANSLATION_DEADLINE_SECONDS", "").strip()
TRANSLATION_DEADLINE_SECONDS = float(_deadline) if _deadline else None

# Terms kept verbatim in translated job titles, e.g. "Data,DevOps,Scrum"
PRESERVE_TERMS = [t.strip() for t in os.getenv("PRESERVE_TERMS", "").split(",") if t.strip()]

# Language detection
DETECTION_MIN_LETTERS = int(os.getenv("DETECTION_MIN_LETTERS", "3"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_model_for_provider(provider: str = None) -> str:
    """Get the default model for the specified provider."""
    provider = provider or LLM_PROVIDER
    return DEFAULT_MODEL.get(provider, "gpt-4o-mini")


def get_translation_model(provider: str = None) -> str:
    return TRANSLATION_MODEL or get_model_for_provider(provider)


def setup_logging(level: str = None) -> None:
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # silence noisy HTTP client logging
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
