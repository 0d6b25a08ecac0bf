"""
LLM-based field translator.

• Translates one short text field at a time to a supported language
• Protects preserved terms with placeholders so the model cannot touch them
• Retries a bounded number of times, then hands back the original text
• Optionally caches results in <cache_dir>/<sha256>.json so the model is
  queried only once per unique (language, text, terms)
"""

from __future__ import annotations
import json
import logging
import textwrap
from pathlib import Path
from typing import Iterable

import config
from languages import get_language_info
from llm_client import CompletionOptions, LLMClient, complete_with_retry
from preserve_terms import KEEP_TOKEN_PREFIX, protect_preserved_terms
from utils import _sha

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = "You are a professional translator. Return only the translated text."

_PROMPT = textwrap.dedent(
    """\
    Translate the following text to {language}. Keep technical terms and proper nouns as appropriate.
    Return only the translated text without quotes or additions.{keep_note}

    Text:
    {text}"""
)

_KEEP_NOTE = f" Copy every token that looks like {KEEP_TOKEN_PREFIX}N__ exactly as it is."

_QUOTES = ("\"\"", "''", "“”", "«»")


def _max_tokens_for(text: str) -> int:
    return min(max(len(text) * 2, 200), 1200)


def _strip_quotes(s: str) -> str:
    s = s.strip()
    if len(s) >= 2 and (s[0] + s[-1]) in _QUOTES:
        return s[1:-1].strip()
    return s


class TranslationCache:
    """File cache: one small JSON document per translated field."""

    def __init__(self, cache_dir: str | Path):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, target: str, text: str, terms: tuple) -> Path:
        key = json.dumps([target, text, list(terms)], ensure_ascii=False)
        return self.cache_dir / f"{_sha(key)}.json"

    def get(self, target: str, text: str, terms: tuple) -> str | None:
        path = self._path(target, text, terms)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))["translation"]
        except (OSError, ValueError, KeyError):
            logger.warning("Ignoring unreadable translation cache entry %s", path.name)
            return None

    def put(self, target: str, text: str, terms: tuple, translation: str) -> None:
        path = self._path(target, text, terms)
        try:
            path.write_text(
                json.dumps({"target": target, "translation": translation}, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning("Could not write translation cache entry: %s", e)


class FieldTranslator:
    def __init__(
        self,
        client: LLMClient,
        model: str | None = None,
        max_attempts: int | None = None,
        temperature: float | None = None,
        cache: TranslationCache | None = None,
    ):
        self.client = client
        self.model = model or config.get_translation_model()
        self.max_attempts = max_attempts or config.TRANSLATION_MAX_ATTEMPTS
        self.temperature = config.TRANSLATION_TEMPERATURE if temperature is None else temperature
        self.cache = cache

    def translate(self, text: str | None, target: str, preserve_terms: Iterable[str] = ()) -> str | None:
        """
        Translate `text` into `target`. Blank input, and any failure once the
        retries are used up, give back `text` untouched.
        """
        if text is None or not str(text).strip():
            return text

        source = str(text).strip()
        terms = tuple(preserve_terms or ())
        language = get_language_info(target)

        if self.cache and (hit := self.cache.get(language.code, source, terms)) is not None:
            return hit

        protected = protect_preserved_terms(source, terms)
        prompt = _PROMPT.format(
            language=language.name,
            keep_note=_KEEP_NOTE if protected.replacements else "",
            text=protected.text,
        )
        options = CompletionOptions(
            model=self.model,
            temperature=self.temperature,
            max_tokens=_max_tokens_for(protected.text),
            max_attempts=self.max_attempts,
        )

        def keeps_terms(reply: str) -> bool:
            return bool(_strip_quotes(reply)) and protected.is_intact(_strip_quotes(reply))

        try:
            result = complete_with_retry(self.client, prompt, _SYSTEM_PROMPT, options, accept=keeps_terms)
        except Exception as e:
            logger.error("Translation to %s failed, keeping original text: %s", language.code, e)
            return text
        if not result:
            logger.warning("No usable translation to %s after %d attempts, keeping original text",
                           language.code, self.max_attempts)
            return text

        translated = protected.restore(_strip_quotes(result))
        if self.cache:
            self.cache.put(language.code, source, terms, translated)
        return translated


def build_translator(client: LLMClient, model: str | None = None) -> FieldTranslator:
    """Translator wired from config (cache dir, attempts, temperature)."""
    cache = TranslationCache(config.TRANSLATION_CACHE_DIR) if config.TRANSLATION_CACHE_DIR else None
    return FieldTranslator(client, model=model, cache=cache)
