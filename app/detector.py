"""
Statistical language identification (langdetect).

identify_language() never raises: empty/short text and detector errors come
back as the UNDETERMINED sentinel so callers can fall back to a default.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

import config
from languages import DEFAULT_LANGUAGE, ISO_LANGUAGE_NAMES, LanguageInfo, language_instruction

logger = logging.getLogger(__name__)

# langdetect is randomised; pin it so the same text always gives the same answer
DetectorFactory.seed = 0

UNDETERMINED_CODE = "und"


@dataclass(frozen=True)
class DetectedLanguage:
    code: str
    guesses: List[Tuple[str, float]] = field(default_factory=list)

    @property
    def is_determined(self) -> bool:
        return self.code != UNDETERMINED_CODE


UNDETERMINED = DetectedLanguage(UNDETERMINED_CODE)


def _letter_count(text: str) -> int:
    return sum(1 for ch in text if ch.isalpha())


def identify_language(text: str, min_letters: int | None = None) -> DetectedLanguage:
    if not isinstance(text, str):
        return UNDETERMINED
    if min_letters is None:
        min_letters = config.DETECTION_MIN_LETTERS
    if not text.strip() or _letter_count(text) < min_letters:
        return UNDETERMINED

    try:
        langs = detect_langs(text)
    except LangDetectException as e:
        logger.warning("Language detection failed: %s", e)
        return UNDETERMINED
    except Exception:
        logger.exception("Unexpected language detector error")
        return UNDETERMINED

    guesses = [(str(lang.lang).lower(), float(lang.prob)) for lang in langs]
    if not guesses:
        return UNDETERMINED
    return DetectedLanguage(code=guesses[0][0], guesses=guesses)


def describe_language(text: str) -> LanguageInfo:
    """Detected language plus the prompt line asking an LLM to answer in it."""
    detected = identify_language(text)
    primary = detected.code.split("-", 1)[0]
    name = ISO_LANGUAGE_NAMES.get(primary)
    if not detected.is_determined or primary == DEFAULT_LANGUAGE or not name:
        return LanguageInfo(code=DEFAULT_LANGUAGE, name="English", instruction="")
    return LanguageInfo(code=detected.code, name=name, instruction=language_instruction(name))
