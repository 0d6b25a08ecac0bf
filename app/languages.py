"""
Supported résumé languages.

One LanguageConfig per supported code: localized section titles, proficiency
labels and language names for rendering, plus the prompt snippets used when
asking an LLM to write in that language. Anything we do not support falls
back to English.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from cleaner import strip_diacritics


class LanguageCode(str, Enum):
    EN = "en"
    FR = "fr"
    ES = "es"
    DE = "de"


DEFAULT_LANGUAGE = LanguageCode.EN.value
SUPPORTED_CODES = frozenset(c.value for c in LanguageCode)


@dataclass(frozen=True)
class LanguageInfo:
    code: str
    name: str
    instruction: str = ""


@dataclass(frozen=True)
class LanguageConfig:
    code: str
    name: str
    sections: Dict[str, str]
    proficiency_map: Dict[str, str]
    language_names: Dict[str, str]
    system_message: str
    labels: Dict[str, str] = field(default_factory=lambda: {"tech": "Tech"})

    @property
    def instruction(self) -> str:
        if self.code == DEFAULT_LANGUAGE:
            return ""
        return language_instruction(self.name)


def language_instruction(name: str) -> str:
    return (
        f"IMPORTANT: The provided text is in {name}. You must return all content in {name}. "
        "Keep technical terms and proper nouns as appropriate."
    )


LANGUAGE_CONFIG: Dict[LanguageCode, LanguageConfig] = {
    LanguageCode.EN: LanguageConfig(
        code="en",
        name="English",
        sections={
            "professional_summary": "PROFESSIONAL SUMMARY",
            "skills": "SKILLS",
            "professional_experience": "PROFESSIONAL EXPERIENCE",
            "education": "EDUCATION",
            "certifications": "CERTIFICATIONS",
            "languages": "LANGUAGES",
        },
        labels={"tech": "Tech"},
        proficiency_map={
            "Beginner": "Beginner", "Elementary": "Elementary", "Intermediate": "Intermediate",
            "Advanced": "Advanced", "Native": "Native", "Fluent": "Fluent",
        },
        language_names={
            "english": "English", "french": "French", "spanish": "Spanish", "german": "German",
            "chinese": "Chinese", "arabic": "Arabic", "portuguese": "Portuguese", "italian": "Italian",
            "dutch": "Dutch", "japanese": "Japanese", "korean": "Korean", "russian": "Russian",
        },
        system_message="You are an expert resume writer. Return only valid JSON.",
    ),
    LanguageCode.FR: LanguageConfig(
        code="fr",
        name="French",
        sections={
            "professional_summary": "RÉSUMÉ PROFESSIONNEL",
            "skills": "COMPÉTENCES",
            "professional_experience": "EXPÉRIENCE PROFESSIONNELLE",
            "education": "FORMATION",
            "certifications": "CERTIFICATIONS",
            "languages": "LANGUES",
        },
        labels={"tech": "Technologie"},
        proficiency_map={
            "Beginner": "Débutant", "Elementary": "Élémentaire", "Intermediate": "Intermédiaire",
            "Advanced": "Avancé", "Native": "Natif", "Fluent": "Courant",
        },
        language_names={
            "english": "Anglais", "french": "Français", "spanish": "Espagnol", "german": "Allemand",
            "chinese": "Chinois", "arabic": "Arabe", "portuguese": "Portugais", "italian": "Italien",
            "dutch": "Néerlandais", "japanese": "Japonais", "korean": "Coréen", "russian": "Russe",
        },
        system_message="Vous êtes un expert en rédaction de CV. Retournez uniquement du JSON valide.",
    ),
    LanguageCode.ES: LanguageConfig(
        code="es",
        name="Spanish",
        sections={
            "professional_summary": "RESUMEN PROFESIONAL",
            "skills": "HABILIDADES",
            "professional_experience": "EXPERIENCIA PROFESIONAL",
            "education": "EDUCACIÓN",
            "certifications": "CERTIFICACIONES",
            "languages": "IDIOMAS",
        },
        labels={"tech": "Tecnología"},
        proficiency_map={
            "Beginner": "Principiante", "Elementary": "Elemental", "Intermediate": "Intermedio",
            "Advanced": "Avanzado", "Native": "Nativo", "Fluent": "Fluido",
        },
        language_names={
            "english": "Inglés", "french": "Francés", "spanish": "Español", "german": "Alemán",
            "chinese": "Chino", "arabic": "Árabe", "portuguese": "Portugués", "italian": "Italiano",
            "dutch": "Neerlandés", "japanese": "Japonés", "korean": "Coreano", "russian": "Ruso",
        },
        system_message="Eres un experto en redacción de currículums. Devuelve solo JSON válido.",
    ),
    LanguageCode.DE: LanguageConfig(
        code="de",
        name="German",
        sections={
            "professional_summary": "BERUFLICHE ZUSAMMENFASSUNG",
            "skills": "FÄHIGKEITEN",
            "professional_experience": "BERUFSERFAHRUNG",
            "education": "AUSBILDUNG",
            "certifications": "ZERTIFIZIERUNGEN",
            "languages": "SPRACHEN",
        },
        labels={"tech": "Technologie"},
        proficiency_map={
            "Beginner": "Anfänger", "Elementary": "Elementar", "Intermediate": "Mittelstufe",
            "Advanced": "Fortgeschritten", "Native": "Muttersprachler", "Fluent": "Fließend",
        },
        language_names={
            "english": "Englisch", "french": "Französisch", "spanish": "Spanisch", "german": "Deutsch",
            "chinese": "Chinesisch", "arabic": "Arabisch", "portuguese": "Portugiesisch", "italian": "Italienisch",
            "dutch": "Niederländisch", "japanese": "Japanisch", "korean": "Koreanisch", "russian": "Russisch",
        },
        system_message="Sie sind ein Experte für Lebenslauf-Erstellung. Geben Sie nur gültiges JSON zurück.",
    ),
}

LANGUAGE_ALIASES = {
    "english": "en", "en-us": "en", "en-gb": "en", "en-uk": "en", "anglais": "en",
    "french": "fr", "francais": "fr", "fr-fr": "fr",
    "spanish": "es", "espanol": "es", "castellano": "es", "es-es": "es",
    "german": "de", "deutsch": "de", "allemand": "de", "de-de": "de",
}

# ISO 639-1 -> English name, for detected languages we cannot write in
ISO_LANGUAGE_NAMES = {
    "en": "English", "fr": "French", "es": "Spanish", "de": "German",
    "zh": "Chinese", "ar": "Arabic", "pt": "Portuguese", "it": "Italian",
    "nl": "Dutch", "ja": "Japanese", "ko": "Korean", "ru": "Russian",
}

_SEPARATORS = re.compile(r"[\s_\-]+")


def _alias_key(value: str) -> str:
    key = strip_diacritics(value.strip().lower())
    return _SEPARATORS.sub("-", key).strip("-")


def normalize_language_code(value: Any) -> str:
    """
    Map a free-form language tag ("fr-CA", "Français", "en_US", None, ...)
    to one of the supported codes. Total: anything unrecognised is "en".
    """
    if not isinstance(value, str):
        return DEFAULT_LANGUAGE
    key = _alias_key(value)
    if not key:
        return DEFAULT_LANGUAGE
    if key in SUPPORTED_CODES:
        return key
    if key in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[key]

    primary = key.split("-", 1)[0]
    if primary in SUPPORTED_CODES:
        return primary
    return LANGUAGE_ALIASES.get(primary, DEFAULT_LANGUAGE)


def get_language_config(code: Any = DEFAULT_LANGUAGE) -> LanguageConfig:
    if isinstance(code, LanguageCode):
        return LANGUAGE_CONFIG[code]
    if isinstance(code, str) and code in SUPPORTED_CODES:
        return LANGUAGE_CONFIG[LanguageCode(code)]
    return LANGUAGE_CONFIG[LanguageCode.EN]


def get_language_info(code: Any = DEFAULT_LANGUAGE) -> LanguageInfo:
    cfg = get_language_config(normalize_language_code(code))
    return LanguageInfo(code=cfg.code, name=cfg.name, instruction=cfg.instruction)


def localize_proficiency(label: str, code: str = DEFAULT_LANGUAGE) -> str:
    return get_language_config(code).proficiency_map.get(label, label)


def localize_language_name(name: str, code: str = DEFAULT_LANGUAGE) -> str:
    names = get_language_config(code).language_names
    return names.get((name or "").strip().lower(), name)
