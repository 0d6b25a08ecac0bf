"""
Wording improvements for résumé prose, in whatever language it is written.

The language is detected from the text itself, the model is asked to answer
in that language, and the original text is kept when nothing usable comes
back.
"""

from __future__ import annotations
import json
import logging

import config
from detector import describe_language
from languages import get_language_config
from llm_client import CompletionOptions, LLMClient, enhance_with_llm

logger = logging.getLogger(__name__)

_SUMMARY_PROMPT = (
    "Enhance the following professional summary to be more impactful, ATS-friendly, and compelling. "
    "Keep it concise (2-3 sentences) and professional. {instruction}\n\n"
    "Original summary: {summary}"
)

_DESCRIPTION_PROMPT = (
    "Enhance the following job description for a {job_title} position. Make it more impactful with "
    "action verbs, quantifiable achievements, and ATS-friendly keywords. Return as bullet points with •. "
    "Format with single line breaks between bullet points, no extra spacing. {instruction}\n\n"
    "Original: {description}"
)

# keys the model tends to wrap its answer in, since the system message asks for JSON
_ANSWER_KEYS = ("professional_summary", "enhanced_summary", "summary", "description", "enhanced_description")


def _unwrap(answer: str) -> str:
    """Plain text out of an answer that may be a JSON object or string."""
    try:
        parsed = json.loads(answer)
    except ValueError:
        return answer.strip()
    if isinstance(parsed, str):
        return parsed.strip()
    if isinstance(parsed, dict):
        for key in _ANSWER_KEYS:
            if isinstance(parsed.get(key), str) and parsed[key].strip():
                return parsed[key].strip()
    return answer.strip()


def _options(model: str | None) -> CompletionOptions:
    return CompletionOptions(
        model=model or config.get_model_for_provider(),
        temperature=config.OPENAI_MODEL_PARAMS["temperature"],
        max_attempts=config.TRANSLATION_MAX_ATTEMPTS,
    )


def enhance_summary(client: LLMClient, summary: str | None, model: str | None = None) -> str | None:
    if not summary or not summary.strip():
        return summary
    language = describe_language(summary)
    prompt = _SUMMARY_PROMPT.format(instruction=language.instruction, summary=summary.strip())
    system_message = get_language_config(language.code).system_message
    logger.info("Enhancing summary (%s)", language.code)
    return _unwrap(enhance_with_llm(client, prompt, system_message, summary, _options(model))) or summary


def enhance_description(
    client: LLMClient,
    job_title: str,
    description: str | None,
    model: str | None = None,
) -> str | None:
    if not description or not description.strip():
        return description
    language = describe_language(description)
    prompt = _DESCRIPTION_PROMPT.format(
        job_title=job_title, instruction=language.instruction, description=description.strip(),
    )
    system_message = get_language_config(language.code).system_message
    logger.info("Enhancing description for %r (%s)", job_title, language.code)
    return _unwrap(enhance_with_llm(client, prompt, system_message, description, _options(model))) or description
