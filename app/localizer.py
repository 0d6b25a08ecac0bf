"""
Résumé localization: detect what language a résumé is written in and, if the
caller wants another one, translate every prose field into it.

Proper nouns (company, institution, issuer, language names), tech stacks and
dates are never sent for translation. Field translations run side by side on
a thread pool and are put back in their original positions. Nothing in here
raises to the caller: a field that fails keeps its original text, a detection
that fails means English, and anything worse returns the résumé as it was.
"""

from __future__ import annotations
import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Dict, Iterable, List, Tuple

import config
from detector import DetectedLanguage, identify_language
from languages import DEFAULT_LANGUAGE, normalize_language_code
from schema_resume import ResumeContent
from translator import FieldTranslator

logger = logging.getLogger(__name__)

FieldKey = Tuple
Job = Tuple[FieldKey, str, Tuple[str, ...]]

# fields sent for translation, per list section; everything else is copied as-is
WORK_FIELDS = ("job_title", "location", "description", "company_description")
EDUCATION_FIELDS = ("degree", "major", "description")
CERTIFICATION_FIELDS = ("name",)
SKILL_FIELDS = ("name",)
LANGUAGE_FIELDS = ("proficiency",)

_SECTIONS = (
    ("work_experience", WORK_FIELDS),
    ("education", EDUCATION_FIELDS),
    ("certifications", CERTIFICATION_FIELDS),
    ("skills", SKILL_FIELDS),
    ("languages", LANGUAGE_FIELDS),
)


def _has_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


class ResumeLocalizer:
    def __init__(
        self,
        translator: FieldTranslator,
        detect: Callable[[str], DetectedLanguage] = identify_language,
        preserve_terms: Iterable[str] | None = None,
        max_workers: int | None = None,
        deadline: float | None = None,
    ):
        self.translator = translator
        self.detect = detect
        self.preserve_terms = tuple(config.PRESERVE_TERMS if preserve_terms is None else preserve_terms)
        self.max_workers = max_workers or config.TRANSLATION_MAX_WORKERS
        self.deadline = config.TRANSLATION_DEADLINE_SECONDS if deadline is None else deadline

    # ───────────────────────────────────────── detect ──
    def detection_candidates(self, resume: ResumeContent) -> List[str]:
        candidates = [
            resume.summary,
            next((w.description for w in resume.work_experience if _has_text(w.description)), None),
            next((e.description for e in resume.education if _has_text(e.description)), None),
        ]
        return [c for c in candidates if _has_text(c)]

    def detect_source_language(self, resume: ResumeContent) -> str:
        for text in self.detection_candidates(resume):
            try:
                detected = self.detect(text)
                determined = detected is not None and detected.is_determined
            except Exception as e:
                logger.warning("Language detection failed, trying next field: %s", e)
                continue
            if determined:
                return normalize_language_code(detected.code)
        return DEFAULT_LANGUAGE

    # ───────────────────────────────────────── translate ──
    def translate(
        self,
        resume: ResumeContent,
        target: str | None,
        preserve_terms: Iterable[str] = (),
    ) -> ResumeContent:
        """Localized copy of `resume` in `target`. Never raises."""
        try:
            return self._translate(resume, target, preserve_terms)
        except Exception:
            logger.exception("Résumé translation failed, returning it untranslated")
            return resume

    def _translate(self, resume, target, preserve_terms) -> ResumeContent:
        started = time.monotonic()
        target_code = normalize_language_code(target)
        source_code = self.detect_source_language(resume)

        if source_code == target_code:
            logger.info("No translation needed: content is already in %s", target_code)
            return resume.model_copy(update={"language": target_code})

        logger.info("Translating résumé from %s to %s", source_code, target_code)
        title_terms = self.preserve_terms + tuple(preserve_terms or ())
        results = self._run(self._jobs(resume, title_terms), target_code, started)

        def pick(key, original):
            return results.get(key, original)

        update = {"language": target_code, "summary": pick(("summary",), resume.summary)}
        for section, fields in _SECTIONS:
            update[section] = [
                item.model_copy(update={f: pick((section, i, f), getattr(item, f)) for f in fields})
                for i, item in enumerate(getattr(resume, section))
            ]

        logger.info("Translation to %s completed in %.1fs", target_code, time.monotonic() - started)
        return resume.model_copy(update=update)

    def _jobs(self, resume: ResumeContent, title_terms: Tuple[str, ...]) -> List[Job]:
        jobs: List[Job] = []
        if _has_text(resume.summary):
            jobs.append((("summary",), resume.summary, ()))
        for section, fields in _SECTIONS:
            for i, item in enumerate(getattr(resume, section)):
                for f in fields:
                    value = getattr(item, f)
                    if _has_text(value):
                        terms = title_terms if f == "job_title" else ()
                        jobs.append(((section, i, f), value, terms))
        return jobs

    def _run(self, jobs: List[Job], target: str, started: float) -> Dict[FieldKey, str]:
        if not jobs:
            return {}

        timeout = None
        if self.deadline is not None:
            timeout = max(0.0, self.deadline - (time.monotonic() - started))

        results: Dict[FieldKey, str] = {}
        executor = ThreadPoolExecutor(
            max_workers=max(1, min(self.max_workers, len(jobs))),
            thread_name_prefix="translate",
        )
        futures = {}
        not_done = set()
        try:
            futures = {
                executor.submit(self.translator.translate, text, target, terms): (key, text)
                for key, text, terms in jobs
            }
            done, not_done = wait(futures, timeout=timeout)
            for future in done:
                key, original = futures[future]
                try:
                    translated = future.result()
                except Exception as e:
                    logger.warning("Translation of %s failed, keeping original: %s", "/".join(map(str, key)), e)
                    continue
                results[key] = translated if _has_text(translated) else original
            if not_done:
                logger.warning(
                    "Translation deadline of %.1fs reached, %d of %d fields left untranslated",
                    self.deadline, len(not_done), len(futures),
                )
        finally:
            # don't block on stragglers past the deadline
            executor.shutdown(wait=not not_done, cancel_futures=True)
        return results


def translate_resume(
    resume: ResumeContent,
    target: str | None,
    translator: FieldTranslator,
    **kwargs,
) -> ResumeContent:
    """One-shot helper: ResumeLocalizer(translator, **kwargs).translate(resume, target)."""
    return ResumeLocalizer(translator, **kwargs).translate(resume, target)
