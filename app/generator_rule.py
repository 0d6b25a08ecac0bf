from __future__ import annotations
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from cleaner import end_year_of, split_tasks, year_of
from languages import (LANGUAGE_CONFIG, get_language_config, localize_language_name,
                       localize_proficiency, normalize_language_code)
from schema_resume import ResumeContent

TEMPLATES = ("classic", "modern", "minimal", "colorful")

env = Environment(loader=FileSystemLoader(Path(__file__).parent / "templates"),
                  autoescape=True, trim_blocks=True, lstrip_blocks=True)

PROFICIENCY_LEVELS = {"Beginner": 1, "Elementary": 2, "Intermediate": 3,
                      "Advanced": 4, "Native": 5, "Fluent": 4}

# "Courant" -> "Fluent", "Muttersprachler" -> "Native", ...
_CANONICAL_PROFICIENCY = {
    localized.lower(): label
    for cfg in LANGUAGE_CONFIG.values()
    for label, localized in cfg.proficiency_map.items()
}


def proficiency_dots(proficiency: str, scale: int = 5) -> list[bool]:
    label = _CANONICAL_PROFICIENCY.get((proficiency or "").strip().lower(), proficiency)
    level = PROFICIENCY_LEVELS.get(label, 3)
    return [i < level for i in range(scale)]


def _context(r: ResumeContent, code: str) -> dict:
    cfg = get_language_config(code)
    jobs = [{
        "title": w.job_title,
        "company": w.company,
        "location": w.location or "",
        "start": year_of(w.start_date),
        "end": end_year_of(w.end_date),
        "company_description": w.company_description or "",
        "tech_stack": w.tech_stack or "",
        "tasks": split_tasks(w.description, w.company_description),
    } for w in r.work_experience]

    languages = []
    for l in r.languages:
        proficiency = localize_proficiency(l.proficiency, code)
        languages.append({
            "name": localize_language_name(l.name, code),
            "proficiency": proficiency,
            "dots": proficiency_dots(l.proficiency),
        })

    return {
        "r": r,
        "lang": code,
        "titles": cfg.sections,
        "labels": cfg.labels,
        "headline": jobs[0]["title"] if jobs else "",
        "jobs": jobs,
        "education": r.education,
        "skills_line": ", ".join(s.name for s in r.skills),
        "languages": languages,
        "languages_line": ", ".join(f"{l['name']}: {l['proficiency']}" for l in languages),
        "certifications": [{"name": c.name, "issuer": c.issuer, "year": year_of(c.issue_date)}
                           for c in r.certifications],
    }


def resume_to_html(data: ResumeContent, template: str = "classic", language: str | None = None) -> str:
    """Render résumé → HTML, section titles in `language` (default: the résumé's own)."""
    if template not in TEMPLATES:
        raise ValueError(f"Unknown template: {template!r} (expected one of {', '.join(TEMPLATES)})")
    code = normalize_language_code(language or data.language)
    try:
        tpl = env.get_template(f"{template}.html")
    except TemplateNotFound as e:
        raise ValueError(f"Template file missing: {e.name}") from e
    return tpl.render(**_context(data, code))
