"""
Shared text clean-ups for language tags and résumé rendering.
"""
from __future__ import annotations
import re, unicodedata
from datetime import date, datetime
from typing import List

_BULLET  = re.compile(r"^\s*[•\-–]\s*")
_TAIL    = re.compile(r"[.;\s]+$")
_YEAR    = re.compile(r"\b(\d{4})\b")

PRESENT = "Present"


# ───────────────────────────────────────── helpers ──
def strip_diacritics(s: str) -> str:
    """'Français' -> 'Francais'"""
    decomposed = unicodedata.normalize("NFD", s or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

def year_of(value: str | date | datetime | None) -> str:
    """Four-digit year of a date-ish value, '' when there is none."""
    if not value:
        return ""
    if isinstance(value, (date, datetime)):
        return str(value.year)
    if m := _YEAR.search(str(value)):
        return m.group(1)
    return ""

def end_year_of(value: str | date | datetime | None) -> str:
    # ongoing and unparseable end dates both read as "Present"
    if not value or (isinstance(value, str) and value.strip().lower() == "present"):
        return PRESENT
    return year_of(value) or PRESENT


# ───────────────────────────────────────── tasks ──
def split_tasks(description: str | None, company_description: str | None = None) -> List[str]:
    """
    Turn a job description into bullet tasks.

    Splits on '•' when the text uses bullets, otherwise on full stops. The
    company blurb is cut out of the description, and repeated tasks are
    dropped (case-insensitive).
    """
    blurb = (company_description or "").strip()
    raw = description or ""
    if blurb:
        raw = re.sub(re.escape(blurb), "", raw, flags=re.I).strip()

    parts = raw.split("•") if "•" in raw else raw.split(".")
    seen, tasks = set(), []
    for part in parts:
        task = _BULLET.sub("", part).strip()
        if not task:
            continue
        key = _TAIL.sub("", task).lower()
        if (blurb and key == blurb.lower().rstrip(".")) or key in seen:
            continue
        seen.add(key)
        tasks.append(task)
    return tasks
