"""
Résumé content schema.

Payloads arrive in camelCase (``fullName``, ``jobTitle`` ...) or snake_case;
optional values get their defaults here, once, so the rest of the pipeline
never has to guess. Models are frozen: translating a résumé builds a new one.
"""

from __future__ import annotations
import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from cleaner import PRESENT
from languages import DEFAULT_LANGUAGE


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


def _year(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError("year must be a number")
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        raise ValueError(f"invalid year: {value!r}") from None


class WorkExperience(_Model):
    job_title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: Optional[str] = None
    start_date: str = Field(min_length=1)
    end_date: Optional[str] = None
    is_current: bool = False
    description: Optional[str] = None
    company_description: Optional[str] = None
    tech_stack: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _present_sentinel(cls, data):
        if not isinstance(data, dict):
            return data
        current = data.get("isCurrent", data.get("is_current"))
        end_key = "endDate" if "endDate" in data else "end_date"
        end = data.get(end_key)
        if current or (isinstance(end, str) and end.strip().lower() == "present"):
            data = {**data, end_key: PRESENT}
        return data


class Education(_Model):
    degree: str = Field(min_length=1)
    major: Optional[str] = None
    institution: str = Field(min_length=1)
    start_year: Optional[int] = Field(default=None, ge=1900, le=9999)
    graduation_year: Optional[int] = Field(default=None, ge=1900, le=9999)
    gpa: Optional[float] = None
    description: Optional[str] = None

    @field_validator("start_year", "graduation_year", mode="before")
    @classmethod
    def _normalize_year(cls, value):
        return _year(value)


class Skill(_Model):
    id: Optional[int] = None
    name: str = Field(min_length=1)


class LanguageProficiency(_Model):
    name: str = Field(min_length=1)
    proficiency: str = Field(min_length=1)


class Certification(_Model):
    name: str = Field(min_length=1)
    issuer: str = Field(min_length=1)
    issue_date: Optional[str] = None


class ResumeContent(_Model):
    id: Optional[str] = None
    full_name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = None
    address: Optional[str] = None
    linked_in: Optional[str] = None
    website: Optional[str] = None
    summary: Optional[str] = None
    work_experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    languages: List[LanguageProficiency] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    language: str = DEFAULT_LANGUAGE

    @field_validator("language", mode="before")
    @classmethod
    def _default_language(cls, value):
        return value or DEFAULT_LANGUAGE

    def to_payload(self) -> dict:
        """camelCase dict, the shape the résumé came in as."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ResumeValidationError(ValueError):
    """Malformed résumé payload; raised before any translation runs."""

    def __init__(self, details: list):
        super().__init__("Invalid input")
        self.details = details


def parse_resume(payload: Any) -> ResumeContent:
    if isinstance(payload, ResumeContent):
        return payload
    try:
        return ResumeContent.model_validate(payload)
    except ValidationError as e:
        raise ResumeValidationError(e.errors(include_url=False)) from e


def load_resume(raw: bytes | str) -> ResumeContent:
    """Uploaded JSON document → ResumeContent; undecodable input is a validation error too."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        payload = json.loads(text)
    except ValueError as e:  # UnicodeDecodeError, JSONDecodeError
        raise ResumeValidationError([{"type": "json_invalid", "loc": (), "msg": str(e)}]) from e
    return parse_resume(payload)
