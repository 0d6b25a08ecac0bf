import pytest

from detector import UNDETERMINED, DetectedLanguage
from llm_client import LLMClient, LLMResponse
from schema_resume import parse_resume


class FakeLLMClient(LLMClient):
    """Records every chat call; `reply` is a string, an exception, or a callable(messages)."""

    def __init__(self, reply=""):
        self.reply = reply
        self.calls = []

    def chat(self, model, messages, temperature=None, max_tokens=None):
        self.calls.append({"model": model, "messages": messages,
                           "temperature": temperature, "max_tokens": max_tokens})
        reply = self.reply
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(messages)
        return LLMResponse(reply)


class FlakyClient(FakeLLMClient):
    """Answers with `replies` in order, one per call."""

    def __init__(self, replies):
        super().__init__()
        self.replies = list(replies)

    def chat(self, model, messages, temperature=None, max_tokens=None):
        self.reply = self.replies.pop(0)
        return super().chat(model, messages, temperature, max_tokens)


class TaggingTranslator:
    """Stands in for FieldTranslator: prefixes the target code."""

    def __init__(self):
        self.calls = []

    def translate(self, text, target, preserve_terms=()):
        self.calls.append((text, target, tuple(preserve_terms)))
        return f"[{target}] {text}"


class FailingTranslator:
    def __init__(self):
        self.calls = 0

    def translate(self, text, target, preserve_terms=()):
        self.calls += 1
        raise RuntimeError("translation service down")


def fixed_detector(code):
    def detect(text):
        return DetectedLanguage(code, [(code, 0.99)]) if code != "und" else UNDETERMINED
    return detect


@pytest.fixture
def llm():
    return FakeLLMClient


@pytest.fixture
def resume_payload():
    return {
        "fullName": "Jeanne Martin",
        "email": "jeanne.martin@example.com",
        "phone": "+33 6 12 34 56 78",
        "summary": "Ingénieure logiciel avec huit ans d'expérience dans les systèmes distribués.",
        "workExperience": [
            {
                "jobTitle": "Senior Data Consultant",
                "company": "Capgemini",
                "location": "Paris",
                "startDate": "2019-03-01",
                "isCurrent": True,
                "description": "Conception de pipelines de données. • Encadrement d'une équipe de cinq personnes.",
                "companyDescription": "Entreprise de services numériques.",
                "techStack": "Python, Spark, Airflow",
            },
            {
                "jobTitle": "Développeuse backend",
                "company": "Doctolib",
                "location": "Paris",
                "startDate": "2016-09-01",
                "endDate": "2019-02-28",
                "description": "Développement d'API REST.",
            },
            {
                "jobTitle": "Stagiaire",
                "company": "Thales",
                "startDate": "2016-01-01",
                "endDate": "2016-06-30",
            },
        ],
        "education": [
            {"degree": "Master", "major": "Informatique", "institution": "Université Paris-Saclay",
             "startYear": "2014", "graduationYear": 2016, "description": "Mention très bien."},
            {"degree": "Licence", "major": "Mathématiques", "institution": "Sorbonne Université",
             "graduationYear": "2014"},
        ],
        "skills": [{"name": "Gestion de projet"}, {"name": "Python"}],
        "languages": [{"name": "English", "proficiency": "Fluent"}, {"name": "French", "proficiency": "Native"}],
        "certifications": [{"name": "Architecte cloud certifiée", "issuer": "Google Cloud", "issueDate": "2021-05-10"}],
        "language": "fr",
    }


@pytest.fixture
def resume(resume_payload):
    return parse_resume(resume_payload)
