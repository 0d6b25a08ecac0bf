import json

import pytest

import enhancer
from conftest import FakeLLMClient
from enhancer import enhance_description, enhance_summary
from languages import LanguageInfo, get_language_config, language_instruction


@pytest.fixture
def french(monkeypatch):
    info = LanguageInfo(code="fr", name="French", instruction=language_instruction("French"))
    monkeypatch.setattr(enhancer, "describe_language", lambda text: info)
    return info


def test_summary_prompt_asks_for_detected_language(french):
    client = FakeLLMClient("Ingénieure logicielle reconnue, huit ans de systèmes distribués.")
    result = enhance_summary(client, "Ingénieure logiciel avec huit ans d'expérience.", model="m")

    assert result == "Ingénieure logicielle reconnue, huit ans de systèmes distribués."
    system, user = client.calls[0]["messages"]
    assert system["content"] == get_language_config("fr").system_message
    assert french.instruction in user["content"]
    assert user["content"].endswith("Original summary: Ingénieure logiciel avec huit ans d'expérience.")
    assert client.calls[0]["model"] == "m"


def test_json_wrapped_answer_is_unwrapped(french):
    client = FakeLLMClient(json.dumps({"professional_summary": "Résumé amélioré."}))
    assert enhance_summary(client, "Résumé.", model="m") == "Résumé amélioré."

    client = FakeLLMClient(json.dumps("Résumé amélioré."))
    assert enhance_summary(client, "Résumé.", model="m") == "Résumé amélioré."


def test_failure_keeps_original_text(french):
    client = FakeLLMClient(RuntimeError("down"))
    assert enhance_summary(client, "Résumé.", model="m") == "Résumé."
    assert enhance_description(client, "Chef de projet", "Suivi des clients.", model="m") == "Suivi des clients."


@pytest.mark.parametrize("text", [None, "", "  "])
def test_blank_text_is_not_sent(text):
    client = FakeLLMClient("should not be used")
    assert enhance_summary(client, text) == text
    assert enhance_description(client, "Chef de projet", text) == text
    assert client.calls == []


def test_description_prompt_names_job_title(french):
    client = FakeLLMClient("• Piloté trois projets clients")
    result = enhance_description(client, "Chef de projet", "Suivi des projets clients.", model="m")

    assert result == "• Piloté trois projets clients"
    prompt = client.calls[0]["messages"][1]["content"]
    assert "for a Chef de projet position" in prompt
    assert prompt.endswith("Original: Suivi des projets clients.")


def test_english_text_gets_no_language_instruction():
    client = FakeLLMClient("Better summary.")
    enhance_summary(client, "I am responsible for managing the team and tracking client projects.", model="m")
    system, user = client.calls[0]["messages"]
    assert system["content"] == get_language_config("en").system_message
    assert "IMPORTANT" not in user["content"]
