import pytest

from conftest import FakeLLMClient, FlakyClient
import config
from translator import FieldTranslator, TranslationCache, build_translator


def user_prompt(call):
    return call["messages"][1]["content"]


def text_section(call):
    return user_prompt(call).split("Text:\n", 1)[1]


@pytest.mark.parametrize("text", [None, "", "   ", "\n"])
def test_blank_input_is_returned_untouched(text):
    client = FakeLLMClient("should not be used")
    assert FieldTranslator(client, model="m").translate(text, "fr") == text
    assert client.calls == []


def test_translates_and_names_the_target_language():
    client = FakeLLMClient('  "Ingénieur logiciel"  ')
    result = FieldTranslator(client, model="m").translate("  Software engineer ", "fr-CA")

    assert result == "Ingénieur logiciel"
    call = client.calls[0]
    assert "to French" in user_prompt(call)
    assert text_section(call) == "Software engineer"
    assert call["model"] == "m"
    assert call["temperature"] == pytest.approx(0.2)
    assert call["max_tokens"] == 200


def test_token_allowance_grows_with_text_and_is_capped():
    client = FakeLLMClient("ok")
    translator = FieldTranslator(client, model="m")
    translator.translate("x" * 300, "de")
    translator.translate("x" * 5000, "de")
    assert [c["max_tokens"] for c in client.calls] == [600, 1200]


def test_preserved_terms_never_reach_the_model():
    words = {"Senior": "Consultant", "Consultant": "senior"}

    def fake_translate(messages):
        text = messages[1]["content"].split("Text:\n", 1)[1]
        # a model that would happily translate "Data" if it saw it
        text = text.replace("Data", "Données")
        return " ".join(words.get(w, w) for w in text.split())

    client = FakeLLMClient(fake_translate)
    result = FieldTranslator(client, model="m").translate("Senior Data Consultant", "fr", preserve_terms=["Data"])

    assert "Data" not in text_section(client.calls[0])
    assert "__KEEP_TERM_0__" in user_prompt(client.calls[0])
    assert result == "Consultant Data senior"


def test_failure_after_retries_keeps_original():
    client = FakeLLMClient(RuntimeError("503"))
    translator = FieldTranslator(client, model="m", max_attempts=2)
    assert translator.translate(" Chef de projet ", "en") == " Chef de projet "
    assert len(client.calls) == 2


def test_empty_answers_keep_original():
    client = FakeLLMClient("")
    assert FieldTranslator(client, model="m").translate("Chef de projet", "en") == "Chef de projet"
    assert len(client.calls) == 2


def test_cache_avoids_second_call(tmp_path):
    client = FakeLLMClient("Project manager")
    translator = FieldTranslator(client, model="m", cache=TranslationCache(tmp_path))

    assert translator.translate("Chef de projet", "en") == "Project manager"
    assert translator.translate("Chef de projet", "en") == "Project manager"
    assert len(client.calls) == 1

    # different target or terms is a different entry
    translator.translate("Chef de projet", "de")
    translator.translate("Chef de projet", "en", preserve_terms=["projet"])
    assert len(client.calls) == 3


def test_failures_are_not_cached(tmp_path):
    cache = TranslationCache(tmp_path)
    FieldTranslator(FakeLLMClient(RuntimeError("down")), model="m", cache=cache).translate("Chef", "en")
    assert list(tmp_path.iterdir()) == []


def test_corrupt_cache_entry_is_ignored(tmp_path):
    cache = TranslationCache(tmp_path)
    cache.put("en", "Chef", (), "Boss")
    for path in tmp_path.iterdir():
        path.write_text("{not json", encoding="utf-8")
    assert cache.get("en", "Chef", ()) is None


def test_build_translator_uses_configured_cache_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "TRANSLATION_CACHE_DIR", str(tmp_path / "cache"))
    translator = build_translator(FakeLLMClient("Bonjour"), model="m")

    assert isinstance(translator.cache, TranslationCache)
    assert translator.cache.cache_dir == tmp_path / "cache"
    assert translator.model == "m"


def test_build_translator_without_cache_dir(monkeypatch):
    monkeypatch.setattr(config, "TRANSLATION_CACHE_DIR", None)
    assert build_translator(FakeLLMClient("Bonjour"), model="m").cache is None


def test_reply_that_drops_a_preserved_term_is_retried_then_rejected(tmp_path):
    client = FakeLLMClient("Consultant principal senior")
    translator = FieldTranslator(client, model="m", cache=TranslationCache(tmp_path))

    result = translator.translate("Senior Data Consultant", "fr", preserve_terms=["Data"])

    assert result == "Senior Data Consultant"
    assert len(client.calls) == 2
    assert list(tmp_path.iterdir()) == []


def test_second_attempt_that_keeps_the_term_is_used():
    client = FlakyClient(["Consultant principal senior", "Consultant __KEEP_TERM_0__ senior"])
    result = FieldTranslator(client, model="m").translate("Senior Data Consultant", "fr", preserve_terms=["Data"])
    assert result == "Consultant Data senior"
    assert len(client.calls) == 2


def test_recased_placeholder_is_restored():
    client = FakeLLMClient("Consultant __keep_term_0__ senior")
    result = FieldTranslator(client, model="m").translate("Senior Data Consultant", "fr", preserve_terms=["Data"])
    assert result == "Consultant Data senior"
    assert "KEEP_TERM" not in result.upper()


def test_invented_placeholder_keeps_original():
    client = FakeLLMClient("Consultant __KEEP_TERM_0__ __KEEP_TERM_3__")
    translator = FieldTranslator(client, model="m")
    assert translator.translate("Senior Data Consultant", "fr", preserve_terms=["Data"]) == "Senior Data Consultant"
