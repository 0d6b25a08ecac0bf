import streamlit as st

# MUST be the first Streamlit command
st.set_page_config(layout="wide", page_title="Résumé Localizer")

import json
from datetime import datetime

import streamlit.components.v1 as components

import config
from enhancer import enhance_description, enhance_summary
from generator_rule import TEMPLATES, resume_to_html
from languages import LANGUAGE_CONFIG
from llm_client import get_llm_client
from localizer import ResumeLocalizer
from schema_resume import ResumeValidationError, load_resume
from translator import build_translator

config.setup_logging()

MODEL_OPTIONS = {
    "OpenAI": ["gpt-4o-mini", "gpt-4o", "gpt-3.5-turbo"],
    "Ollama": ["llama3.1:8b", "mistral:7b", "qwen2.5:7b"],
}
LANGUAGE_OPTIONS = {cfg.name: cfg.code for cfg in LANGUAGE_CONFIG.values()}


@st.cache_resource
def get_client(provider: str):
    return get_llm_client(provider.lower())


@st.cache_resource
def get_localizer(provider: str, model: str) -> ResumeLocalizer:
    """One localizer per provider/model for the whole Streamlit process."""
    return ResumeLocalizer(build_translator(get_client(provider), model=model))


# Initialize session state variables
if "resume" not in st.session_state:
    st.session_state.resume = None
if "localized" not in st.session_state:
    st.session_state.localized = None
if "log_entries" not in st.session_state:
    st.session_state.log_entries = []

st.title("📄 → 🌍 Résumé Localizer")
st.markdown("Translate your résumé into another language while keeping names, companies and schools intact")

# --- LLM PROVIDER AND MODEL SELECTION ---
col_provider, col_model, col_lang, col_tpl = st.columns([1, 2, 1, 1])
with col_provider:
    provider = st.selectbox("Provider", options=list(MODEL_OPTIONS.keys()))
with col_model:
    model = st.selectbox("Model", options=MODEL_OPTIONS[provider])
with col_lang:
    target_name = st.selectbox("Target language", options=list(LANGUAGE_OPTIONS.keys()), index=1)
with col_tpl:
    template = st.selectbox("Template", options=list(TEMPLATES))

preserve = st.text_input(
    "Keep these words untranslated in job titles (comma separated)",
    value=", ".join(config.PRESERVE_TERMS),
)

uploaded = st.file_uploader("Résumé JSON", type=["json"])
# parse once per file, so wording improvements survive reruns
if uploaded is not None and st.session_state.get("upload_key") != (uploaded.name, uploaded.size):
    st.session_state.upload_key = (uploaded.name, uploaded.size)
    st.session_state.localized = None
    try:
        st.session_state.resume = load_resume(uploaded.getvalue())
    except ResumeValidationError as e:
        st.error("The résumé was rejected:")
        st.json(e.details)
        st.session_state.resume = None

resume = st.session_state.resume

col_improve, col_translate = st.columns(2)
with col_improve:
    improve = resume is not None and st.button("✨ Improve wording")
with col_translate:
    translate = resume is not None and st.button("🌍 Translate", type="primary")

if improve:
    try:
        client = get_client(provider)
    except (ValueError, ImportError) as e:
        st.error(f"Could not set up {provider}: {e}")
    else:
        with st.status("✍️ Improving summary and job descriptions...", expanded=False) as status_ui:
            jobs = [
                w.model_copy(update={"description": enhance_description(client, w.job_title, w.description, model)})
                for w in resume.work_experience
            ]
            resume = resume.model_copy(update={
                "summary": enhance_summary(client, resume.summary, model),
                "work_experience": jobs,
            })
            st.session_state.resume = resume
            st.session_state.log_entries.append(f"{datetime.now().strftime('%H:%M:%S')} - wording improved")
            status_ui.update(label="✅ Wording improved", state="complete")

if translate:
    terms = [t.strip() for t in preserve.split(",") if t.strip()]
    try:
        localizer = get_localizer(provider, model)
    except (ValueError, ImportError) as e:
        st.error(f"Could not set up {provider}: {e}")
    else:
        with st.status("🤖 Translating résumé...", expanded=False) as status_ui:
            localized = localizer.translate(resume, LANGUAGE_OPTIONS[target_name], preserve_terms=terms)
            st.session_state.localized = localized
            st.session_state.log_entries.append(
                f"{datetime.now().strftime('%H:%M:%S')} - {resume.language} → {localized.language}"
            )
            status_ui.update(label="✅ Translation finished", state="complete")

localized = st.session_state.localized
if localized is not None:
    html = resume_to_html(localized, template=template)
    tab_preview, tab_json = st.tabs(["Preview", "JSON"])
    with tab_preview:
        components.html(html, height=900, scrolling=True)
    with tab_json:
        st.json(localized.to_payload())

    col_a, col_b = st.columns(2)
    with col_a:
        st.download_button(
            "⬇️ Download JSON",
            data=json.dumps(localized.to_payload(), ensure_ascii=False, indent=2),
            file_name=f"resume_{localized.language}.json",
            mime="application/json",
        )
    with col_b:
        st.download_button(
            "⬇️ Download HTML", data=html,
            file_name=f"resume_{localized.language}.html", mime="text/html",
        )

if st.session_state.log_entries:
    with st.expander("Process log"):
        for entry in st.session_state.log_entries:
            st.write(entry)
