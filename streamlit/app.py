# streamlit/app.py
# Legal Value Score - LineaBlu assessment UI

from __future__ import annotations
from typing import Any, Dict

import requests
import streamlit as st
from dotenv import load_dotenv

from legal_value_score.config import get_settings
from legal_value_score.core.exceptions import ScoringConfigurationError
from legal_value_score.models import quiz_flow
from legal_value_score.models.enumerations import AnalyticsEventType, Persona
from legal_value_score.models.quiz_flow import QuizState, Stage
from legal_value_score.scoring.tiers import get_tier_metadata
from legal_value_score.scoring.utils import format_currency
from legal_value_score.scoring.variants import ScoringVariant, get_variant

from components.charts import (
    breakdown_bar_chart,
    breakdown_frame,
    score_gauge,
    value_potential_chart,
)
from data_loader import (
    API_BASE,
    ApiError,
    fetch_questions,
    send_results_email,
    submit_assessment,
    track_event,
)

load_dotenv()

# =====================================================================
# Page config (must be first Streamlit call)
# =====================================================================

st.set_page_config(
    page_title="Legal Value Score",
    layout="centered",
    page_icon="⚖️",
)

PERSONA_LABELS = {
    Persona.CFO: "CFO / Finance",
    Persona.GENERAL_COUNSEL: "General Counsel",
    Persona.CEO: "CEO / Founder",
    Persona.OPERATIONS: "Operations",
}

# =====================================================================
# Session state init
# =====================================================================

if "base_url" not in st.session_state:
    st.session_state["base_url"] = API_BASE
if "quiz" not in st.session_state:
    st.session_state["quiz"] = QuizState()
if "assessment_id" not in st.session_state:
    st.session_state["assessment_id"] = None


def active_variant(base: str) -> ScoringVariant:
    """Variant the API is serving; local settings when the API is unreachable."""
    bank = fetch_questions(base)
    name = bank["variant"] if bank else get_settings().SCORING_VARIANT
    try:
        return get_variant(name)
    except ScoringConfigurationError:
        return get_variant(get_settings().SCORING_VARIANT)


def set_state(state: QuizState) -> None:
    st.session_state["quiz"] = state
    st.rerun()


# =====================================================================
# Sidebar
# =====================================================================

with st.sidebar:
    st.header("Settings")
    base_url = st.text_input("API URL", value=st.session_state["base_url"])
    st.session_state["base_url"] = base_url
    if st.button("Start over"):
        st.session_state["assessment_id"] = None
        set_state(quiz_flow.restart())

base = st.session_state["base_url"]
variant = active_variant(base)
state: QuizState = st.session_state["quiz"]


# =====================================================================
# Screens
# =====================================================================

def render_welcome() -> None:
    st.title(variant.title)
    st.write(
        "Eight questions, about three minutes. See where your legal function "
        "creates value and where it is leaving value on the table."
    )
    col1, col2 = st.columns(2)
    if col1.button("Start assessment", type="primary"):
        track_event(AnalyticsEventType.ASSESSMENT_STARTED.value, {"variant": variant.name}, base=base)
        set_state(quiz_flow.start(state, with_persona=True))
    if col2.button("Skip to questions"):
        track_event(AnalyticsEventType.ASSESSMENT_STARTED.value, {"variant": variant.name}, base=base)
        set_state(quiz_flow.start(state, with_persona=False))


def render_persona() -> None:
    st.subheader("Which best describes your role?")
    for persona, label in PERSONA_LABELS.items():
        if st.button(label, key=f"persona_{persona.value}", use_container_width=True):
            track_event(AnalyticsEventType.PERSONA_SELECTED.value, {"persona": persona.value}, base=base)
            set_state(quiz_flow.choose_persona(state, persona))
    if st.button("Skip", key="persona_skip"):
        set_state(quiz_flow.choose_persona(state, Persona.GENERAL))


def render_question() -> None:
    question = quiz_flow.current_question(state, variant)
    total = len(variant.questions)
    st.progress(state.progress(total), text=f"Question {state.question_index + 1} of {total}")
    st.subheader(question.text)

    previous = state.selections.get(question.id)
    for index, option in enumerate(question.options):
        kind = "primary" if previous == index else "secondary"
        if st.button(option.text, key=f"{question.id}_{index}", type=kind, use_container_width=True):
            track_event(
                AnalyticsEventType.QUESTION_ANSWERED.value,
                {"question_id": question.id, "option_index": index},
                base=base,
            )
            set_state(quiz_flow.answer(state, variant, index))

    if state.question_index > 0 and st.button("← Back"):
        set_state(quiz_flow.back(state))


def submission_payload(contact: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "persona": state.persona.value,
        "answers": state.selections,
        **{k: v for k, v in contact.items() if v},
        **{k: v for k, v in st.query_params.items() if k.startswith("utm_")},
    }


def render_results() -> None:
    result = state.result
    meta = get_tier_metadata(result.tier)

    st.title(f"Your {variant.title}")
    st.plotly_chart(score_gauge(result.total, meta.color), use_container_width=True)
    st.markdown(f"### {meta.title}")
    st.write(meta.message)

    df = breakdown_frame(result.breakdown, variant.category_labels)
    st.plotly_chart(breakdown_bar_chart(df), use_container_width=True)

    if result.value_potential is not None:
        currency = get_settings().CURRENCY_SYMBOL
        key_labels = {
            table.key: variant.category_labels[category]
            for category, table in variant.value_buckets.items()
        }
        st.markdown("### Your Value Potential")
        st.metric("Estimated annual value", format_currency(result.value_potential.total, currency))
        cols = st.columns(len(result.value_potential.amounts))
        for col, (key, amount) in zip(cols, result.value_potential.amounts.items()):
            col.metric(key_labels.get(key, key), format_currency(amount, currency))
        st.plotly_chart(
            value_potential_chart(result.value_potential.amounts, key_labels),
            use_container_width=True,
        )

    st.divider()
    st.subheader("Get your detailed report")
    with st.form("report_form"):
        email = st.text_input("Work email")
        first_name = st.text_input("First name")
        last_name = st.text_input("Last name")
        company_name = st.text_input("Company")
        job_title = st.text_input("Job title")
        submitted = st.form_submit_button("Email me the report", type="primary")

    if submitted:
        missing = quiz_flow.missing_contact_fields(email=email, first_name=first_name, last_name=last_name)
        if missing:
            st.warning(f"Please enter your {', '.join(missing)}.")
            return
        track_event(AnalyticsEventType.REPORT_REQUESTED.value, {"tier": result.tier}, base=base)
        payload = submission_payload({
            "email": email.strip(),
            "first_name": first_name.strip(),
            "last_name": last_name.strip(),
            "company_name": company_name.strip(),
            "job_title": job_title.strip(),
        })
        try:
            with st.spinner("Saving your results..."):
                saved = submit_assessment(payload, base=base)
                st.session_state["assessment_id"] = saved["assessment_id"]
                sent = send_results_email(saved["assessment_id"], base=base)
        except ApiError as e:
            st.error(str(e))
            return
        except requests.RequestException as e:
            st.error(f"Could not reach the API: {e}")
            return

        if sent.get("success"):
            st.success(f"Report sent to {email.strip()}.")
        else:
            st.info(sent.get("message") or "Your results were saved; the report email is not available right now.")


SCREENS = {
    Stage.WELCOME: render_welcome,
    Stage.PERSONA: render_persona,
    Stage.QUESTION: render_question,
    Stage.RESULTS: render_results,
}

SCREENS[state.stage]()
