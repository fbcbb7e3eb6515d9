"""
data_loader.py - API calls for the Legal Value Score front end.
"""

import os
from typing import Any, Dict, Optional

import requests
import streamlit as st

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
API_BASE = os.getenv("FASTAPI_URL", "http://localhost:8000")


class ApiError(RuntimeError):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(f"API error ({status_code}): {message}")


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------
def api_url(base: str, path: str) -> str:
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def safe_json(resp: requests.Response) -> Dict[str, Any]:
    try:
        return resp.json()
    except ValueError:
        return {"message": resp.text, "_status": resp.status_code}


def _post(base: str, path: str, payload: Dict[str, Any], timeout_s: int = 30) -> Dict[str, Any]:
    resp = requests.post(api_url(base, path), json=payload, timeout=timeout_s)
    body = safe_json(resp)
    if resp.status_code >= 400:
        raise ApiError(resp.status_code, body.get("message", str(body)))
    return body


@st.cache_data(ttl=300, show_spinner=False)
def fetch_questions(base: str = API_BASE) -> Optional[Dict[str, Any]]:
    """Question bank served by the API, or None when unreachable."""
    try:
        r = requests.get(api_url(base, "/api/v1/questions"), timeout=10)
        return r.json() if r.status_code == 200 else None
    except requests.RequestException:
        return None


def submit_assessment(payload: Dict[str, Any], base: str = API_BASE) -> Dict[str, Any]:
    """POST /api/assessment/submit → {success, assessment_id, scores}."""
    return _post(base, "/api/assessment/submit", payload)


def send_results_email(assessment_id: str, base: str = API_BASE) -> Dict[str, Any]:
    """POST /api/email/send → {success, message?}."""
    return _post(base, "/api/email/send", {"assessment_id": assessment_id}, timeout_s=60)


def track_event(
    event_type: str,
    properties: Optional[Dict[str, Any]] = None,
    assessment_id: Optional[str] = None,
    base: str = API_BASE,
) -> None:
    """Fire-and-forget analytics; failures are ignored."""
    try:
        requests.post(
            api_url(base, "/api/analytics/events"),
            json={
                "event_type": event_type,
                "assessment_id": assessment_id,
                "properties": properties or {},
            },
            timeout=5,
        )
    except requests.RequestException:
        pass
