"""Natural-language payroll summary via the Gemini text-generation API."""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from google import genai

from ..sessions.model import TreatmentSession

logger = logging.getLogger(__name__)

NO_SESSIONS_MESSAGE = "No sessions found for this period."
EMPTY_RESPONSE_MESSAGE = "Could not generate analysis."
FAILURE_MESSAGE = "Error generating AI analysis. Please check your API key and connection."

PROMPT_TEMPLATE = """
You are a payroll assistant for a freelance physiotherapy clinic.
Analyze the following list of completed treatment sessions for the month of {month}.

Data:
{data}

Please provide a professional, friendly, and concise executive summary (in Markdown) that the employer can use for payroll processing.
Include:
1. A brief greeting.
2. A summary of the total workload (highlighting the mix between Physio vs Massage).
3. Any notable observations (e.g. "High volume of sports massage this month").
4. A generated "Invoice Description" text snippet that the freelancer could paste into their invoice.

Do not output the raw data list again. Focus on the insights and summary.
"""


class SummaryGenerator(Protocol):
    def generate(self, sessions: Sequence[TreatmentSession], month: str) -> str:
        raise NotImplementedError


def build_prompt(sessions: Sequence[TreatmentSession], month: str) -> str:
    lines = [
        f"- Date: {s.timestamp.astimezone().strftime('%Y-%m-%d')}, Patient: {s.patient_name}, "
        f"Type: {s.treatment_type.value}, Duration: {s.duration_minutes} mins"
        for s in sessions
    ]
    return PROMPT_TEMPLATE.format(month=month, data="\n".join(lines))


class GeminiSummaryGenerator:
    """Never raises: every failure becomes a fixed, human-readable fallback string."""

    def __init__(self, *, api_key: Optional[str], model: str = "gemini-2.5-flash", client=None):
        self._api_key = api_key
        self._model = model
        self._client = client

    def _get_client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def generate(self, sessions: Sequence[TreatmentSession], month: str) -> str:
        if not sessions:
            return NO_SESSIONS_MESSAGE

        if not self._api_key and self._client is None:
            logger.warning("GEMINI_API_KEY is not set; skipping payroll summary")
            return FAILURE_MESSAGE

        try:
            response = self._get_client().models.generate_content(
                model=self._model,
                contents=build_prompt(sessions, month),
            )
            text = response.text
        except Exception:
            logger.exception("Gemini API error while generating payroll summary")
            return FAILURE_MESSAGE

        return text or EMPTY_RESPONSE_MESSAGE
