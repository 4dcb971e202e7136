"""LLM integration for scam-risk assessment."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from trustlens.schemas import AnalysisRequest, AssessmentResult, ThreatLevel

log = logging.getLogger("trustlens.assessor")

PARSE_FAILURE_MESSAGE = "The analysis could not be completed. Please try again."
GENERIC_FAILURE_MESSAGE = "An unexpected error occurred. Please try again later."

SYSTEM_INSTRUCTION = """
You are TrustLens, an AI-powered cybersecurity awareness assistant designed for small businesses.

Your Role:
Help small business owners assess potentially suspicious digital content (emails, messages, invoices, links) by identifying scam indicators in clear, non-technical language.
You provide guidance and education, not guarantees.

Guidelines:
1. Look for common scam patterns: urgency, payment detail changes, impersonation, unusual sender, generic greetings, suspicious links, "too good to be true".
2. Be calm, professional, and practical. Avoid alarmist language.
3. If uncertain, recommend verification.
4. Output MUST be in JSON format matching the schema.

Important Guardrails:
- Do NOT claim absolute certainty.
- Do NOT state content is definitively malicious.
- Do NOT provide legal or financial advice.
- Always encourage verification through official channels.
"""

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "threatLevel": {
            "type": "string",
            "enum": [level.value for level in ThreatLevel],
            "description": "One of: Safe, Suspicious, High Risk",
        },
        "reasoning": {
            "type": "string",
            "description": "Explanation of the reasoning in simple, plain language.",
        },
        "redFlags": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List specific indicators found in the content.",
        },
        "nextSteps": {
            "type": "array",
            "items": {"type": "string"},
            "description": "2-4 practical actions the business owner can take.",
        },
    },
    "required": ["threatLevel", "reasoning", "redFlags", "nextSteps"],
    "additionalProperties": False,
}


class AnalysisError(RuntimeError):
    """Raised when an assessment cannot be completed; the message is safe to show."""


def analysis_prompt(text: str) -> str:
    return f"Analyze this content: {text}"


def parse_assessment(raw: str | None) -> AssessmentResult:
    """
    Turn the model's JSON text into an :class:`AssessmentResult`.

    Anything that is not a JSON object with the four expected fields and a
    recognised threat level is reported with the same user-safe message;
    the underlying error is only logged.
    """
    try:
        payload = json.loads(raw or "")
        return AssessmentResult.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        log.error("failed to parse model response: %s", exc)
        raise AnalysisError(PARSE_FAILURE_MESSAGE) from exc


class Assessor:
    """Base class for provider-specific assessment clients."""

    provider: str = ""

    async def assess(self, request: AnalysisRequest) -> AssessmentResult:
        raise NotImplementedError
