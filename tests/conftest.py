from __future__ import annotations

import json

import pytest

from trustlens.assessor import Assessor
from trustlens.schemas import AnalysisRequest, AssessmentResult

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

WELL_FORMED = {
    "threatLevel": "High Risk",
    "reasoning": "The message pressures you to change bank details urgently.",
    "redFlags": ["Urgent deadline", "Request to change payment details"],
    "nextSteps": [
        "Call the vendor on a number you already trust",
        "Do not update any payment details from this email",
    ],
}


class FakeAssessor(Assessor):
    """Records every request and replays a canned outcome."""

    provider = "fake"

    def __init__(self, result: AssessmentResult | None = None, error: Exception | None = None):
        self.result = result or AssessmentResult.model_validate(WELL_FORMED)
        self.error = error
        self.requests: list[AnalysisRequest] = []

    async def assess(self, request: AnalysisRequest) -> AssessmentResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def well_formed_json() -> str:
    return json.dumps(WELL_FORMED)


@pytest.fixture
def fake_assessor() -> FakeAssessor:
    return FakeAssessor()
