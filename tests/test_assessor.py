import json
from types import SimpleNamespace

import pytest
from google.genai import errors

from conftest import PNG_BYTES, WELL_FORMED
from trustlens.assessor import (
    GENERIC_FAILURE_MESSAGE,
    PARSE_FAILURE_MESSAGE,
    RESPONSE_SCHEMA,
    SYSTEM_INSTRUCTION,
    AnalysisError,
    parse_assessment,
)
from trustlens.assessors.gemini_llm import GeminiAssessor, build_contents
from trustlens.assessors.openai_llm import OpenAIAssessor, build_input
from trustlens.schemas import AnalysisRequest, ImagePayload, ThreatLevel

TEXT_ONLY = AnalysisRequest(text="URGENT: update your bank details")
IMAGE_ONLY = AnalysisRequest(image=ImagePayload(data=PNG_BYTES, mime_type="image/png"))


class FakeGeminiModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeOpenAIResponses:
    def __init__(self, output_text):
        self.output_text = output_text
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(output_text=self.output_text)


def _gemini(models: FakeGeminiModels) -> GeminiAssessor:
    client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return GeminiAssessor(api_key="test", model="gemini-test", client=client)


# -- parsing -------------------------------------------------------------------


def test_parse_assessment_returns_values_verbatim():
    result = parse_assessment(json.dumps(WELL_FORMED))

    assert result.threat_level is ThreatLevel.HIGH_RISK
    assert result.reasoning == WELL_FORMED["reasoning"]
    assert result.red_flags == WELL_FORMED["redFlags"]
    assert result.next_steps == WELL_FORMED["nextSteps"]


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        "",
        None,
        "[1, 2, 3]",
        json.dumps({**WELL_FORMED, "threatLevel": "Catastrophic"}),
        json.dumps({k: v for k, v in WELL_FORMED.items() if k != "nextSteps"}),
        json.dumps({**WELL_FORMED, "redFlags": "just one string"}),
    ],
)
def test_parse_assessment_rejects_malformed_payloads(raw):
    with pytest.raises(AnalysisError) as exc:
        parse_assessment(raw)
    assert str(exc.value) == PARSE_FAILURE_MESSAGE


def test_response_schema_requires_all_four_fields():
    assert RESPONSE_SCHEMA["required"] == ["threatLevel", "reasoning", "redFlags", "nextSteps"]
    assert RESPONSE_SCHEMA["properties"]["threatLevel"]["enum"] == ["Safe", "Suspicious", "High Risk"]


# -- gemini --------------------------------------------------------------------


def test_build_contents_text_only_has_single_text_part():
    content = build_contents(TEXT_ONLY)

    assert len(content.parts) == 1
    assert content.parts[0].text == "Analyze this content: URGENT: update your bank details"
    assert content.parts[0].inline_data is None


def test_build_contents_image_only_has_single_inline_part():
    content = build_contents(IMAGE_ONLY)

    assert len(content.parts) == 1
    assert content.parts[0].text is None
    assert content.parts[0].inline_data.data == PNG_BYTES
    assert content.parts[0].inline_data.mime_type == "image/png"


def test_build_contents_skips_blank_text():
    request = AnalysisRequest(text="   ", image=IMAGE_ONLY.image)
    assert len(build_contents(request).parts) == 1


@pytest.mark.anyio
async def test_gemini_assess_requests_json_schema(well_formed_json):
    models = FakeGeminiModels(text=well_formed_json)

    result = await _gemini(models).assess(TEXT_ONLY)

    assert result.threat_level is ThreatLevel.HIGH_RISK
    (call,) = models.calls
    assert call["model"] == "gemini-test"
    assert call["config"].response_mime_type == "application/json"
    assert call["config"].response_json_schema == RESPONSE_SCHEMA


@pytest.mark.anyio
async def test_gemini_malformed_json_uses_fixed_message():
    with pytest.raises(AnalysisError) as exc:
        await _gemini(FakeGeminiModels(text="{oops")).assess(TEXT_ONLY)
    assert str(exc.value) == PARSE_FAILURE_MESSAGE


@pytest.mark.anyio
async def test_gemini_service_error_message_is_propagated():
    err = errors.ClientError(
        400,
        {"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}},
    )

    with pytest.raises(AnalysisError) as exc:
        await _gemini(FakeGeminiModels(error=err)).assess(TEXT_ONLY)
    assert str(exc.value) == (err.message or GENERIC_FAILURE_MESSAGE)
    assert exc.value.__cause__ is err


# -- openai --------------------------------------------------------------------


def test_build_input_image_only_uses_data_url():
    (message,) = build_input(IMAGE_ONLY)

    assert len(message["content"]) == 1
    assert message["content"][0]["type"] == "input_image"
    assert message["content"][0]["image_url"].startswith("data:image/png;base64,")


@pytest.mark.anyio
async def test_openai_assess_uses_strict_json_schema(well_formed_json):
    responses = FakeOpenAIResponses(well_formed_json)
    assessor = OpenAIAssessor(api_key="test", model="gpt-test", client=SimpleNamespace(responses=responses))

    result = await assessor.assess(TEXT_ONLY)

    assert result.next_steps == WELL_FORMED["nextSteps"]
    (call,) = responses.calls
    assert call["instructions"] == SYSTEM_INSTRUCTION
    assert call["text"]["format"]["schema"] == RESPONSE_SCHEMA
    assert call["text"]["format"]["strict"] is True
    assert call["input"][0]["content"][0]["type"] == "input_text"
