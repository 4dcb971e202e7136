"""OpenAI Responses API backend for assessments."""

from __future__ import annotations

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from trustlens.assessor import (
    GENERIC_FAILURE_MESSAGE,
    RESPONSE_SCHEMA,
    SYSTEM_INSTRUCTION,
    AnalysisError,
    Assessor,
    analysis_prompt,
    parse_assessment,
)
from trustlens.config import settings
from trustlens.schemas import AnalysisRequest, AssessmentResult


log = logging.getLogger("trustlens.assessors.openai")


def build_input(request: AnalysisRequest) -> list[dict[str, Any]]:
    content: list[dict[str, Any]] = []
    if request.has_text:
        content.append({"type": "input_text", "text": analysis_prompt(request.text)})
    if request.has_image:
        content.append(
            {
                "type": "input_image",
                "image_url": request.image.data_url,
                "detail": "high",
            }
        )
    return [{"role": "user", "content": content}]


class OpenAIAssessor(Assessor):
    """Minimal client wrapper for the OpenAI Responses API."""

    provider = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._api_key = settings.openai_api_key if api_key is None else api_key
        self._client = client
        self._default_model = model or settings.openai_model

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def assess(self, request: AnalysisRequest) -> AssessmentResult:
        log.info(
            "assessing | model=%s text=%s image=%s",
            self._default_model,
            request.has_text,
            request.image.mime_type if request.has_image else None,
        )

        try:
            response = await self.client.responses.create(
                model=self._default_model,
                instructions=SYSTEM_INSTRUCTION,
                input=build_input(request),
                text={
                    "format": {
                        "type": "json_schema",
                        "name": "assessment_result",
                        "schema": RESPONSE_SCHEMA,
                        "strict": True,
                    }
                },
            )
        except openai.APIError as exc:
            log.error("openai call failed | %s", exc)
            raise AnalysisError(exc.message or GENERIC_FAILURE_MESSAGE) from exc

        result = parse_assessment(response.output_text)
        log.info("assessment done | level=%s flags=%d", result.threat_level.value, len(result.red_flags))
        return result
