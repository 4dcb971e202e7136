from logging import getLogger

from google import genai
from google.genai import errors, types

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

log = getLogger("trustlens.assessors.gemini")


def build_contents(request: AnalysisRequest) -> types.Content:
    """One user turn: an optional text part followed by an optional image part."""
    parts: list[types.Part] = []
    if request.has_text:
        parts.append(types.Part.from_text(text=analysis_prompt(request.text)))
    if request.has_image:
        parts.append(
            types.Part.from_bytes(data=request.image.data, mime_type=request.image.mime_type)
        )
    return types.Content(role="user", parts=parts)


class GeminiAssessor(Assessor):
    provider = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: genai.Client | None = None,
    ) -> None:
        self._api_key = settings.gemini_api_key if api_key is None else api_key
        self._client = client
        self._default_model = model or settings.gemini_model

    @property
    def client(self) -> genai.Client:
        # Built on first use so a missing key fails the call, not the import.
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def assess(self, request: AnalysisRequest) -> AssessmentResult:
        """Send one request to Gemini and parse the JSON verdict."""
        log.info(
            "assessing | model=%s text=%s image=%s",
            self._default_model,
            request.has_text,
            request.image.mime_type if request.has_image else None,
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self._default_model,
                contents=build_contents(request),
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_INSTRUCTION,
                    response_mime_type="application/json",
                    response_json_schema=RESPONSE_SCHEMA,
                ),
            )
        except errors.APIError as exc:
            log.error("gemini call failed | code=%s status=%s", exc.code, exc.status)
            raise AnalysisError(exc.message or GENERIC_FAILURE_MESSAGE) from exc

        result = parse_assessment(response.text)
        log.info("assessment done | level=%s flags=%d", result.threat_level.value, len(result.red_flags))
        return result
