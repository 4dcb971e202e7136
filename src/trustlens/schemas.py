"""Pydantic schemas shared by the assessment client, the UI and the API."""

from __future__ import annotations

import base64
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ThreatLevel(str, Enum):
    """Closed set of verdicts the model may return."""

    SAFE = "Safe"
    SUSPICIOUS = "Suspicious"
    HIGH_RISK = "High Risk"

    @property
    def rank(self) -> int:
        return list(ThreatLevel).index(self)


class ImagePayload(BaseModel):
    """An uploaded screenshot held in memory for a single submission."""

    data: bytes = Field(..., repr=False)
    mime_type: str = Field(..., description="Declared media type, e.g. image/png")

    @property
    def b64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.b64}"


class AnalysisRequest(BaseModel):
    text: str | None = None
    image: ImagePayload | None = None

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())

    @property
    def has_image(self) -> bool:
        return self.image is not None and bool(self.image.data)


class AssessmentResult(BaseModel):
    """Structured verdict as returned by the model, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    threat_level: ThreatLevel = Field(..., description="One of: Safe, Suspicious, High Risk")
    reasoning: str = Field(..., description="Explanation of the reasoning in simple, plain language.")
    red_flags: list[str] = Field(..., description="List specific indicators found in the content.")
    next_steps: list[str] = Field(..., description="2-4 practical actions the business owner can take.")
