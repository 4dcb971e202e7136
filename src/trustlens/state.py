"""Single-owner view state passed through the UI layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from trustlens.schemas import AssessmentResult, ImagePayload


class ViewPhase(str, Enum):
    INPUT = "input"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True)
class ViewState:
    """
    Everything the current view shows.

    Instances are immutable; transitions in ``trustlens.capture`` and
    ``trustlens.presentation`` return a new state. ``result`` and ``error``
    are never set together.
    """

    text: str = ""
    image: ImagePayload | None = None
    loading: bool = False
    result: AssessmentResult | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.result is not None and self.error is not None:
            raise ValueError("A view cannot show a result and an error at the same time.")

    @property
    def phase(self) -> ViewPhase:
        if self.loading:
            return ViewPhase.LOADING
        if self.result is not None:
            return ViewPhase.RESULT
        if self.error is not None:
            return ViewPhase.ERROR
        return ViewPhase.INPUT
