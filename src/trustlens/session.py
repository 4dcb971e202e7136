"""Submission boundary: picks a provider and runs one assessment per submit."""

from __future__ import annotations

import logging
from typing import AsyncIterator

from trustlens.assessor import GENERIC_FAILURE_MESSAGE, AnalysisError, Assessor
from trustlens.assessors.gemini_llm import GeminiAssessor
from trustlens.assessors.openai_llm import OpenAIAssessor
from trustlens.capture import InputValidationError, build_request
from trustlens.config import settings
from trustlens.presentation import show_error, show_result, start_loading
from trustlens.schemas import AnalysisRequest, AssessmentResult
from trustlens.state import ViewState

log = logging.getLogger("trustlens.session")

_assessor_classes: dict[str, type[Assessor]] = {
    "gemini": GeminiAssessor,
    "openai": OpenAIAssessor,
}

_assessor_cache: dict[str, Assessor] = {}


def get_assessor(provider: str | None = None) -> Assessor:
    provider = (provider or settings.llm_provider).lower()
    if provider in _assessor_cache:
        return _assessor_cache[provider]

    cls = _assessor_classes.get(provider)
    if not cls:
        supported = ", ".join(_assessor_classes.keys())
        raise ValueError(f"Unsupported LLM provider: {provider}. Supported: {supported}")
    assessor = cls()
    _assessor_cache[provider] = assessor
    return assessor


class AssessmentSession:
    """Runs the capture -> submit -> await -> render flow for one view."""

    def __init__(self, assessor: Assessor | None = None) -> None:
        self._assessor = assessor

    @property
    def assessor(self) -> Assessor:
        if self._assessor is None:
            self._assessor = get_assessor()
        return self._assessor

    async def assess(self, request: AnalysisRequest) -> AssessmentResult:
        """
        Run a single assessment, normalising every failure to ``AnalysisError``.

        Unexpected exceptions are logged with their traceback and replaced by
        the generic message so nothing technical reaches the user.
        """
        try:
            return await self.assessor.assess(request)
        except AnalysisError:
            raise
        except Exception as exc:
            log.exception("assessment failed unexpectedly")
            raise AnalysisError(GENERIC_FAILURE_MESSAGE) from exc

    async def submit(self, state: ViewState) -> AsyncIterator[ViewState]:
        """
        Yield the states a submission passes through.

        An invalid submission yields a single error state without calling the
        provider. A valid one yields the loading state, then either the result
        or an error state that keeps the user's input for a retry.
        """
        if state.loading:
            yield state
            return

        try:
            request = build_request(state)
        except InputValidationError as exc:
            yield show_error(state, str(exc))
            return

        loading = start_loading(state)
        yield loading

        try:
            result = await self.assess(request)
        except AnalysisError as exc:
            yield show_error(loading, str(exc))
            return
        yield show_result(loading, result)
