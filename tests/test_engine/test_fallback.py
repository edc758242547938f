"""Tests for the AI-then-fallback pipeline."""

import asyncio

from proofline.engine.fallback import StageOutcome, attempt_ai, with_fallback
from proofline.errors import AnalysisFailure
from proofline.models.suggestion import Origin


async def _ok():
    return ["ai"]


def _raising(exc):
    async def call():
        raise exc

    return call


class TestAttemptAi:
    async def test_success(self):
        outcome = await attempt_ai(_ok, timeout=1, label="t")
        assert isinstance(outcome, StageOutcome)
        assert outcome.origin == Origin.AI
        assert outcome.value == ["ai"]

    async def test_not_configured(self):
        outcome = await attempt_ai(None, timeout=1, label="t")
        assert outcome.kind == AnalysisFailure.NOT_CONFIGURED

    async def test_timeout(self):
        async def slow():
            await asyncio.sleep(1)

        outcome = await attempt_ai(slow, timeout=0.01, label="t")
        assert outcome.kind == AnalysisFailure.TIMEOUT

    async def test_value_error_is_parse(self):
        outcome = await attempt_ai(_raising(ValueError("bad json")), timeout=1, label="t")
        assert outcome.kind == AnalysisFailure.PARSE

    async def test_analysis_failure_passes_through(self):
        failure = AnalysisFailure(AnalysisFailure.PARSE, "not a list")
        outcome = await attempt_ai(_raising(failure), timeout=1, label="t")
        assert outcome is failure

    async def test_other_errors_are_api(self):
        outcome = await attempt_ai(_raising(ConnectionError("down")), timeout=1, label="t")
        assert outcome.kind == AnalysisFailure.API


class TestWithFallback:
    async def test_ai_result_used(self):
        fallback_calls = []
        outcome = await with_fallback(
            _ok, lambda: fallback_calls.append(1) or ["fb"], timeout=1, label="t"
        )
        assert outcome.value == ["ai"]
        assert outcome.failure is None
        assert fallback_calls == []

    async def test_fallback_runs_once_on_failure(self):
        fallback_calls = []

        def fallback():
            fallback_calls.append(1)
            return ["fb"]

        outcome = await with_fallback(
            _raising(RuntimeError("boom")), fallback, timeout=1, label="t"
        )
        assert outcome.origin == Origin.FALLBACK
        assert outcome.value == ["fb"]
        assert outcome.failure == AnalysisFailure.API
        assert fallback_calls == [1]

    async def test_unconfigured_uses_fallback(self):
        outcome = await with_fallback(None, lambda: [], timeout=1, label="t")
        assert outcome.origin == Origin.FALLBACK
        assert outcome.failure == AnalysisFailure.NOT_CONFIGURED
