"""Two-stage pipeline: a bounded AI attempt, then a deterministic fallback."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import ValidationError

from proofline.errors import AnalysisFailure
from proofline.models.suggestion import Origin

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class StageOutcome(Generic[T]):
    """Which stage produced ``value``; ``failure`` is set when AI was skipped or failed."""

    origin: Origin
    value: T
    failure: str | None = None


async def attempt_ai(
    call: Callable[[], Awaitable[T]] | None,
    *,
    timeout: float,
    label: str,
) -> StageOutcome[T] | AnalysisFailure:
    """Run the AI stage under a deadline, classifying any failure.

    Returns the failure instead of raising it so the fallback stage is
    always run outside this function's exception context.
    """
    if call is None:
        return AnalysisFailure(AnalysisFailure.NOT_CONFIGURED, f"{label}: assistant not configured")
    try:
        value = await asyncio.wait_for(call(), timeout=timeout)
    except asyncio.TimeoutError:
        return AnalysisFailure(AnalysisFailure.TIMEOUT, f"{label}: no reply within {timeout:.0f}s")
    except AnalysisFailure as exc:
        return exc
    except (ValueError, ValidationError) as exc:
        return AnalysisFailure(AnalysisFailure.PARSE, f"{label}: {exc}")
    except Exception as exc:
        logger.debug("%s: AI call raised", label, exc_info=True)
        return AnalysisFailure(AnalysisFailure.API, f"{label}: {type(exc).__name__}: {exc}")
    return StageOutcome(origin=Origin.AI, value=value)


async def with_fallback(
    call: Callable[[], Awaitable[T]] | None,
    fallback: Callable[[], T],
    *,
    timeout: float,
    label: str,
) -> StageOutcome[T]:
    """Try ``call``; on any failure kind, run ``fallback`` once. Never raises from the AI side."""
    outcome = await attempt_ai(call, timeout=timeout, label=label)
    if isinstance(outcome, StageOutcome):
        return outcome

    if outcome.kind == AnalysisFailure.NOT_CONFIGURED:
        logger.debug("%s", outcome)
    else:
        logger.warning("AI stage failed (%s), using fallback: %s", outcome.kind, outcome)
    return StageOutcome(origin=Origin.FALLBACK, value=fallback(), failure=outcome.kind)
