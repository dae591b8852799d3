"""Step navigation over the composed questionnaire.

Navigation takes the step list from ``calculate_progressive_steps`` (which
falls back to the base steps when the responses cannot be composed) and
walks it by key. When the current step is not in the list (a conditional
step dropped after an earlier answer changed) or has no neighbour, the
arithmetic neighbour ``current ± 1`` is returned instead, so the flow can
always move. Callers treat an id with no matching step as end of flow.

Arithmetic runs on ``Decimal`` so ``8.5 + 1`` is exactly ``9.5``.
"""

import math
from decimal import Decimal

from armora.common.responses import ResponseMap
from armora.core.error_handling import degrade_on_error
from armora.core.exceptions import InvalidStepIdError
from armora.core.logging import LogContext, get_logger
from armora.questionnaire.composer import (
    calculate_progressive_steps,
    get_total_steps_for_user_type,
)
from armora.questionnaire.types import StepId, step_key, to_step_number

logger = get_logger(__name__)

_STEP = Decimal(1)

# Returned when the current id cannot be read at all; neither maps to a step
BEFORE_FIRST_STEP = 0.0
AFTER_LAST_STEP = 10.0


def _arithmetic_neighbour(current_id: StepId, offset: Decimal) -> float:
    return float(to_step_number(current_id) + offset)


def _neighbour(current_id: StepId, responses: ResponseMap, offset: int) -> float:
    key = step_key(current_id)
    direction = "next" if offset > 0 else "previous"

    with LogContext(current_step=key, direction=direction):
        steps = calculate_progressive_steps(responses)
        keys = [step.key for step in steps]
        index = keys.index(key) if key in keys else None

        if index is not None:
            neighbour = index + offset
            if 0 <= neighbour < len(steps):
                return steps[neighbour].id

        logger.debug("navigation_fallback", in_sequence=index is not None)
        return _arithmetic_neighbour(current_id, _STEP * offset)


def _next_fallback(current_id: StepId, responses: ResponseMap) -> float:
    try:
        return _arithmetic_neighbour(current_id, _STEP)
    except InvalidStepIdError:
        return AFTER_LAST_STEP


def _previous_fallback(current_id: StepId, responses: ResponseMap) -> float:
    try:
        return _arithmetic_neighbour(current_id, -_STEP)
    except InvalidStepIdError:
        return BEFORE_FIRST_STEP


@degrade_on_error(fallback=_next_fallback)
def get_next_progressive_step(current_id: StepId, responses: ResponseMap) -> float:
    """Get the id of the step after ``current_id``.

    Args:
        current_id: Current step id (``8.5``, ``"8.5"`` or ``"step8_5"``).
        responses: Current response map.

    Returns:
        The next composed step id, or ``current_id + 1``.
    """
    return _neighbour(current_id, responses, 1)


@degrade_on_error(fallback=_previous_fallback)
def get_previous_progressive_step(current_id: StepId, responses: ResponseMap) -> float:
    """Get the id of the step before ``current_id``, or ``current_id - 1``."""
    return _neighbour(current_id, responses, -1)


def calculate_progress(current_step: float, total_steps: int) -> float:
    """Get progress through the questionnaire as a percentage."""
    if total_steps <= 0:
        return 0.0
    return current_step / total_steps * 100


def get_progressive_completion_percentage(current_step: float, responses: ResponseMap) -> int:
    """Get progress against the dynamic step total, rounded half up."""
    total = get_total_steps_for_user_type("any", responses)
    return math.floor(calculate_progress(current_step, total) + 0.5)
