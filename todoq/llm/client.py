"""Single call into the Gemini model.

SDK errors the caller can act on (deadline, unavailability, quota) are
re-raised as LLMCallError subclasses so callers never import google.api_core.
There is no automatic retry: one prompt, one attempt.
"""

from __future__ import annotations

from todoq.infrastructure.settings import GEMINI_MAX_TOKENS, GEMINI_TEMPERATURE
from todoq.llm.gemini import get_gemini_model, model_name
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter, time_block

logger = get_logger(__name__)


class LLMCallError(RuntimeError):
    """A model request reached the SDK and failed in a recognised way."""


class LLMTimeoutError(LLMCallError):
    """Deadline exceeded."""


class LLMUnavailableError(LLMCallError):
    """Service unavailable or internal server error."""


class LLMRateLimitError(LLMCallError):
    """Quota or rate limit exhausted (429)."""


def call_llm(prompt: str, counter_prefix: str = "llm") -> str:
    """Send a prompt and return the model's reply text.

    Args:
        prompt: The prompt to send to the model.
        counter_prefix: Telemetry counter prefix (e.g., "ingest").

    Returns:
        The model's response text.

    Raises:
        GeminiInitializationError: If the model cannot be created.
        LLMTimeoutError: On deadline exceeded.
        LLMUnavailableError: On service unavailable or internal error.
        LLMRateLimitError: On resource exhausted.
        Exception: On other SDK errors (caller handles).
    """
    from google.api_core.exceptions import (
        DeadlineExceeded,
        InternalServerError,
        ResourceExhausted,
        ServiceUnavailable,
    )

    model = get_gemini_model()

    generation_config = {
        "temperature": GEMINI_TEMPERATURE,
        "max_output_tokens": GEMINI_MAX_TOKENS,
    }

    try:
        with time_block(f"{counter_prefix}.llm.latency"):
            response = model.generate_content(prompt, generation_config=generation_config)
        counter(f"{counter_prefix}.llm.success")
        return response.text
    except DeadlineExceeded as e:
        counter(f"{counter_prefix}.llm.timeout")
        logger.warning("LLM call timed out (model=%s)", model_name())
        raise LLMTimeoutError(str(e)) from e
    except (ServiceUnavailable, InternalServerError) as e:
        counter(f"{counter_prefix}.llm.unavailable")
        logger.warning("LLM service unavailable: %s", e)
        raise LLMUnavailableError(str(e)) from e
    except ResourceExhausted as e:
        counter(f"{counter_prefix}.llm.rate_limited")
        logger.warning("LLM rate limited (429): %s", e)
        raise LLMRateLimitError(str(e)) from e
    except Exception as e:
        counter(f"{counter_prefix}.llm.error")
        logger.error("LLM call failed: %s", e)
        raise
