"""
Gemini Model Manager - Singleton for the shared model instance.

Supports two backends:
  1. google-generativeai - uses GEMINI_API_KEY (or GOOGLE_API_KEY)
  2. Vertex AI SDK - uses GOOGLE_CLOUD_PROJECT + service account credentials

The API key wins when both are configured.
"""

from __future__ import annotations

import os
from functools import lru_cache

from todoq.config import gemini_api_key, google_cloud_project
from todoq.infrastructure.settings import GEMINI_LOCATION, GEMINI_MODEL
from todoq.observability.logging import get_logger

logger = get_logger(__name__)


class GeminiInitializationError(RuntimeError):
    """Raised when Gemini model cannot be initialized."""


def llm_credentials_configured() -> bool:
    """True if either backend has the credential it needs (no API call made)."""
    return bool(gemini_api_key() or google_cloud_project())


def model_name() -> str:
    return os.getenv("GEMINI_MODEL") or GEMINI_MODEL


@lru_cache(maxsize=1)
def get_gemini_model():
    """
    Get or create the shared Gemini model instance.

    Uses @lru_cache as a thread-safe singleton; clear_model_cache() resets it.

    Returns:
        GenerativeModel: Shared Gemini model

    Raises:
        GeminiInitializationError: If no credential is configured or the SDK
            for the configured backend is missing
    """
    api_key = gemini_api_key()
    project = google_cloud_project()
    name = model_name()

    if api_key:
        try:
            import google.generativeai as genai
        except ImportError as e:
            raise GeminiInitializationError(
                "GEMINI_API_KEY is set but google-generativeai is not installed."
            ) from e

        try:
            genai.configure(api_key=api_key)
            model = genai.GenerativeModel(name)
        except Exception as e:
            logger.error("Failed to initialize Gemini model: %s", e)
            raise GeminiInitializationError(f"Failed to initialize Gemini: {e}") from e

        logger.info("Initialized Gemini model (google-generativeai): model=%s", name)
        return model

    if project:
        location = os.getenv("GEMINI_LOCATION") or GEMINI_LOCATION
        try:
            import vertexai
            from vertexai.generative_models import GenerativeModel
        except ImportError as e:
            raise GeminiInitializationError(
                "GOOGLE_CLOUD_PROJECT is set but google-cloud-aiplatform is not installed."
            ) from e

        try:
            vertexai.init(project=project, location=location)
            model = GenerativeModel(name)
        except Exception as e:
            logger.error("Failed to initialize Gemini model: %s", e)
            raise GeminiInitializationError(f"Failed to initialize Gemini: {e}") from e

        logger.info(
            "Initialized Gemini model (Vertex AI): project=%s, location=%s, model=%s",
            project,
            location,
            name,
        )
        return model

    raise GeminiInitializationError(
        "No Gemini credential configured. Set GEMINI_API_KEY or GOOGLE_CLOUD_PROJECT."
    )


def clear_model_cache() -> None:
    """
    Clear the cached model instance.

    Useful for testing or when reconfiguration is needed.
    """
    get_gemini_model.cache_clear()
    logger.info("Cleared Gemini model cache")
