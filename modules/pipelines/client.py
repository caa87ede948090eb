"""Construction of the shared google-genai client."""

from __future__ import annotations

import logging

from google import genai

from config.settings import AppConfig

logger = logging.getLogger(__name__)


def create_client(config: AppConfig) -> genai.Client:
    """Build the client used by both image pipelines."""
    if not config.api_key:
        logger.warning("API key not found. Please set the API_KEY environment variable.")
        # The SDK refuses to build without a key; requests will fail and be reported in the UI.
        return genai.Client(api_key="missing-api-key")
    return genai.Client(api_key=config.api_key)
