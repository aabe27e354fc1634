"""
Text translation capability.

Operations depend on the :class:`Translator` protocol.  The production
implementation calls AWS Translate with an auto-detected source
language; any failure surfaces as :class:`TranslationError`.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from book_catalog.core.errors import TranslationError
from book_catalog.core.logging import get_logger

logger = get_logger(__name__)


class Translator(Protocol):
    """Translate a piece of text into a target language."""

    async def translate(self, text: str, target_language: str) -> str: ...


def create_translate_client(region: str, endpoint_url: str | None = None) -> Any:
    """Build an AWS Translate client with standard retries."""
    client_kwargs: dict[str, Any] = {
        "service_name": "translate",
        "region_name": region,
        "config": Config(retries={"max_attempts": 3, "mode": "standard"}),
    }
    if endpoint_url:
        client_kwargs["endpoint_url"] = endpoint_url
    return boto3.client(**client_kwargs)


class AwsTranslator:
    """AWS Translate backed :class:`Translator`."""

    source_language = "auto"

    def __init__(self, client: Any) -> None:
        self.client = client

    def _translate_sync(self, text: str, target_language: str) -> str:
        try:
            response = self.client.translate_text(
                Text=text,
                SourceLanguageCode=self.source_language,
                TargetLanguageCode=target_language,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("translate_call_failed", target_language=target_language, error=str(e))
            raise TranslationError("Error translating text", cause=e) from e
        return response["TranslatedText"]

    async def translate(self, text: str, target_language: str) -> str:
        return await asyncio.to_thread(self._translate_sync, text, target_language)
