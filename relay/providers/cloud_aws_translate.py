"""
Cloud AWS Translate Provider

Implements the Translator protocol on top of Amazon Translate.
"""
import logging
from typing import List, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from relay.errors import TranslationError

logger = logging.getLogger(__name__)


class CloudAWSTranslateProvider:
    """
    Translates text with Amazon Translate's TranslateText API.

    Example:
        >>> provider = CloudAWSTranslateProvider(session.client("translate"))
        >>> provider.translate("こんにちは", "ja", "en")
        'Hello'
    """

    def __init__(self, client):
        self.client = client

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        if not text or not text.strip():
            raise TranslationError("Cannot translate empty text")
        if "\n" in text:
            raise TranslationError("Translation input must be a single line")

        logger.debug(f"Translating {len(text)} characters {source_language} -> {target_language}")
        try:
            response = self.client.translate_text(
                Text=text,
                SourceLanguageCode=source_language,
                TargetLanguageCode=target_language,
            )
        except (ClientError, BotoCoreError) as e:
            raise TranslationError(f"Amazon Translate request failed: {e}", cause=e) from e

        translated = response.get("TranslatedText")
        if translated is None:
            raise TranslationError("Amazon Translate response did not include TranslatedText")
        return translated

    def validate_requirements(self) -> List[str]:
        """Check that Amazon Translate is reachable with the current credentials."""
        try:
            self.client.list_terminologies(MaxResults=1)
        except (ClientError, BotoCoreError) as e:
            return [f"Failed to connect to Amazon Translate: {e}"]
        return []

    def get_engine_info(self) -> Tuple[str, str]:
        return ("cloud-aws-translate", self.client.meta.region_name)
