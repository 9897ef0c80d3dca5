# =============================================================================
# services/translation/translator.py
# =============================================================================

import asyncio
import logging
from typing import Optional

from core.config import Settings, settings as default_settings
from core.exceptions import ConfigurationError, TranslationError, ValidationError
from models.languages import ENGLISH, language_code

logger = logging.getLogger(__name__)

TURN_PROMPT = (
    'Translate the following {source} text to {target}. '
    'Only return the translation, nothing else: "{text}"'
)
PHRASE_PROMPT = (
    'Translate this English medical phrase to {target}. '
    'Only return the translation: "{text}"'
)

def _clean_translation(text: Optional[str]) -> str:
    """Strip whitespace and wrapping quotes that LLMs like to echo back"""
    cleaned = (text or "").strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
        cleaned = cleaned[1:-1].strip()
    return cleaned

class TranslationService:
    """Translate text between English and the supported patient languages"""

    def __init__(self, app_settings: Settings = None, openai_client=None):
        self.settings = app_settings or default_settings
        self.provider = self.settings.translation_provider
        self._openai_client = openai_client

    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        """Translate text; raises TranslationError on any backend failure"""
        if not text or not text.strip():
            raise ValidationError("Cannot translate empty text", "EMPTY_TEXT")

        prompt = TURN_PROMPT.format(source=source_language, target=target_language, text=text)
        return await self._run(text, source_language, target_language, prompt)

    async def translate_phrase(self, phrase: str, target_language: str) -> str:
        """Translate a canned English phrase into the patient's language"""
        prompt = PHRASE_PROMPT.format(target=target_language, text=phrase)
        return await self._run(phrase, ENGLISH, target_language, prompt)

    async def _run(self, text: str, source_language: str, target_language: str, prompt: str) -> str:
        try:
            if self.provider == "openai":
                call = self._translate_with_openai(prompt)
            else:
                call = self._translate_with_google(text, source_language, target_language)

            translated = await asyncio.wait_for(call, timeout=self.settings.translation_timeout_seconds)

        except (TranslationError, ConfigurationError):
            raise
        except Exception as e:
            logger.warning(f"⚠️ Translation failed ({self.provider}): {e}")
            raise TranslationError(f"Translation failed: {e}", provider=self.provider) from e

        translated = _clean_translation(translated)
        if not translated:
            raise TranslationError("Translation backend returned no text", provider=self.provider)

        logger.info(f"🌐 Translated {source_language} → {target_language} via {self.provider}")
        return translated

    async def _translate_with_google(self, text: str, source_language: str, target_language: str) -> str:
        from deep_translator import GoogleTranslator

        translator = GoogleTranslator(
            source=language_code(source_language),
            target=language_code(target_language)
        )
        # deep_translator is blocking; keep the event loop free
        return await asyncio.to_thread(translator.translate, text)

    async def _translate_with_openai(self, prompt: str) -> str:
        client = self._get_openai_client()
        response = await client.chat.completions.create(
            model=self.settings.openai_model,
            temperature=0,
            messages=[
                {
                    "role": "system",
                    "content": "You are a professional medical interpreter. Translate faithfully and concisely."
                },
                {"role": "user", "content": prompt},
            ],
        )
        return response.choices[0].message.content

    def _get_openai_client(self):
        if self._openai_client is None:
            from openai import AsyncOpenAI

            if not self.settings.openai_api_key:
                raise ConfigurationError("OPENAI_API_KEY is not configured", "MISSING_OPENAI_KEY")
            self._openai_client = AsyncOpenAI(api_key=self.settings.openai_api_key)
        return self._openai_client
