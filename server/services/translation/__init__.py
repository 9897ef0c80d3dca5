# =============================================================================
# services/translation/__init__.py
# =============================================================================

"""
Translation Services

Round-trips text between English and the patient's language:
- Google Translate via deep-translator
- OpenAI chat completions with a translation-only prompt
"""

from .translator import TranslationService

__all__ = ["TranslationService"]
