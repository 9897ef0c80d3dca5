"""
Phrase library of common clinician questions and instructions
"""

from .phrase_book import PHRASE_CATEGORIES, PhraseBookService, filter_phrases, iter_phrase_pairs

__all__ = ["PHRASE_CATEGORIES", "PhraseBookService", "filter_phrases", "iter_phrase_pairs"]
