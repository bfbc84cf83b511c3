"""Casing helpers applied to job postings on create."""

from typing import Optional


def capitalize_title(text: Optional[str]) -> Optional[str]:
    """Upper-case the first letter of every word, lower-case the rest."""
    if text is None:
        return None
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def capitalize_sentence_case(text: Optional[str]) -> Optional[str]:
    """
    Sentence case: the first letter of each period-separated sentence is
    upper-cased and the remainder lower-cased.
    """
    if text is None:
        return None
    sentences = [s.strip() for s in text.split(".")]
    formatted = ". ".join(s[:1].upper() + s[1:].lower() for s in sentences if s)
    if formatted and text.rstrip().endswith("."):
        formatted += "."
    return formatted
