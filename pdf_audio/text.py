"""Normalize extracted PDF text and split it into sentence-aligned chunks."""

import re

from pdf_audio.constants import DEFAULT_MAX_CHARS
from pdf_audio.models import Chunk

# C0/C1 controls, keeping tab, LF and CR for the whitespace pass
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_NON_ASCII_RE = re.compile(r"[^\x20-\x7e\s]")
_PAGE_NUMBER_RE = re.compile(r"^[ \t]*\d+[ \t\r]*$", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_RE = re.compile(r"(?<=[.!?])\s+")

_PUNCTUATION = str.maketrans({
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2013": "-",
    "\u2014": "-",
    "\u2026": "...",
})


def normalize(raw: str | None, ascii_only: bool = False) -> str:
    """Clean extracted text for TTS.

    Drops control characters and page-number lines, maps typographic
    quotes/dashes/ellipsis to ASCII, then collapses whitespace. With
    ascii_only, any other non-ASCII character becomes a space.
    """
    if not raw:
        return ""
    text = _CONTROL_RE.sub("", raw)
    text = text.translate(_PUNCTUATION)
    if ascii_only:
        text = _NON_ASCII_RE.sub(" ", text)
    text = _PAGE_NUMBER_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def split_sentences(text: str) -> list[str]:
    """Split at ., ! or ? followed by whitespace. The whitespace is dropped."""
    return [s for s in _SENTENCE_RE.split(text) if s]


def chunk(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> list[str]:
    """Greedily pack sentences into chunks shorter than max_chars.

    A sentence that alone reaches max_chars is emitted as its own chunk
    rather than being split mid-sentence.
    """
    chunks = []
    current = ""

    for sentence in split_sentences(text):
        if len(current + sentence) < max_chars:
            current += sentence + " "
        else:
            if current:
                chunks.append(current.strip())
            current = sentence + " "

    if current.strip():
        chunks.append(current.strip())

    return chunks


def split_document(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> tuple[Chunk, ...]:
    """Chunk text and number the pieces from 0."""
    return tuple(Chunk(index=i, text=t) for i, t in enumerate(chunk(text, max_chars)))
