"""Data models for documents, chunks and synthesized audio."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from pdf_audio.constants import PREVIEW_CHARS, WORDS_PER_MINUTE


@dataclass(frozen=True)
class Chunk:
    index: int
    text: str

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def preview(self) -> str:
        return self.text[:PREVIEW_CHARS] + "..."


@dataclass(frozen=True)
class Document:
    """A processed source held in memory for the life of the process."""

    id: str
    source_name: str
    chunks: tuple[Chunk, ...]
    total_chars: int
    total_pages: int
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def estimated_minutes(self) -> int:
        words = sum(c.word_count for c in self.chunks)
        return math.ceil(words / WORDS_PER_MINUTE)


@dataclass(frozen=True)
class CacheEntry:
    path: str
    duration: float     # seconds


@dataclass(frozen=True)
class SynthesisResult:
    path: str
    duration: float
    was_cached: bool = False


@dataclass(frozen=True)
class VoiceDescriptor:
    id: str             # edge-tts ShortName
    display_name: str
    locale: str


@dataclass
class Progress:
    status: str = "pending"     # pending, processing, completed, error
    progress: int = 0
    message: str = "Waiting..."
