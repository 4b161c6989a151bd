"""Reader service: ingest PDFs, serve chunks, synthesize and cache audio.

Both front ends (HTTP server and CLI) go through this class. Storage,
cache and synthesizer are injected so tests can substitute fakes.
"""

import logging
import threading
from contextlib import contextmanager

from pdf_audio.audio import get_duration
from pdf_audio.cache import AudioCache, DirectoryAudioCache
from pdf_audio.constants import (
    DEFAULT_MAX_CHARS,
    DEFAULT_RATE,
    DEFAULT_VOICE,
    MIN_ADHOC_CHARS,
    MIN_CHUNK_CHARS,
)
from pdf_audio.errors import RangeError, SynthesisError
from pdf_audio.models import Document, SynthesisResult
from pdf_audio.pdf import extract_text
from pdf_audio.store import DocumentStore, ProgressTracker
from pdf_audio.text import normalize, split_document
from pdf_audio.tts import EdgeTTSSynthesizer, check_length

logger = logging.getLogger(__name__)


class ReaderService:
    def __init__(
        self,
        store: DocumentStore | None = None,
        cache: AudioCache | None = None,
        synthesizer=None,
        progress: ProgressTracker | None = None,
        max_chars: int = DEFAULT_MAX_CHARS,
    ):
        self.store = store or DocumentStore()
        self.cache = cache or DirectoryAudioCache()
        self.synthesizer = synthesizer or EdgeTTSSynthesizer()
        self.progress = progress or ProgressTracker()
        self.max_chars = max_chars
        # Artifact path -> [lock, holders + waiters]; dropped when the count hits 0
        self._key_locks: dict[str, list] = {}
        self._key_locks_guard = threading.Lock()

    @contextmanager
    def _locked(self, key: str):
        """Serialize work on one cache key; the table only holds keys in use."""
        with self._key_locks_guard:
            entry = self._key_locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._key_locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._key_locks[key]

    def ingest_document(self, raw_bytes: bytes, source_name: str, max_chars: int | None = None) -> Document:
        """Extract, normalize and chunk a PDF, then register it.

        Raises ExtractionError if the PDF yields no text.
        """
        extracted = extract_text(raw_bytes)
        text = normalize(extracted.text)
        document = Document(
            id=self.store.new_id(),
            source_name=source_name,
            chunks=split_document(text, max_chars or self.max_chars),
            total_chars=len(text),
            total_pages=extracted.page_count,
        )
        self.store.add(document)
        logger.info("Ingested %s -> %s (%d chunks)", source_name, document.id, len(document.chunks))
        return document

    def get_document(self, document_id: str) -> Document:
        return self.store.get(document_id)

    def get_chunk_text(self, document_id: str, chunk_index: int) -> str:
        document = self.store.get(document_id)
        if not 0 <= chunk_index < len(document.chunks):
            raise RangeError(f"Invalid chunk index {chunk_index} (document has {len(document.chunks)} chunks)")
        return document.chunks[chunk_index].text

    def get_or_synthesize(
        self,
        document_id: str,
        chunk_index: int,
        voice_id: str = DEFAULT_VOICE,
        rate: str = DEFAULT_RATE,
    ) -> SynthesisResult:
        """Return cached audio for a chunk, synthesizing it on a miss."""
        text = self.get_chunk_text(document_id, chunk_index)
        check_length(text, MIN_CHUNK_CHARS)

        # Keyed on the artifact path: voice ids that sanitize alike share a file
        output_path = self.cache.key_to_path(document_id, chunk_index, voice_id, rate)
        with self._locked(output_path):
            entry = self.cache.lookup(document_id, chunk_index, voice_id, rate)
            if entry is not None:
                return SynthesisResult(path=entry.path, duration=entry.duration, was_cached=True)

            self.progress.set(document_id, chunk_index, "processing", 50, "Generating audio...")
            logger.info("Generating chunk %d for %s (%s, %s)", chunk_index, document_id, voice_id, rate)
            try:
                self.synthesizer.synthesize(text, voice_id, rate, output_path)
            except SynthesisError as e:
                self.progress.set(document_id, chunk_index, "error", 0, str(e))
                raise

            self.progress.set(document_id, chunk_index, "completed", 100, "Done")
            return SynthesisResult(path=output_path, duration=get_duration(output_path), was_cached=False)

    def synthesize_adhoc(self, text: str, voice_id: str = DEFAULT_VOICE, rate: str = DEFAULT_RATE) -> SynthesisResult:
        """Synthesize free-form text into a fresh timestamp-named file."""
        cleaned = normalize(text)
        check_length(cleaned, MIN_ADHOC_CHARS)

        output_path = self.cache.adhoc_path()
        logger.info("Generating ad-hoc audio (%d chars, %s)", len(cleaned), voice_id)
        self.synthesizer.synthesize(cleaned, voice_id, rate, output_path)
        return SynthesisResult(path=output_path, duration=get_duration(output_path))
