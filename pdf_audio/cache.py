"""Filesystem cache of synthesized chunk audio.

Artifacts are named deterministically from (document id, chunk index,
voice, rate), so presence of the file *is* the cache entry. Nothing is
ever evicted: the directory grows until an operator clears it.
"""

import itertools
import logging
import os
import re
import time

from pdf_audio.audio import get_duration
from pdf_audio.constants import AUDIO_DIR, DEFAULT_RATE
from pdf_audio.models import CacheEntry

logger = logging.getLogger(__name__)

_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9]")


def sanitize_voice(voice_id: str) -> str:
    """Strip everything but ASCII letters and digits.

    "en-US-AriaNeural" → "enUSAriaNeural"
    """
    return _UNSAFE_RE.sub("", voice_id)


def rate_suffix(rate: str) -> str:
    """Filename suffix for a non-default rate. "+20%" → "_rp20", "-15%" → "_rm15"."""
    if not rate or rate == DEFAULT_RATE:
        return ""
    sign = "m" if rate.startswith("-") else "p"
    return f"_r{sign}{_UNSAFE_RE.sub('', rate)}"


class AudioCache:
    """Cache backend interface. Callers only depend on these methods."""

    def key_to_path(self, document_id: str, chunk_index: int, voice_id: str,
                    rate: str = DEFAULT_RATE) -> str:
        raise NotImplementedError

    def lookup(self, document_id: str, chunk_index: int, voice_id: str,
               rate: str = DEFAULT_RATE) -> CacheEntry | None:
        raise NotImplementedError

    def adhoc_path(self) -> str:
        raise NotImplementedError

    def evict(self, document_id: str, chunk_index: int, voice_id: str,
              rate: str = DEFAULT_RATE) -> None:
        raise NotImplementedError("this cache backend does not evict")


class DirectoryAudioCache(AudioCache):
    """Append-only cache backed by one flat directory of MP3 files."""

    def __init__(self, audio_dir: str = AUDIO_DIR):
        self.audio_dir = audio_dir
        os.makedirs(audio_dir, exist_ok=True)
        self._counter = itertools.count()

    def key_to_path(self, document_id, chunk_index, voice_id, rate=DEFAULT_RATE):
        filename = f"{document_id}_chunk_{chunk_index}_{sanitize_voice(voice_id)}{rate_suffix(rate)}.mp3"
        return os.path.join(self.audio_dir, filename)

    def lookup(self, document_id, chunk_index, voice_id, rate=DEFAULT_RATE):
        path = self.key_to_path(document_id, chunk_index, voice_id, rate)
        # 0-byte file is not a valid entry
        if not os.path.exists(path) or os.path.getsize(path) == 0:
            return None
        logger.debug("Cache hit: %s", path)
        return CacheEntry(path=path, duration=get_duration(path))

    def adhoc_path(self):
        stamp = int(time.time() * 1000)
        return os.path.join(self.audio_dir, f"custom_{stamp}_{next(self._counter)}.mp3")
