"""Runtime settings, read from the environment with constants as defaults."""

import os
from dataclasses import dataclass

from pdf_audio.constants import (
    AUDIO_DIR,
    DEFAULT_HOST,
    DEFAULT_MAX_CHARS,
    DEFAULT_PORT,
    TTS_TIMEOUT_SECONDS,
)
from pdf_audio.tts import find_edge_tts


@dataclass
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    audio_dir: str = AUDIO_DIR
    edge_tts_path: str = "edge-tts"
    tts_timeout: float = TTS_TIMEOUT_SECONDS
    max_chunk_chars: int = DEFAULT_MAX_CHARS

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("HOST", DEFAULT_HOST),
            port=int(env.get("PORT", DEFAULT_PORT)),
            audio_dir=env.get("AUDIO_DIR", AUDIO_DIR),
            edge_tts_path=find_edge_tts(env.get("EDGE_TTS_PATH")),
            tts_timeout=float(env.get("TTS_TIMEOUT", TTS_TIMEOUT_SECONDS)),
            max_chunk_chars=int(env.get("MAX_CHUNK_CHARS", DEFAULT_MAX_CHARS)),
        )
