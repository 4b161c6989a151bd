"""Voice catalog for the reader UI and CLI."""

import asyncio

import edge_tts

from pdf_audio.models import VoiceDescriptor

# Hardcoded English catalog (avoids network call at startup)
VOICES = (
    VoiceDescriptor("en-US-AriaNeural", "Aria (US Female)", "en-US"),
    VoiceDescriptor("en-US-GuyNeural", "Guy (US Male)", "en-US"),
    VoiceDescriptor("en-US-JennyNeural", "Jenny (US Female)", "en-US"),
    VoiceDescriptor("en-GB-SoniaNeural", "Sonia (UK Female)", "en-GB"),
    VoiceDescriptor("en-GB-RyanNeural", "Ryan (UK Male)", "en-GB"),
    VoiceDescriptor("en-IN-NeerjaNeural", "Neerja (Indian Female)", "en-IN"),
    VoiceDescriptor("en-IN-PrabhatNeural", "Prabhat (Indian Male)", "en-IN"),
    VoiceDescriptor("en-AU-NatashaNeural", "Natasha (Australian Female)", "en-AU"),
)


def get_voice(voice_id: str) -> VoiceDescriptor | None:
    for voice in VOICES:
        if voice.id == voice_id:
            return voice
    return None


def list_english_voices() -> list[dict]:
    """Fetch the live edge-tts voice list, English only, sorted by locale.

    Each entry is edge-tts's own dict (ShortName, Gender, Locale, ...).
    """
    voices = asyncio.run(edge_tts.list_voices())
    english = [v for v in voices if v["Locale"].startswith("en-")]
    return sorted(english, key=lambda v: (v["Locale"], v["ShortName"]))
