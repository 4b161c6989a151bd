"""Audio metadata: duration of a synthesized artifact."""

import logging

from pydub import AudioSegment

from pdf_audio.errors import DurationReadError

logger = logging.getLogger(__name__)


def _read_duration(path: str) -> float:
    try:
        audio = AudioSegment.from_file(path)
    except Exception as e:
        raise DurationReadError(f"Could not read {path}: {e}") from e
    return len(audio) / 1000


def get_duration(path: str) -> float:
    """Duration in seconds, or 0.0 when the file can't be parsed."""
    try:
        return _read_duration(path)
    except DurationReadError as e:
        logger.warning("%s; reporting zero duration", e)
        return 0.0
