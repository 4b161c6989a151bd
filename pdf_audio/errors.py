"""Error kinds surfaced by the reader pipeline."""


class PdfAudioError(Exception):
    """Base class for all pipeline errors."""


class ExtractionError(PdfAudioError):
    """Source bytes could not be decoded to text."""


class NotFoundError(PdfAudioError):
    """Unknown document id."""


class RangeError(PdfAudioError):
    """Chunk index outside the document."""


class TooShortError(PdfAudioError):
    """Text below the minimum synthesis length."""


class SynthesisError(PdfAudioError):
    """edge-tts failed, timed out, or produced no audio."""


class DurationReadError(PdfAudioError):
    """Audio metadata unreadable. Never leaves pdf_audio.audio."""
