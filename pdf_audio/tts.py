"""TTS generation via the edge-tts command-line tool."""

import logging
import os
import re
import shutil
import subprocess
import tempfile

from pdf_audio.constants import DEFAULT_RATE, EDGE_TTS_CANDIDATES, TTS_TIMEOUT_SECONDS
from pdf_audio.errors import SynthesisError, TooShortError

logger = logging.getLogger(__name__)

_RATE_RE = re.compile(r"^[+-]\d{1,3}%$")


def find_edge_tts(env_path: str | None = None) -> str:
    """Locate the edge-tts executable.

    Order: explicit/EDGE_TTS_PATH → PATH → well-known install locations →
    bare "edge-tts" and hope.
    """
    env_path = env_path or os.environ.get("EDGE_TTS_PATH")
    if env_path and os.path.exists(env_path):
        return env_path

    on_path = shutil.which("edge-tts")
    if on_path:
        return on_path

    for candidate in EDGE_TTS_CANDIDATES:
        path = os.path.expanduser(candidate)
        if os.path.exists(path):
            return path

    return "edge-tts"


def validate_rate(rate: str) -> str:
    """Check a relative rate string like "+20%" or "-15%"."""
    if not _RATE_RE.match(rate):
        raise ValueError(f"Invalid rate {rate!r}: expected a signed percentage like '+20%'")
    return rate


def check_length(text: str, minimum: int) -> None:
    if len(text) < minimum:
        raise TooShortError(f"Text too short: {len(text)} chars (minimum {minimum})")


class EdgeTTSSynthesizer:
    """Runs edge-tts for one piece of text, writing the MP3 atomically.

    The audio is written to a uniquely named "*.part" file beside
    output_path and renamed into place only after edge-tts exits cleanly
    with a non-empty file, so a failed run never leaves anything at
    output_path. Local I/O failures surface as SynthesisError too.
    """

    def __init__(self, executable: str | None = None, timeout: float = TTS_TIMEOUT_SECONDS):
        self.executable = executable or find_edge_tts()
        self.timeout = timeout

    def _command(self, text_path: str, media_path: str, voice: str, rate: str) -> list[str]:
        args = [
            self.executable,
            "--file", text_path,
            "--write-media", media_path,
            "--voice", voice,
        ]
        if rate and rate != DEFAULT_RATE:
            args += ["--rate", rate]
        return args

    def _run(self, cmd: list[str]) -> None:
        logger.debug("Running %s", " ".join(cmd))
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise SynthesisError(f"edge-tts timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise SynthesisError(f"edge-tts failed: {detail}") from e
        except OSError as e:
            raise SynthesisError(f"Could not run edge-tts at {self.executable}: {e}") from e

    def synthesize(self, text: str, voice: str, rate: str, output_path: str) -> None:
        text_path = partial_path = None
        try:
            # Per-call partial name: two writers for one output never share it
            fd, partial_path = tempfile.mkstemp(
                dir=os.path.dirname(output_path) or ".",
                prefix=os.path.basename(output_path) + ".",
                suffix=".part",
            )
            os.close(fd)
            fd, text_path = tempfile.mkstemp(prefix="tts-", suffix=".txt")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)

            self._run(self._command(text_path, partial_path, voice, rate))

            # 0-byte output counts as failure
            if not os.path.exists(partial_path) or os.path.getsize(partial_path) == 0:
                raise SynthesisError(f"edge-tts produced no audio for: {text[:50]}...")

            os.replace(partial_path, output_path)
        except OSError as e:
            raise SynthesisError(f"Could not write audio to {output_path}: {e}") from e
        finally:
            for path in (text_path, partial_path):
                if path and os.path.exists(path):
                    os.remove(path)
