"""Shared fixtures for PDF audio reader tests."""

import os

import fitz
import pytest
from pydub import AudioSegment

from pdf_audio.cache import DirectoryAudioCache
from pdf_audio.service import ReaderService

SAMPLE_TEXT = "Hello world. This is a test.\nAnother sentence here."


class FakeSynthesizer:
    """Stands in for EdgeTTSSynthesizer: writes a short silent clip."""

    def __init__(self, fail_with=None):
        self.calls = []
        self.fail_with = fail_with

    def synthesize(self, text, voice, rate, output_path):
        self.calls.append((text, voice, rate, output_path))
        if self.fail_with is not None:
            raise self.fail_with
        AudioSegment.silent(duration=500).export(output_path, format="wav")


def make_pdf(*pages: str) -> bytes:
    """Build an in-memory PDF with one text page per argument."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def tiny_wav(tmp_path):
    """Generate a 500ms silent WAV for testing."""
    path = tmp_path / "test.wav"
    AudioSegment.silent(duration=500).export(str(path), format="wav")
    return path


@pytest.fixture
def sample_pdf():
    return make_pdf(SAMPLE_TEXT)


@pytest.fixture
def sample_pdf_file(tmp_path, sample_pdf):
    path = tmp_path / "book.pdf"
    path.write_bytes(sample_pdf)
    return str(path)


@pytest.fixture
def fake_synth():
    return FakeSynthesizer()


@pytest.fixture
def audio_dir(tmp_path):
    path = tmp_path / "audio"
    os.makedirs(path)
    return str(path)


@pytest.fixture
def service(audio_dir, fake_synth):
    """ReaderService wired to a temp audio dir and the fake synthesizer."""
    return ReaderService(cache=DirectoryAudioCache(audio_dir), synthesizer=fake_synth, max_chars=30)
