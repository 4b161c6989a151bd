"""Tests for the FastAPI server."""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeSynthesizer
from pdf_audio.cache import DirectoryAudioCache
from pdf_audio.config import Settings
from pdf_audio.errors import SynthesisError
from pdf_audio.server import create_app
from pdf_audio.service import ReaderService


@pytest.fixture
def client(service, audio_dir):
    return TestClient(create_app(service, Settings(audio_dir=audio_dir)))


def _upload(client, data, content_type="application/pdf", name="book.pdf"):
    return client.post("/api/upload", files={"pdf": (name, data, content_type)})


# --- Basics ---

def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["timestamp"] > 0


def test_voices(client):
    voices = client.get("/api/voices").json()
    assert len(voices) == 8
    assert voices[0] == {"id": "en-US-AriaNeural", "name": "Aria (US Female)", "locale": "en-US"}


# --- Upload and browse ---

def test_upload(client, sample_pdf):
    res = _upload(client, sample_pdf)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["filename"] == "book.pdf"
    assert body["totalPages"] == 1
    assert body["totalChunks"] == 2
    assert body["estimatedMinutes"] == 1


def test_upload_not_pdf(client):
    res = _upload(client, b"hello", content_type="text/plain", name="notes.txt")
    assert res.status_code == 400
    assert res.json() == {"error": "No PDF uploaded"}


def test_upload_missing_file(client):
    assert client.post("/api/upload").status_code == 400


def test_upload_unreadable_pdf(client):
    res = _upload(client, b"%PDF-garbage")
    assert res.status_code == 422
    assert "error" in res.json()


def test_get_pdf(client, sample_pdf):
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    body = client.get(f"/api/pdf/{pdf_id}").json()
    assert body["id"] == pdf_id
    assert body["totalChunks"] == 2
    assert body["chunks"][0] == {"index": 0, "preview": "Hello world. This is a test....", "chars": 28}


def test_get_pdf_unknown(client):
    res = client.get("/api/pdf/missing")
    assert res.status_code == 404
    assert "not found" in res.json()["error"]


def test_get_chunks(client, sample_pdf):
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    chunks = client.get(f"/api/pdf/{pdf_id}/chunks").json()["chunks"]
    assert chunks[1] == {"index": 1, "text": "Another sentence here.", "wordCount": 3}


def test_get_chunk(client, sample_pdf):
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    body = client.get(f"/api/pdf/{pdf_id}/chunk/1").json()
    assert body == {"index": 1, "text": "Another sentence here.", "totalChunks": 2}


@pytest.mark.parametrize("index", [-1, 2])
def test_get_chunk_out_of_range(client, sample_pdf, index):
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    assert client.get(f"/api/pdf/{pdf_id}/chunk/{index}").status_code == 400


# --- TTS ---

def test_tts_then_cached(client, sample_pdf, fake_synth):
    """Second request for the same chunk/voice is served from cache."""
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    payload = {"pdfId": pdf_id, "chunkIndex": 0, "voice": "en-US-AriaNeural"}

    first = client.post("/api/tts", json=payload).json()
    second = client.post("/api/tts", json=payload).json()

    assert first["success"] is True
    assert first["cached"] is False
    assert second["cached"] is True
    assert first["audioUrl"] == second["audioUrl"] == f"/audio/{pdf_id}_chunk_0_enUSAriaNeural.mp3"
    assert len(fake_synth.calls) == 1


def test_tts_audio_served(client, sample_pdf):
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    url = client.post("/api/tts", json={"pdfId": pdf_id, "chunkIndex": 0}).json()["audioUrl"]
    res = client.get(url)
    assert res.status_code == 200
    assert len(res.content) > 0


def test_tts_progress(client, sample_pdf):
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    assert client.get(f"/api/tts/progress/{pdf_id}/0").json()["status"] == "pending"
    client.post("/api/tts", json={"pdfId": pdf_id, "chunkIndex": 0})
    assert client.get(f"/api/tts/progress/{pdf_id}/0").json() == {
        "status": "completed", "progress": 100, "message": "Done",
    }


def test_tts_unknown_pdf(client):
    assert client.post("/api/tts", json={"pdfId": "missing", "chunkIndex": 0}).status_code == 404


def test_tts_bad_index(client, sample_pdf):
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    assert client.post("/api/tts", json={"pdfId": pdf_id, "chunkIndex": 9}).status_code == 400


def test_tts_bad_rate(client, sample_pdf):
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]
    res = client.post("/api/tts", json={"pdfId": pdf_id, "chunkIndex": 0, "rate": "fast"})
    assert res.status_code == 400
    assert "rate" in res.json()["error"]


def test_tts_synthesis_failure(audio_dir, sample_pdf):
    synth = FakeSynthesizer(fail_with=SynthesisError("edge-tts timed out after 120s"))
    service = ReaderService(cache=DirectoryAudioCache(audio_dir), synthesizer=synth)
    client = TestClient(create_app(service, Settings(audio_dir=audio_dir)))
    pdf_id = _upload(client, sample_pdf).json()["pdfId"]

    res = client.post("/api/tts", json={"pdfId": pdf_id, "chunkIndex": 0})
    assert res.status_code == 500
    assert res.json() == {"error": "edge-tts timed out after 120s"}


def test_tts_custom(client, fake_synth):
    res = client.post("/api/tts/custom", json={"text": "Read this please.", "rate": "+10%"})
    assert res.status_code == 200
    body = res.json()
    assert body["audioUrl"].startswith("/audio/custom_")
    assert "cached" not in body
    assert fake_synth.calls[0][:3] == ("Read this please.", "en-US-AriaNeural", "+10%")


def test_tts_custom_too_short(client):
    res = client.post("/api/tts/custom", json={"text": "a"})
    assert res.status_code == 400


def test_openapi_documents_error_body(client):
    """Error statuses point at the {"error": ...} schema."""
    schema = client.get("/openapi.json").json()
    assert schema["components"]["schemas"]["ErrorResponse"]["required"] == ["error"]
    tts_responses = schema["paths"]["/api/tts"]["post"]["responses"]
    for code in ("400", "404", "500"):
        assert tts_responses[code]["content"]["application/json"]["schema"] == {"$ref": "#/components/schemas/ErrorResponse"}
