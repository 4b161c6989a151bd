"""FastAPI application for the PDF reader.

Serves document upload, chunk browsing, chunk/custom TTS and the cached
audio files themselves under /audio.
"""

import logging
import os
import time
from typing import List, Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pdf_audio.cache import DirectoryAudioCache
from pdf_audio.config import Settings
from pdf_audio.constants import VERSION
from pdf_audio.errors import (
    ExtractionError,
    NotFoundError,
    RangeError,
    SynthesisError,
    TooShortError,
)
from pdf_audio.schemas import (
    ChunkInfo,
    ChunkListResponse,
    ChunkPreview,
    ChunkResponse,
    CustomTTSRequest,
    ErrorResponse,
    DocumentResponse,
    HealthResponse,
    ProgressResponse,
    TTSRequest,
    TTSResponse,
    UploadResponse,
    VoiceInfo,
)
from pdf_audio.service import ReaderService
from pdf_audio.tts import EdgeTTSSynthesizer
from pdf_audio.voices import VOICES

logger = logging.getLogger(__name__)

# Error kind → HTTP status
ERROR_STATUS = {
    NotFoundError: 404,
    RangeError: 400,
    TooShortError: 400,
    ExtractionError: 422,
    SynthesisError: 500,
}


def _documented(*status_codes: int) -> dict:
    """OpenAPI `responses=` entries for the {"error": ...} body."""
    return {code: {"model": ErrorResponse} for code in status_codes}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _audio_url(path: str) -> str:
    return f"/audio/{os.path.basename(path)}"


def build_service(settings: Settings) -> ReaderService:
    """Wire the production service from settings."""
    return ReaderService(
        cache=DirectoryAudioCache(settings.audio_dir),
        synthesizer=EdgeTTSSynthesizer(settings.edge_tts_path, timeout=settings.tts_timeout),
        max_chars=settings.max_chunk_chars,
    )


def create_app(service: ReaderService | None = None, settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI app. Both arguments default to the environment."""
    settings = settings or Settings.from_env()
    service = service or build_service(settings)
    os.makedirs(settings.audio_dir, exist_ok=True)

    app = FastAPI(
        title="PDF Audio Reader",
        description="Extract text from PDFs and read it aloud with edge-tts",
        version=VERSION,
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.mount("/audio", StaticFiles(directory=settings.audio_dir), name="audio")
    app.state.service = service

    for exc_type, status_code in ERROR_STATUS.items():
        def handler(request: Request, exc: Exception, status_code=status_code):
            if status_code >= 500:
                logger.error("%s %s failed: %s", request.method, request.url.path, exc)
            return _error(status_code, str(exc))
        app.add_exception_handler(exc_type, handler)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        messages = [e.get("msg", "invalid") for e in exc.errors()]
        return _error(400, "; ".join(messages))

    @app.get("/api/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", timestamp=int(time.time() * 1000))

    @app.get("/api/voices", response_model=List[VoiceInfo])
    def list_voices():
        return [VoiceInfo(id=v.id, name=v.display_name, locale=v.locale) for v in VOICES]

    @app.post("/api/upload", response_model=UploadResponse, responses=_documented(400, 422))
    def upload(pdf: Optional[UploadFile] = File(None)):
        """Upload a PDF (multipart field "pdf") and chunk its text."""
        if pdf is None or pdf.content_type != "application/pdf":
            return _error(400, "No PDF uploaded")

        document = service.ingest_document(pdf.file.read(), pdf.filename or "upload.pdf")
        return UploadResponse(
            pdfId=document.id,
            filename=document.source_name,
            totalPages=document.total_pages,
            totalChunks=len(document.chunks),
            totalChars=document.total_chars,
            estimatedMinutes=document.estimated_minutes,
        )

    @app.get("/api/pdf/{pdf_id}", response_model=DocumentResponse, responses=_documented(404))
    def get_pdf(pdf_id: str):
        document = service.get_document(pdf_id)
        return DocumentResponse(
            id=document.id,
            filename=document.source_name,
            totalPages=document.total_pages,
            totalChunks=len(document.chunks),
            totalChars=document.total_chars,
            chunks=[ChunkPreview(index=c.index, preview=c.preview, chars=len(c.text)) for c in document.chunks],
        )

    @app.get("/api/pdf/{pdf_id}/chunks", response_model=ChunkListResponse, responses=_documented(404))
    def get_chunks(pdf_id: str):
        document = service.get_document(pdf_id)
        return ChunkListResponse(
            id=document.id,
            filename=document.source_name,
            chunks=[ChunkInfo(index=c.index, text=c.text, wordCount=c.word_count) for c in document.chunks],
        )

    @app.get("/api/pdf/{pdf_id}/chunk/{chunk_index}", response_model=ChunkResponse, responses=_documented(400, 404))
    def get_chunk(pdf_id: str, chunk_index: int):
        text = service.get_chunk_text(pdf_id, chunk_index)
        total = len(service.get_document(pdf_id).chunks)
        return ChunkResponse(index=chunk_index, text=text, totalChunks=total)

    @app.post("/api/tts", response_model=TTSResponse, responses=_documented(400, 404, 500))
    def tts(request: TTSRequest):
        result = service.get_or_synthesize(request.pdfId, request.chunkIndex, request.voice, request.rate)
        return TTSResponse(audioUrl=_audio_url(result.path), duration=result.duration, cached=result.was_cached)

    @app.get("/api/tts/progress/{pdf_id}/{chunk_index}", response_model=ProgressResponse)
    def tts_progress(pdf_id: str, chunk_index: int):
        p = service.progress.get(pdf_id, chunk_index)
        return ProgressResponse(status=p.status, progress=p.progress, message=p.message)

    @app.post(
        "/api/tts/custom",
        response_model=TTSResponse,
        response_model_exclude_none=True,
        responses=_documented(400, 500),
    )
    def tts_custom(request: CustomTTSRequest):
        result = service.synthesize_adhoc(request.text, request.voice, request.rate)
        return TTSResponse(audioUrl=_audio_url(result.path), duration=result.duration)

    logger.info("App created (audio dir: %s, edge-tts: %s)", settings.audio_dir, settings.edge_tts_path)
    return app


def main():
    """Server entry point."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = Settings.from_env()
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
