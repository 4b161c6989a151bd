"""Pydantic models for API requests and responses.

Field names are camelCase to match the JSON the reader front end expects.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from pdf_audio.constants import DEFAULT_RATE, DEFAULT_VOICE
from pdf_audio.tts import validate_rate


# Request Models

class TTSRequest(BaseModel):
    """Synthesize one chunk of an uploaded PDF."""

    pdfId: str = Field(..., description="Document id returned by /api/upload")
    chunkIndex: int = Field(..., description="0-based chunk index")
    voice: str = Field(default=DEFAULT_VOICE, min_length=1, description="edge-tts voice ShortName")
    rate: str = Field(default=DEFAULT_RATE, description="Signed percentage, e.g. '+20%'")

    @field_validator("rate")
    @classmethod
    def check_rate(cls, v: str) -> str:
        return validate_rate(v)


class CustomTTSRequest(BaseModel):
    """Synthesize free-form text."""

    text: str = Field(..., description="Text to synthesize")
    voice: str = Field(default=DEFAULT_VOICE, min_length=1)
    rate: str = Field(default=DEFAULT_RATE)

    @field_validator("rate")
    @classmethod
    def check_rate(cls, v: str) -> str:
        return validate_rate(v)


# Response Models

class HealthResponse(BaseModel):
    status: str
    timestamp: int = Field(..., description="Server time in ms since epoch")


class VoiceInfo(BaseModel):
    id: str
    name: str
    locale: str


class UploadResponse(BaseModel):
    success: bool = True
    pdfId: str
    filename: str
    totalPages: int
    totalChunks: int
    totalChars: int
    estimatedMinutes: int


class ChunkPreview(BaseModel):
    index: int
    preview: str
    chars: int


class DocumentResponse(BaseModel):
    id: str
    filename: str
    totalPages: int
    totalChunks: int
    totalChars: int
    chunks: List[ChunkPreview]


class ChunkInfo(BaseModel):
    index: int
    text: str
    wordCount: int


class ChunkListResponse(BaseModel):
    id: str
    filename: str
    chunks: List[ChunkInfo]


class ChunkResponse(BaseModel):
    index: int
    text: str
    totalChunks: int


class TTSResponse(BaseModel):
    success: bool = True
    audioUrl: str
    duration: float
    cached: Optional[bool] = None


class ProgressResponse(BaseModel):
    status: str
    progress: int
    message: str


class ErrorResponse(BaseModel):
    error: str
