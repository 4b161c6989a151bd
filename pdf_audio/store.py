"""In-memory repositories for documents and synthesis progress.

Created once at process start and injected into the service. Nothing
here is persisted; a restart forgets every document.
"""

import threading
import uuid

from pdf_audio.errors import NotFoundError
from pdf_audio.models import Document, Progress


class DocumentStore:
    def __init__(self):
        self._documents: dict[str, Document] = {}
        self._lock = threading.Lock()

    def new_id(self) -> str:
        return uuid.uuid4().hex

    def add(self, document: Document) -> None:
        with self._lock:
            if document.id in self._documents:
                raise ValueError(f"Document id already used: {document.id}")
            self._documents[document.id] = document

    def get(self, document_id: str) -> Document:
        document = self._documents.get(document_id)
        if document is None:
            raise NotFoundError(f"PDF not found: {document_id}")
        return document

    def __len__(self) -> int:
        return len(self._documents)


class ProgressTracker:
    """Last known synthesis state per (document, chunk)."""

    def __init__(self):
        self._progress: dict[tuple[str, int], Progress] = {}

    def set(self, document_id: str, chunk_index: int, status: str, progress: int, message: str) -> None:
        self._progress[(document_id, chunk_index)] = Progress(status, progress, message)

    def get(self, document_id: str, chunk_index: int) -> Progress:
        return self._progress.get((document_id, chunk_index), Progress())
