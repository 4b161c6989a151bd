"""Tests for the in-memory document and progress repositories."""

import pytest

from pdf_audio.errors import NotFoundError
from pdf_audio.models import Chunk, Document
from pdf_audio.store import DocumentStore, ProgressTracker


def _doc(store):
    return Document(id=store.new_id(), source_name="a.pdf", chunks=(Chunk(0, "Hello."),),
                    total_chars=6, total_pages=1)


def test_add_and_get():
    store = DocumentStore()
    doc = _doc(store)
    store.add(doc)
    assert store.get(doc.id) is doc
    assert len(store) == 1


def test_get_unknown():
    with pytest.raises(NotFoundError):
        DocumentStore().get("missing")


def test_ids_never_reused():
    store = DocumentStore()
    ids = {store.new_id() for _ in range(100)}
    assert len(ids) == 100


def test_add_duplicate_id_rejected():
    store = DocumentStore()
    doc = _doc(store)
    store.add(doc)
    with pytest.raises(ValueError):
        store.add(doc)


def test_progress_pending_by_default():
    assert ProgressTracker().get("abc", 0).status == "pending"


def test_progress_set_get():
    tracker = ProgressTracker()
    tracker.set("abc", 0, "processing", 50, "Generating audio...")
    p = tracker.get("abc", 0)
    assert (p.status, p.progress) == ("processing", 50)
    assert tracker.get("abc", 1).status == "pending"
