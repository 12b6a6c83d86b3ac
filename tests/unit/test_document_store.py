"""Unit tests for the Document Store."""

from datetime import datetime, timezone

import pytest

from src.kernel.documents import (
    DEFAULT_MANIFEST,
    DEFAULT_SOURCE,
    EXAMPLE_CONTRACTS,
    SEED_NAME,
    DocumentStore,
)
from src.kernel.errors import DocumentNotFoundError, DocumentNotSelectedError

FROZEN = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _snapshot(store: DocumentStore):
    return [d.model_dump() for d in store.documents], store.selected_id


class TestCreate:
    """Tests for document creation."""

    def test_create_uses_template_and_does_not_select(self):
        store = DocumentStore()
        doc = store.create()
        assert doc.name == "New Contract"
        assert doc.source == DEFAULT_SOURCE
        assert doc.manifest == DEFAULT_MANIFEST
        assert store.selected is None

    def test_ids_are_distinct(self):
        store = DocumentStore()
        ids = {store.create().id for _ in range(50)}
        assert len(ids) == 50

    def test_with_default_selects_seed(self):
        store = DocumentStore.with_default()
        assert len(store) == 1
        assert store.selected.name == SEED_NAME


class TestDelete:
    """Tests for deletion and selection fallback."""

    def test_delete_sole_selected_document_clears_selection(self):
        store = DocumentStore.with_default()
        store.delete(store.selected_id)
        assert len(store) == 0
        assert store.selected is None
        assert store.selected_id is None

    def test_delete_selected_falls_back_to_first(self):
        store = DocumentStore()
        first, second, third = store.create(), store.create(), store.create()
        store.select(third.id)
        store.delete(third.id)
        assert store.selected_id == first.id

    def test_delete_non_selected_keeps_selection_unmutated(self):
        store = DocumentStore.with_default()
        other = store.create()
        selected_before = store.selected.model_dump()
        store.delete(other.id)
        assert store.selected.model_dump() == selected_before

    def test_delete_twice_is_idempotent(self):
        store = DocumentStore.with_default()
        doc = store.create()
        assert store.delete(doc.id) is True
        after_once = _snapshot(store)
        assert store.delete(doc.id) is False
        assert _snapshot(store) == after_once

    def test_delete_unknown_id_is_noop(self):
        store = DocumentStore.with_default()
        before = _snapshot(store)
        assert store.delete("missing") is False
        assert _snapshot(store) == before


class TestRenameAndSelect:
    """Tests for rename and select."""

    def test_rename_in_place(self):
        store = DocumentStore.with_default()
        doc = store.selected
        edited = doc.last_edited
        store.rename(doc.id, "Counter")
        assert store.get(doc.id).name == "Counter"
        assert store.selected.name == "Counter"
        # Renaming is not a content edit
        assert store.get(doc.id).last_edited == edited

    def test_rename_accepts_empty_name(self):
        store = DocumentStore.with_default()
        doc = store.rename(store.selected_id, "")
        assert doc.name == ""

    def test_rename_unknown_returns_none(self):
        assert DocumentStore().rename("missing", "x") is None

    def test_select_unknown_raises(self):
        store = DocumentStore.with_default()
        selected = store.selected_id
        with pytest.raises(DocumentNotFoundError):
            store.select("missing")
        assert store.selected_id == selected

    def test_clear_selection(self):
        store = DocumentStore.with_default()
        store.clear_selection()
        assert store.selected is None
        assert len(store) == 1

    def test_select_does_not_touch_content(self):
        store = DocumentStore.with_default()
        other = store.create()
        before = other.model_dump()
        store.select(other.id)
        assert store.selected.model_dump() == before


class TestUpdateContent:
    """Tests for source and manifest edits."""

    def test_update_then_read_round_trip(self):
        store = DocumentStore.with_default()
        doc_id = store.selected_id
        edited_before = store.selected.last_edited
        store.update_content(doc_id, "module contract::hello {}")
        assert store.selected.source == "module contract::hello {}"
        assert store.get(doc_id).source == "module contract::hello {}"
        assert store.selected.last_edited > edited_before

    def test_last_edited_strictly_increases_with_frozen_clock(self):
        store = DocumentStore.with_default(clock=lambda: FROZEN)
        doc_id = store.selected_id
        stamps = [store.selected.last_edited]
        for text in ("a", "b", "c"):
            stamps.append(store.update_content(doc_id, text).last_edited)
        assert stamps == sorted(set(stamps))

    def test_update_non_selected_rejected(self):
        store = DocumentStore.with_default()
        other = store.create()
        with pytest.raises(DocumentNotSelectedError):
            store.update_content(other.id, "x")
        assert other.source == DEFAULT_SOURCE

    def test_update_unknown_rejected(self):
        store = DocumentStore.with_default()
        with pytest.raises(DocumentNotFoundError):
            store.update_content("missing", "x")

    def test_update_manifest(self):
        store = DocumentStore.with_default()
        edited_before = store.selected.last_edited
        doc = store.update_manifest(store.selected_id, "[package]\nname = \"x\"")
        assert doc.manifest.startswith("[package]")
        assert doc.last_edited > edited_before
        assert doc.source == DEFAULT_SOURCE


class TestExamples:
    """Tests for loading example contracts."""

    def test_load_example_into_selected(self):
        store = DocumentStore.with_default()
        doc = store.load_example("Token Contract")
        assert doc.source == EXAMPLE_CONTRACTS["Token Contract"]
        assert store.selected.source == EXAMPLE_CONTRACTS["Token Contract"]

    def test_load_example_without_selection_is_noop(self):
        store = DocumentStore()
        store.create()
        assert store.load_example("Hello World") is None

    def test_unknown_example(self):
        with pytest.raises(KeyError):
            DocumentStore.with_default().load_example("Nope")
