"""Tests for the SQLite document and suggestion store."""

from proofline.models.suggestion import SuggestionStatus
from proofline.store.sqlite_store import SQLiteSuggestionStore


class TestDocuments:
    def test_create_and_load(self, store):
        doc = store.create_document("user-1", title="Draft")
        loaded = store.load_document(doc.id)
        assert loaded.owner_id == "user-1"
        assert loaded.title == "Draft"
        assert loaded.content == ""
        assert loaded.readability_score is None

    def test_load_missing(self, store):
        assert store.load_document("nope") is None

    def test_save_content_and_score(self, store):
        doc = store.create_document("user-1")
        store.save_content(doc.id, "<p>Hello</p>", 3.2)
        loaded = store.load_document(doc.id)
        assert loaded.content == "<p>Hello</p>"
        assert loaded.readability_score == 3.2

    def test_save_without_score_keeps_previous(self, store):
        doc = store.create_document("user-1")
        store.save_content(doc.id, "a", 4.0)
        store.save_content(doc.id, "b")
        assert store.load_document(doc.id).readability_score == 4.0

    def test_list_is_per_owner(self, store):
        store.create_document("user-1")
        store.create_document("user-1")
        store.create_document("user-2")
        assert len(store.list_documents("user-1")) == 2
        assert len(store.list_documents("user-3")) == 0

    def test_rename(self, store):
        doc = store.create_document("user-1")
        store.set_title(doc.id, "Renamed")
        assert store.load_document(doc.id).title == "Renamed"

    def test_delete_cascades_to_suggestions(self, store, make_suggestion):
        doc = store.create_document("user-1")
        store.replace_pending_suggestions(doc.id, [make_suggestion("teh", "the")])
        store.delete_document(doc.id)
        assert store.load_document(doc.id) is None
        assert store.list_suggestions(doc.id) == []

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "p.db"
        doc = SQLiteSuggestionStore(path).create_document("user-1", content="kept")
        assert SQLiteSuggestionStore(path).load_document(doc.id).content == "kept"


class TestSuggestions:
    def test_replace_pending_returns_retired_count(self, store, make_document, make_suggestion):
        doc = make_document("teh wich")
        assert store.replace_pending_suggestions(doc.id, [make_suggestion("teh", "the")]) == 0
        assert store.replace_pending_suggestions(doc.id, [make_suggestion("wich", "which")]) == 1
        pending = store.list_suggestions(doc.id, SuggestionStatus.PENDING)
        assert [s.original_text for s in pending] == ["wich"]
        assert pending[0].document_id == doc.id

    def test_replace_keeps_terminal_rows(self, store, make_document, make_suggestion):
        doc = make_document("teh wich")
        first = make_suggestion("teh", "the")
        store.replace_pending_suggestions(doc.id, [first])
        store.set_suggestion_status(doc.id, first.id, SuggestionStatus.DISMISSED)
        store.replace_pending_suggestions(doc.id, [])
        assert store.get_suggestion(doc.id, first.id).status == SuggestionStatus.DISMISSED

    def test_status_only_moves_from_pending(self, store, make_document, make_suggestion):
        doc = make_document("teh")
        s = make_suggestion("teh", "the")
        store.replace_pending_suggestions(doc.id, [s])
        assert store.set_suggestion_status(doc.id, s.id, SuggestionStatus.ACCEPTED)
        assert not store.set_suggestion_status(doc.id, s.id, SuggestionStatus.ACCEPTED)
        assert not store.set_suggestion_status(doc.id, s.id, SuggestionStatus.DISMISSED)
        assert store.get_suggestion(doc.id, s.id).status == SuggestionStatus.ACCEPTED

    def test_status_scoped_to_document(self, store, make_document, make_suggestion):
        doc = make_document("teh")
        other = make_document("teh")
        s = make_suggestion("teh", "the")
        store.replace_pending_suggestions(doc.id, [s])
        assert not store.set_suggestion_status(other.id, s.id, SuggestionStatus.ACCEPTED)
        assert store.get_suggestion(other.id, s.id) is None

    def test_ordered_by_start_index(self, store, make_document, make_suggestion):
        doc = make_document("teh wich")
        late = make_suggestion("wich", "which", start_index=4, end_index=8)
        early = make_suggestion("teh", "the", start_index=0, end_index=3)
        store.replace_pending_suggestions(doc.id, [late, early])
        assert [s.id for s in store.list_suggestions(doc.id)] == [early.id, late.id]

    def test_round_trips_fields(self, store, make_document, make_suggestion):
        doc = make_document("teh")
        s = make_suggestion("teh", "the", explanation="Misspelled word")
        store.replace_pending_suggestions(doc.id, [s])
        loaded = store.get_suggestion(doc.id, s.id)
        assert loaded.explanation == "Misspelled word"
        assert loaded.type == s.type
        assert loaded.severity == s.severity
        assert loaded.created_at == s.created_at

    def test_delete_suggestions(self, store, make_document, make_suggestion):
        doc = make_document("teh wich")
        a, b = make_suggestion("teh", "the"), make_suggestion("wich", "which")
        store.replace_pending_suggestions(doc.id, [a, b])
        assert store.delete_suggestions([a.id]) == 1
        assert store.delete_suggestions([]) == 0
        assert [s.id for s in store.list_suggestions(doc.id)] == [b.id]
