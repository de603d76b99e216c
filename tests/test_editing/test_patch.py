"""Tests for applying suggestions to a document."""

from __future__ import annotations

from linguist.editing.anchor import Span
from linguist.editing.patch import BatchResult, apply_all, apply_one, splice
from linguist.models.suggestion import Suggestion


def _s(original: str, suggested: str, id: str = "s1", context: str | None = None) -> Suggestion:
    return Suggestion(
        id=id,
        category="GRAMMAR",
        original_text=original,
        suggested_text=suggested,
        explanation="",
        context=context,
    )


class TestSplice:
    def test_replaces_span(self):
        assert splice("abcdef", Span(2, 4), "XY") == "abXYef"

    def test_insert_and_delete(self):
        assert splice("abc", Span(1, 2), "") == "ac"
        assert splice("abc", Span(1, 2), "---") == "a---c"


class TestApplyOne:
    def test_demo_sentence(self):
        result = apply_one("This are a demo text.", _s("This are", "This is"))
        assert result.applied is True
        assert result.document == "This is a demo text."
        assert result.span == Span(0, 8, result.span.strategy)

    def test_length_changes_by_replacement_delta(self, sample_document, sample_suggestions):
        for s in sample_suggestions:
            result = apply_one(sample_document, s)
            assert result.applied
            expected = len(sample_document) - len(s.original_text) + len(s.suggested_text)
            assert len(result.document) == expected

    def test_padded_original_replaced_in_full(self):
        doc = "This are a demo text."
        result = apply_one(doc, _s("This are ", "This is "))
        assert result.document == "This is a demo text."
        assert len(result.document) == len(doc) - len("This are ") + len("This is ")

    def test_length_delta_holds_for_padded_originals(self, sample_document):
        for original, suggested in [
            (" mistaks ", " mistakes "),
            ("the app work. ", "the app works. "),
            ("\nUsually,", "\nTypically,"),
        ]:
            result = apply_one(sample_document, _s(original, suggested))
            assert result.applied
            expected = len(sample_document) - len(original) + len(suggested)
            assert len(result.document) == expected

    def test_surrounding_text_untouched(self):
        doc = "Line one.\nThis are fine.\nLine three."
        result = apply_one(doc, _s("This are", "This is"))
        assert result.document == "Line one.\nThis is fine.\nLine three."

    def test_replaces_whitespace_drifted_span(self):
        doc = "Intro.\nThis are\na demo text."
        result = apply_one(doc, _s("This are a demo", "This is a demo"))
        assert result.applied
        assert result.document == "Intro.\nThis is a demo text."

    def test_context_replaces_only_second_occurrence(self):
        doc = "the cat sat. Later the cat ran."
        result = apply_one(doc, _s("the cat", "a dog", context="Later"))
        assert result.document == "the cat sat. Later a dog ran."

    def test_only_first_occurrence_without_context(self):
        result = apply_one("teh and teh", _s("teh", "the"))
        assert result.document == "the and teh"

    def test_not_found_is_noop(self):
        doc = "Nothing to fix."
        result = apply_one(doc, _s("missing", "present"))
        assert result.applied is False
        assert result.document is doc
        assert result.span is None

    def test_second_apply_is_noop(self):
        s = _s("This are", "This is")
        first = apply_one("This are a demo text.", s)
        second = apply_one(first.document, s)
        assert second.applied is False
        assert second.document == first.document

    def test_empty_original_is_noop(self):
        result = apply_one("text", _s("", "prefix "))
        assert result.applied is False
        assert result.document == "text"


class TestApplyAll:
    def test_applies_every_locatable_suggestion(self, sample_document, sample_suggestions):
        result = apply_all(sample_document, sample_suggestions)
        assert isinstance(result, BatchResult)
        assert result.applied_ids == {s.id for s in sample_suggestions}
        assert result.skipped_ids == frozenset()
        assert "This is a demo text" in result.document
        assert "the app works" in result.document
        assert "grammar mistakes" in result.document
        assert "when you write an email" in result.document
        assert "professionalism matters" in result.document

    def test_running_document_is_used(self):
        # The second suggestion only exists after the first one is applied.
        suggestions = [
            _s("colour", "color", id="a"),
            _s("color scheme", "palette", id="b"),
        ]
        result = apply_all("The colour scheme.", suggestions)
        assert result.document == "The palette."
        assert result.applied_ids == {"a", "b"}

    def test_overlapping_spans_first_wins(self):
        suggestions = [
            _s("This are", "This is", id="first"),
            _s("are a demo", "is a demo", id="second"),
        ]
        result = apply_all("This are a demo text.", suggestions)
        assert result.document == "This is a demo text."
        assert result.applied_ids == {"first"}
        assert result.skipped_ids == {"second"}

    def test_caller_order_is_respected(self):
        suggestions = [
            _s("are a demo", "is a demo", id="second"),
            _s("This are", "This is", id="first"),
        ]
        result = apply_all("This are a demo text.", suggestions)
        assert result.document == "This is a demo text."
        assert result.applied_ids == {"second"}
        assert result.skipped_ids == {"first"}

    def test_stale_suggestions_are_skipped(self):
        suggestions = [_s("gone", "x", id="stale"), _s("here", "there", id="ok")]
        result = apply_all("still here", suggestions)
        assert result.document == "still there"
        assert result.skipped_ids == {"stale"}

    def test_duplicate_suggestion_applied_once(self):
        suggestions = [_s("teh", "the", id="a"), _s("teh", "the", id="b")]
        result = apply_all("teh end", suggestions)
        assert result.document == "the end"
        assert result.applied_ids == {"a"}
        assert result.skipped_ids == {"b"}

    def test_empty_batch(self):
        result = apply_all("unchanged", [])
        assert result == BatchResult(document="unchanged")

    def test_input_list_not_mutated(self, sample_document, sample_suggestions):
        before = list(sample_suggestions)
        apply_all(sample_document, sample_suggestions)
        assert sample_suggestions == before
