"""Tests for text normalization."""

import pytest

from interview_rag.modules.ingestion.normalizer import normalize_text


class TestNormalizeText:
    """Test suite for normalize_text."""

    def test_collapses_whitespace_runs(self):
        assert normalize_text("User   research\t\tmatters") == "User research matters"

    def test_newlines_become_single_spaces(self):
        """Paragraph breaks do not survive: every whitespace run turns into one space."""
        assert normalize_text("First paragraph.\n\n\n\nSecond paragraph.") == "First paragraph. Second paragraph."

    def test_trims_surrounding_whitespace(self):
        assert normalize_text("  \n Heuristics \n ") == "Heuristics"

    def test_removes_disallowed_characters(self):
        assert normalize_text("Design • thinking → “empathy” & #ideation") == "Design  thinking  empathy  ideation"

    def test_keeps_allowed_punctuation(self):
        text = "Ask why (five times): users, goals; pain-points? Yes! Done."
        assert normalize_text(text) == text

    def test_removes_space_before_punctuation(self):
        assert normalize_text("Wireframes , prototypes ; tests !") == "Wireframes, prototypes; tests!"

    def test_space_before_punctuation_left_by_removed_character(self):
        assert normalize_text("Card sorting * .") == "Card sorting."

    def test_keeps_unicode_letters(self):
        assert normalize_text("Café usability naïve") == "Café usability naïve"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t\n", "★☆"])
    def test_blank_or_symbol_only_input(self, text):
        assert normalize_text(text) == ""

    def test_is_idempotent_on_clean_text(self):
        once = normalize_text("Journey maps,   personas  and\nstoryboards .")
        assert normalize_text(once) == once
