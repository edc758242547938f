"""Tests for plain-text helpers."""

from proofline.utils.text import (
    literal_pattern,
    normalize_text,
    matches_snapshot,
    sentences,
    strip_markup,
    word_count,
)


class TestNormalize:
    def test_block_tags_separate_words(self):
        assert normalize_text("<p>one</p><p>two</p>") == "one two"

    def test_inline_tags_removed(self):
        assert strip_markup("a <b>bold</b> word") == "a bold word"

    def test_entities_decoded(self):
        assert normalize_text("Tom &amp; Jerry&nbsp;here") == "Tom & Jerry here"

    def test_whitespace_collapsed(self):
        assert normalize_text("  a \n\t b  ") == "a b"

    def test_matches_snapshot(self):
        assert matches_snapshot("<p>teh   cat</p>", "teh cat")
        assert not matches_snapshot("teh cat", "the cat")

    def test_snapshot_is_not_unescaped_again(self):
        assert matches_snapshot("<p>x &lt;y&gt; &amp;lt; w</p>", "x <y> &lt;  w")

    def test_word_count(self):
        assert word_count("<p>one two</p><p>three</p>") == 3
        assert word_count("") == 0


class TestSentences:
    def test_split(self):
        assert sentences("One. Two! Three? ") == ["One", "Two", "Three"]

    def test_repeated_punctuation(self):
        assert sentences("Wait... what?!") == ["Wait", "what"]


class TestLiteralPattern:
    def test_escapes_metacharacters(self):
        assert literal_pattern("a.b").search("axb") is None
        assert literal_pattern("a.b").search("a.b")

    def test_word_bounded(self):
        pattern = literal_pattern("cat", word_bounded=True)
        assert pattern.search("concatenate") is None
        assert pattern.search("a cat.")

    def test_flexible_whitespace(self):
        pattern = literal_pattern("very big", ignore_case=True, flexible_whitespace=True)
        assert pattern.search("VERY\n   big")

    def test_word_bounded_non_word_edges(self):
        pattern = literal_pattern("$5", word_bounded=True)
        assert pattern.search("costs $5 now")
