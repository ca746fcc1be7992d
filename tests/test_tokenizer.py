"""Tests for line tokenization."""

from checklister.tokenizer import extract_urls, normalize_name, tokenize


class TestTokenize:
    """Tests for splitting list text into items."""

    def test_clean_lines_unchanged(self):
        """Already-clean lines come back as-is, in order."""
        assert tokenize("milk\nbread\neggs") == ["milk", "bread", "eggs"]

    def test_strips_bullets(self):
        """List markers are removed."""
        assert tokenize("1. apples\n- bananas\n* carrots") == ["apples", "bananas", "carrots"]

    def test_paren_numbering(self):
        """Numbered markers like '2)' are removed."""
        assert tokenize("1) rice\n2) dal") == ["rice", "dal"]

    def test_commas_and_semicolons(self):
        """Commas and semicolons separate items too."""
        assert tokenize("milk, bread; eggs") == ["milk", "bread", "eggs"]

    def test_windows_newlines(self):
        """CRLF line endings are handled."""
        assert tokenize("milk\r\nbread") == ["milk", "bread"]

    def test_drops_blank_and_symbol_only_lines(self):
        """Lines with only markers or whitespace disappear."""
        assert tokenize("milk\n\n   \n---\n12.\nbread") == ["milk", "bread"]

    def test_empty_input(self):
        """Empty text yields no items."""
        assert tokenize("") == []

    def test_inner_text_preserved(self):
        """Only the leading marker is stripped."""
        assert tokenize("- peanut butter - crunchy") == ["peanut butter - crunchy"]

    def test_deterministic(self):
        """Same input, same output."""
        text = "1. apples\nmilk, bread"
        assert tokenize(text) == tokenize(text)


class TestExtractUrls:
    """Tests for URL extraction."""

    def test_extracts_urls(self):
        """URLs are pulled out and the rest is returned."""
        urls, rest = extract_urls("https://example.com/recipe milk\nbread")
        assert urls == ["https://example.com/recipe"]
        assert tokenize(rest) == ["milk", "bread"]

    def test_no_urls(self):
        """Plain text passes through."""
        urls, rest = extract_urls("milk")
        assert urls == []
        assert rest == "milk"

    def test_only_url(self):
        """A lone URL leaves no remaining text."""
        urls, rest = extract_urls("  http://example.com/a  ")
        assert urls == ["http://example.com/a"]
        assert rest == ""


class TestNormalizeName:
    """Tests for the identity key."""

    def test_case_and_whitespace(self):
        assert normalize_name("  Apples  ") == "apples"
        assert normalize_name("Peanut   Butter") == "peanut butter"
