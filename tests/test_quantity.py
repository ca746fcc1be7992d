"""Tests for quantity and unit extraction."""

import pytest

from checklister.quantity import canonical_unit, extract_quantity, parse_number


class TestParseNumber:
    """Tests for number parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2", 2.0),
            ("1.5", 1.5),
            ("3/4", 0.75),
            ("1 1/2", 1.5),
            ("½", 0.5),
            ("1½", 1.5),
        ],
    )
    def test_forms(self, text, expected):
        assert parse_number(text) == pytest.approx(expected)

    def test_zero_denominator(self):
        """Division by zero is rejected."""
        assert parse_number("1/0") is None

    def test_garbage(self):
        assert parse_number("abc") is None


class TestCanonicalUnit:
    """Tests for unit synonyms."""

    def test_synonyms(self):
        assert canonical_unit("Kilograms") == "kg"
        assert canonical_unit("tablespoons") == "tbsp"
        assert canonical_unit("bottle") == "pack"

    def test_unknown_passes_through(self):
        assert canonical_unit("Crate") == "crate"


class TestExtractQuantity:
    """Tests for pulling quantities out of item strings."""

    def test_number_with_verbose_unit(self):
        parsed = extract_quantity("2 kilograms rice")
        assert parsed.quantity == 2
        assert parsed.unit == "kg"
        assert parsed.display_notes == "rice"

    def test_glyph_fraction(self):
        parsed = extract_quantity("½ cup sugar")
        assert parsed.quantity == 0.5
        assert parsed.unit == "cup"
        assert parsed.display_notes == "sugar"

    def test_mixed_number(self):
        parsed = extract_quantity("1 1/2 kg flour")
        assert parsed.quantity == pytest.approx(1.5)
        assert parsed.unit == "kg"
        assert parsed.display_notes == "flour"

    def test_attached_unit(self):
        parsed = extract_quantity("500g sugar")
        assert parsed.quantity == 500
        assert parsed.unit == "g"

    def test_container_word_and_filler(self):
        """'of' after the unit is dropped."""
        parsed = extract_quantity("1 bag of rice")
        assert parsed.unit == "pack"
        assert parsed.display_notes == "rice"

    def test_bare_leading_number(self):
        parsed = extract_quantity("2 large eggs")
        assert parsed.quantity == 2
        assert parsed.unit == ""
        assert parsed.display_notes == "large eggs"

    def test_unit_must_be_whole_word(self):
        """'l' inside 'limes' is not a litre."""
        parsed = extract_quantity("2 limes")
        assert parsed.quantity == 2
        assert parsed.unit == ""
        assert parsed.display_notes == "limes"

    def test_parenthetical_count(self):
        parsed = extract_quantity("eggs (12)")
        assert parsed.quantity == 12
        assert parsed.display_notes == "eggs"

    def test_multiplier(self):
        assert extract_quantity("x3 eggs").quantity == 3
        assert extract_quantity("3x yogurt").quantity == 3

    def test_no_quantity(self):
        parsed = extract_quantity("milk")
        assert parsed.quantity == 1
        assert parsed.unit == ""
        assert parsed.display_notes == "milk"
