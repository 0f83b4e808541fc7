"""
Unit tests for Keyword Expansion Service.

Tests:
1. Noise stripping (quantities, packaging prefixes)
2. Phrase expansion from the table
3. Fuzzy expansion (typos)
4. Determinism and table building
"""

import pytest

from config.keyword_expansions import KEYWORD_EXPANSIONS, NOISE_PREFIXES
from models.quote import RequestedItem
from services.keyword_expansion_service import (
    KeywordExpansionService,
    KeywordExpansionTable,
    fuzzy_tolerance,
)
from utils.text_utils import normalize_text


# ===================
# TEST 1: NOISE STRIPPING
# ===================

class TestStripNoise:
    """Tests for KeywordExpansionService.strip_noise."""

    @pytest.mark.parametrize("raw,expected", [
        ("2 birome", "birome"),
        ("x2 plasticola", "plasticola"),
        ("3 unidades goma eva", "goma eva"),
        ("paquete de fibras", "fibras"),
        ("2 paquete de fibras", "fibras"),
        ("caja de 12 lapices", "lapices"),
        ("box of crayons", "crayons"),
    ])
    def test_strips_leading_noise(self, expansion_service, raw, expected):
        """Leading quantities and packaging prefixes are removed repeatedly."""
        assert expansion_service.strip_noise(raw) == expected

    def test_keeps_inner_numbers(self, expansion_service):
        """Numbers after the product word are not noise."""
        assert expansion_service.strip_noise("regla 30 cm") == "regla 30 cm"

    def test_prefix_only_becomes_empty(self, expansion_service):
        """An item that is only noise leaves nothing."""
        assert expansion_service.strip_noise("caja de") == ""


# ===================
# TEST 2: PHRASE EXPANSION
# ===================

class TestExpandText:
    """Tests for KeywordExpansionService.expand_text."""

    def test_item_words_are_keywords(self, expansion_service):
        """Words of 3+ characters become keywords."""
        keywords = expansion_service.expand_text("regla de 30 cm")
        assert "regla" in keywords
        assert "de" not in keywords
        assert "cm" not in keywords

    def test_table_hit_adds_targets(self, expansion_service):
        """A table key inside the item adds its catalog vocabulary."""
        keywords = expansion_service.expand_text("2 birome azul")
        assert "birome" in keywords
        assert "boligrafo" in keywords
        assert "azul" in keywords

    def test_phrase_key_matches(self, expansion_service):
        """Multi-word keys match as phrases."""
        keywords = expansion_service.expand_text("goma eva con brillo")
        assert "goma eva" in keywords

    def test_noise_words_not_keywords(self, expansion_service):
        """Packaging words stripped as noise do not become keywords."""
        keywords = expansion_service.expand_text("paquete de fibras")
        assert "paquete" not in keywords
        assert "marcadores" in keywords

    def test_accents_ignored(self, expansion_service):
        """'Birome' with capital and accents still hits the table."""
        keywords = expansion_service.expand_text("BIRÓME")
        assert "boligrafo" in keywords


# ===================
# TEST 3: FUZZY EXPANSION
# ===================

class TestFuzzyExpansion:
    """Tests for typo tolerance."""

    @pytest.mark.parametrize("key,expected", [
        ("goma", 1),
        ("birome", 2),
        ("fibras", 2),
        ("plasticola", 3),
    ])
    def test_tolerance_by_length(self, key, expected):
        """Tolerance grows with key length."""
        assert fuzzy_tolerance(key) == expected

    def test_misspelling_hits_key(self, expansion_service):
        """'plasticora' is within distance 3 of 'plasticola'."""
        keywords = expansion_service.expand_text("plasticora")
        assert "plasticola" in keywords
        assert "adhesivo vinilico" in keywords

    def test_short_key_typo(self, expansion_service):
        """'virome' is one edit from 'birome'."""
        keywords = expansion_service.expand_text("virome")
        assert "boligrafo" in keywords

    def test_unrelated_word_no_hit(self, expansion_service):
        """A word far from every key adds nothing from the table."""
        keywords = expansion_service.expand_text("calculadora")
        assert keywords == {"calculadora"}


# ===================
# TEST 4: DETERMINISM & TABLE
# ===================

class TestExpandKeywords:
    """Tests for expand_keywords and the table."""

    def test_union_across_items(self, expansion_service):
        """Keywords from all items are combined."""
        items = [RequestedItem(item="birome"), RequestedItem(item="plasticola")]
        keywords = expansion_service.expand_keywords(items)
        assert {"boligrafo", "adhesivo vinilico"} <= keywords

    def test_deterministic(self, expansion_service):
        """Same items, same keywords."""
        items = [RequestedItem(item="2 fibras"), RequestedItem(item="goma eva")]
        assert expansion_service.expand_keywords(items) == expansion_service.expand_keywords(items)

    def test_empty_list(self, expansion_service):
        """No items, no keywords."""
        assert expansion_service.expand_keywords([]) == frozenset()

    def test_build_normalizes_and_merges(self):
        """Keys are normalized; duplicates after normalization merge targets."""
        table = KeywordExpansionTable.build(
            {"Birome": ("Bolígrafo",), "birome": ("lapicera",)},
            noise_prefixes=("Caja de", "un")
        )
        assert table.expansions == {"birome": ("boligrafo", "lapicera")}
        assert table.noise_prefixes == ("caja de", "un")

    def test_default_table_is_normalized(self):
        """Config table keys and targets are already in normalized form."""
        for key, targets in KEYWORD_EXPANSIONS.items():
            assert normalize_text(key) == key
            for target in targets:
                assert normalize_text(target) == target
        for prefix in NOISE_PREFIXES:
            assert normalize_text(prefix) == prefix
