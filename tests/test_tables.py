import unicodedata

from sidebearings import config
from sidebearings import propagation
from sidebearings import tables


def test_every_letter_has_a_topology_entry():
    assert set(tables.TOPOLOGY) == set(config.LATIN_LETTERS)
    assert len(tables.TOPOLOGY) == 52


def test_every_letter_has_exactly_one_propagation_rule():
    assert set(tables.PROPAGATION_RULES) == set(config.LATIN_LETTERS)


def test_propagation_rules_name_derived_values():
    for char, (left, right) in tables.PROPAGATION_RULES.items():
        assert left in propagation.RULE_SOURCES, char
        assert right in propagation.RULE_SOURCES, char


def test_case_of_rule_sources_matches_letter_case():
    upper_sources = {"h", "h_rsb", "o", "o_rsb", "more_h", "less_h", "min_upper", "visual_upper"}
    for char, sides in tables.PROPAGATION_RULES.items():
        for source in sides:
            assert (source in upper_sources) == char.isupper(), (char, source)


def test_arch_class_only_on_lowercase_right_edges():
    for char, entry in tables.TOPOLOGY.items():
        assert entry.left is not tables.Topology.ARCH
        if entry.right is tables.Topology.ARCH:
            assert char in "hmn"


def test_diacritics_are_single_precomposed_characters():
    seen = set()
    assert set(tables.DIACRITICS) == set(config.LATIN_LETTERS)
    for base, variants in tables.DIACRITICS.items():
        for variant in variants:
            assert len(variant) == 1
            assert unicodedata.normalize("NFC", variant) == variant
            assert variant not in seen
            seen.add(variant)


def test_base_letter_lookup():
    assert tables.base_letter("Á") == "A"
    assert tables.base_letter("ǜ") == "u"
    assert tables.base_letter("A") is None
    assert tables.diacritics_for("Q") == ()


def test_min_space_letters():
    assert set(tables.MIN_SPACE_LETTERS) == set("ATVWXYfvwy")
