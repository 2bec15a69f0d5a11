"""Static letter tables: topology classes, diacritic families, derivation rules."""

from enum import Enum
from typing import Dict, NamedTuple, Tuple


class Topology(str, Enum):
    STEM = "S"
    ROUND = "R"
    ARCH = "A"
    VISUAL = "V"


class TopologyEntry(NamedTuple):
    left: Topology
    right: Topology


S, R, A, V = Topology.STEM, Topology.ROUND, Topology.ARCH, Topology.VISUAL

TOPOLOGY: Dict[str, TopologyEntry] = {
    # Uppercase
    "A": TopologyEntry(V, V),
    "B": TopologyEntry(S, R),
    "C": TopologyEntry(R, S),
    "D": TopologyEntry(S, R),
    "E": TopologyEntry(S, S),
    "F": TopologyEntry(S, S),
    "G": TopologyEntry(R, S),
    "H": TopologyEntry(S, S),
    "I": TopologyEntry(S, S),
    "J": TopologyEntry(V, S),
    "K": TopologyEntry(S, V),
    "L": TopologyEntry(S, V),
    "M": TopologyEntry(S, S),
    "N": TopologyEntry(S, S),
    "O": TopologyEntry(R, R),
    "P": TopologyEntry(S, R),
    "Q": TopologyEntry(R, R),
    "R": TopologyEntry(S, V),
    "S": TopologyEntry(V, V),
    "T": TopologyEntry(V, V),
    "U": TopologyEntry(S, S),
    "V": TopologyEntry(V, V),
    "W": TopologyEntry(V, V),
    "X": TopologyEntry(V, V),
    "Y": TopologyEntry(V, V),
    "Z": TopologyEntry(V, V),
    # Lowercase
    "a": TopologyEntry(R, S),
    "b": TopologyEntry(S, R),
    "c": TopologyEntry(R, R),
    "d": TopologyEntry(R, S),
    "e": TopologyEntry(R, R),
    "f": TopologyEntry(V, V),
    "g": TopologyEntry(R, S),
    "h": TopologyEntry(S, A),
    "i": TopologyEntry(S, S),
    "j": TopologyEntry(S, S),
    "k": TopologyEntry(S, V),
    "l": TopologyEntry(S, S),
    "m": TopologyEntry(S, A),
    "n": TopologyEntry(S, A),
    "o": TopologyEntry(R, R),
    "p": TopologyEntry(S, R),
    "q": TopologyEntry(R, S),
    "r": TopologyEntry(S, V),
    "s": TopologyEntry(V, V),
    "t": TopologyEntry(S, V),
    "u": TopologyEntry(S, S),
    "v": TopologyEntry(V, V),
    "w": TopologyEntry(V, V),
    "x": TopologyEntry(V, V),
    "y": TopologyEntry(V, V),
    "z": TopologyEntry(V, V),
}

# Base letter -> accented variants that inherit its spacing
DIACRITICS: Dict[str, Tuple[str, ...]] = {
    "A": tuple("ÁÀÂÄÃÅĀĂĄǍǺ"),
    "B": tuple("ḂḄ"),
    "C": tuple("ÇĆĈĊČ"),
    "D": tuple("ĎĐḌḊḐ"),
    "E": tuple("ÉÈÊËĒĔĖĘĚ"),
    "F": tuple("Ḟ"),
    "G": tuple("ĜĞĠĢǦ"),
    "H": tuple("ĤĦḢḤ"),
    "I": tuple("ÍÌÎÏĨĪĬĮİ"),
    "J": tuple("Ĵ"),
    "K": tuple("ĶǨḰḲ"),
    "L": tuple("ĹĻĽĿŁḶḸ"),
    "M": tuple("ḾṀṂ"),
    "N": tuple("ÑŃŅŇṄṆ"),
    "O": tuple("ÓÒÔÖÕØŌŎŐǑǾ"),
    "P": tuple("ṔṖ"),
    "Q": (),
    "R": tuple("ŔŖŘṘṚ"),
    "S": tuple("ŚŜŞŠȘṠṢ"),
    "T": tuple("ŢŤŦȚṪṬ"),
    "U": tuple("ÚÙÛÜŨŪŬŮŰŲǓǕǗǙǛ"),
    "V": tuple("ṼṾ"),
    "W": tuple("ŴẀẂẄ"),
    "X": tuple("ẊẌ"),
    "Y": tuple("ÝŶŸȲẎỲ"),
    "Z": tuple("ŹŻŽẒ"),
    "a": tuple("áàâäãåāăąǎǻ"),
    "b": tuple("ḃḅ"),
    "c": tuple("çćĉċč"),
    "d": tuple("ďđḍḋḑ"),
    "e": tuple("éèêëēĕėęě"),
    "f": tuple("ḟ"),
    "g": tuple("ĝğġģǧ"),
    "h": tuple("ĥħḣḥ"),
    "i": tuple("íìîïĩīĭįı"),
    "j": tuple("ĵ"),
    "k": tuple("ķǩḱḳ"),
    "l": tuple("ĺļľŀłḷḹ"),
    "m": tuple("ḿṁṃ"),
    "n": tuple("ñńņňṅṇ"),
    "o": tuple("óòôöõøōŏőǒǿ"),
    "p": tuple("ṕṗ"),
    "q": (),
    "r": tuple("ŕŗřṙṛ"),
    "s": tuple("śŝşšșṡṣ"),
    "t": tuple("ţťŧțṫṭ"),
    "u": tuple("úùûüũūŭůűųǔǖǘǚǜ"),
    "v": tuple("ṽṿ"),
    "w": tuple("ŵẁẃẅ"),
    "x": tuple("ẋẍ"),
    "y": tuple("ýÿŷȳẏỳ"),
    "z": tuple("źżžẓ"),
}

# Propagation method: letter -> (lsb source, rsb source), each naming a field
# of propagation.DerivedValues. Asymmetric entries (G, U) are deliberate.
PROPAGATION_RULES: Dict[str, Tuple[str, str]] = {
    # Uppercase, driven by H and O
    "A": ("min_upper", "min_upper"),
    "B": ("h", "less_h"),
    "C": ("o", "less_h"),
    "D": ("h", "o"),
    "E": ("h", "less_h"),
    "F": ("h", "less_h"),
    "G": ("o", "more_h"),
    "H": ("h", "h_rsb"),
    "I": ("h", "h"),
    "J": ("min_upper", "h"),
    "K": ("h", "min_upper"),
    "L": ("h", "min_upper"),
    "M": ("more_h", "more_h"),
    "N": ("more_h", "more_h"),
    "O": ("o", "o_rsb"),
    "P": ("h", "o"),
    "Q": ("o", "o"),
    "R": ("h", "min_upper"),
    "S": ("visual_upper", "visual_upper"),
    "T": ("min_upper", "min_upper"),
    "U": ("h", "more_h"),
    "V": ("min_upper", "min_upper"),
    "W": ("min_upper", "min_upper"),
    "X": ("min_upper", "min_upper"),
    "Y": ("min_upper", "min_upper"),
    "Z": ("less_h", "less_h"),
    # Lowercase, driven by n and o
    "a": ("o_round", "n_stem"),
    "b": ("n_stem", "o_round"),
    "c": ("o_round", "less_o"),
    "d": ("o_round", "n_stem"),
    "e": ("o_round", "less_o"),
    "f": ("min_lower", "min_lower"),
    "g": ("o_round", "n_stem"),
    "h": ("more_n", "n_arch"),
    "i": ("more_n", "n_stem"),
    "j": ("n_stem", "n_stem"),
    "k": ("n_stem", "min_lower"),
    "l": ("more_n", "n_stem"),
    "m": ("n_stem", "n_arch"),
    "n": ("n_stem", "n_arch"),
    "o": ("o_round", "o_round_rsb"),
    "p": ("more_n", "o_round"),
    "q": ("o_round", "n_stem"),
    "r": ("n_stem", "min_lower"),
    "s": ("less_o", "less_o"),
    "t": ("n_stem", "min_lower"),
    "u": ("n_stem", "n_stem"),
    "v": ("min_lower", "min_lower"),
    "w": ("min_lower", "min_lower"),
    "x": ("visual_lower", "visual_lower"),
    "y": ("min_lower", "min_lower"),
    "z": ("visual_lower", "visual_lower"),
}

# Letters derived with a clamped minimum on both sides
MIN_SPACE_LETTERS: Tuple[str, ...] = tuple(
    ch
    for ch, (left, right) in PROPAGATION_RULES.items()
    if left.startswith("min_") and right.startswith("min_")
)


def diacritics_for(char: str) -> Tuple[str, ...]:
    return DIACRITICS.get(char, ())


def base_letter(char: str):
    """The base letter whose spacing ``char`` inherits, or None."""
    for base, variants in DIACRITICS.items():
        if char in variants:
            return base
    return None
