"""Configuration constants and dataclasses for side-bearing computation."""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


# --- Probe glyphs for visual metrics ---
ASCENDER_PROBE_CHARS: Tuple[str, ...] = ("d", "h", "l", "b", "k", "H")
DESCENDER_PROBE_CHARS: Tuple[str, ...] = ("p", "q", "y", "g")
CAP_HEIGHT_CHAR: str = "H"
X_HEIGHT_CHAR: str = "x"

SPACE_GLYPH_NAME: str = "space"
SPACE_CODEPOINT: int = 0x0020

UPPERCASE_LETTERS: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE_LETTERS: str = "abcdefghijklmnopqrstuvwxyz"
DIGITS: str = "0123456789"
LATIN_LETTERS: str = UPPERCASE_LETTERS + LOWERCASE_LETTERS

# Master glyphs, in the order the propagation method applies them
PROPAGATION_MASTERS: Tuple[str, ...] = ("H", "O", "n", "o")
TOPOLOGY_MASTERS: Tuple[str, ...] = ("n", "o", "H", "O")

# Propagation-method ratios, in percent of the master value. Integer percents
# keep 50 * 115% at exactly 57.5 so it rounds up.
MORE_PERCENT: int = 115  # M, N, U, G, h, i, l, p
LESS_PERCENT: int = 85  # open/curved uppercase
LESS_ROUND_PERCENT: int = 90  # c, e, s
MIN_PERCENT: int = 25  # min-space letters
VISUAL_PERCENT: int = 50  # topology-method Visual class

# Harmonic estimator: glyphs whose counters read as round
ROUND_GLYPHS: FrozenSet[str] = frozenset({"O", "o", "Q", "C", "G", "e", "c", "0"})


@dataclass
class SpacingConfig:
    """Tunables shared by the engines and the harmonic estimator."""

    fallback_upm: int = 1000  # used when head.unitsPerEm <= 0
    min_space: int = 5  # floor for "min-space" derivations
    # Layout tables whose values go stale once ink is moved
    stale_tables: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"kern", "GPOS"})
    )

    # Harmonic estimator
    base_stem_ratio: float = 0.16  # stem thickness as fraction of ink height
    weight_exponent: float = 0.7
    default_weight_class: int = 400
    counter_floor_ratio: float = 0.15  # counter never below 15% of ink width
    upper_rhythm_ratio: float = 0.40  # uppercase and non-letters
    lower_rhythm_ratio: float = 0.32
    round_factor: float = 0.65
    min_harmonic: int = 10
    missing_glyph_spacing: int = 40


DEFAULT_CONFIG = SpacingConfig()
