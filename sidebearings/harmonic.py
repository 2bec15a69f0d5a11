"""Harmonic spacing estimate and proofing helpers for single characters."""

import random
from typing import Dict, List, Optional, Sequence

from . import config
from . import models
from . import settings as settings_mod

Font = models.Font
SideBearingPair = models.SideBearingPair
round_half_up = models.round_half_up


def estimate_balanced_spacing(
    font: Font, char: str, cfg: Optional[config.SpacingConfig] = None
) -> int:
    """Suggest one balanced (lsb == rsb) value for ``char`` from its ink.

    Stem thickness is estimated from ink height and weight class; the
    side bearing is a rhythm fraction of the remaining inner counter, reduced
    for round glyphs. Never below ``cfg.min_harmonic``. Pure: the font is not
    touched.
    """
    cfg = cfg or config.DEFAULT_CONFIG
    glyph = font.glyph_for_char(char)
    if glyph is None:
        return cfg.missing_glyph_spacing

    b = glyph.bounds() if glyph.has_outline else None
    width = b.width if b else 0.0
    height = b.height if b else 0.0

    weight_class = font.weight_class or cfg.default_weight_class
    weight_factor = weight_class / 400
    stem = height * (cfg.base_stem_ratio * weight_factor**cfg.weight_exponent)
    counter = max(width * cfg.counter_floor_ratio, width - 2 * stem)

    rhythm = cfg.lower_rhythm_ratio if char.islower() else cfg.upper_rhythm_ratio
    target = counter * rhythm
    if char in config.ROUND_GLYPHS:
        target *= cfg.round_factor

    return max(cfg.min_harmonic, round_half_up(target))


def suggest_master_pairs(
    font: Font, masters: Sequence[str] = config.TOPOLOGY_MASTERS
) -> Dict[str, SideBearingPair]:
    """Seed each master with its balanced estimate on both sides."""
    suggestions = {}
    for char in masters:
        value = estimate_balanced_spacing(font, char)
        suggestions[char] = SideBearingPair(value, value)
    return suggestions


def proof_strings(
    char: str,
    groups: Optional[settings_mod.SousaGroups] = None,
    seed: int = 0,
) -> List[str]:
    """Context strings for judging the spacing of one character.

    Uppercase letters are framed by H and O, everything else (lowercase,
    digits, punctuation) by n and o. With topology groups, a third string
    surrounds ``char`` with members of the matching first group.
    """
    upper = char.isupper()
    if upper:
        stem, round_ = "H", "O"
    else:
        stem, round_ = "n", "o"
    lines = [f"{stem * 2}{char}{stem * 2}", f"{round_ * 2}{char}{round_ * 2}"]
    if groups is not None:
        context = groups.upper_group1 if upper else groups.group1
        if not context:
            context = [stem, round_]
        rng = random.Random(seed)
        lines.append(f"{rng.choice(context)}{char}{rng.choice(context)}")
    return lines


def group_label(char: str, groups: settings_mod.SousaGroups) -> str:
    """Name of the topology-method group that lists ``char``."""
    for key, label in settings_mod.SousaGroups.LABELS.items():
        if char in getattr(groups, key):
            return label
    return "Ungrouped (Visual Fallback)"


def partial_to_full(
    override: SideBearingPair, current: SideBearingPair
) -> models.FullOverride:
    """Fill the null side of an override from the currently applied value."""
    return models.FullOverride(
        override.lsb if override.lsb is not None else current.lsb,
        override.rsb if override.rsb is not None else current.rsb,
    )
