"""Propagation method: four masters drive a fixed per-letter rule table."""

import logging
from dataclasses import dataclass, fields
from typing import Optional, Tuple

from . import config
from . import models
from . import mutation
from . import settings as settings_mod
from . import tables

logger = logging.getLogger(__name__)

Font = models.Font
TracySettings = settings_mod.TracySettings
round_half_up = models.round_half_up


def _percent_of(value: int, percent: int) -> int:
    return round_half_up(value * percent / 100)


@dataclass(frozen=True)
class DerivedValues:
    """Closed-form values every propagation rule is expressed in."""

    # Uppercase, from H and O
    h: int
    h_rsb: int
    o: int
    o_rsb: int
    more_h: int
    less_h: int
    min_upper: int
    visual_upper: int
    # Lowercase, from n and o
    n_stem: int
    n_arch: int
    o_round: int
    o_round_rsb: int
    more_n: int
    less_o: int
    min_lower: int
    visual_lower: int

    @classmethod
    def from_settings(
        cls, settings: TracySettings, cfg: Optional[config.SpacingConfig] = None
    ) -> "DerivedValues":
        cfg = cfg or config.DEFAULT_CONFIG
        h = settings.H.lsb
        o = settings.O.lsb
        n_stem = settings.n.lsb
        o_round = settings.o.lsb
        return cls(
            h=h,
            h_rsb=settings.H.rsb,
            o=o,
            o_rsb=settings.O.rsb,
            more_h=_percent_of(h, config.MORE_PERCENT),
            less_h=_percent_of(h, config.LESS_PERCENT),
            min_upper=max(cfg.min_space, _percent_of(h, config.MIN_PERCENT)),
            visual_upper=round_half_up((h + o) / 2),
            n_stem=n_stem,
            n_arch=settings.n.rsb,
            o_round=o_round,
            o_round_rsb=settings.o.rsb,
            more_n=_percent_of(n_stem, config.MORE_PERCENT),
            less_o=_percent_of(o_round, config.LESS_ROUND_PERCENT),
            min_lower=max(cfg.min_space, _percent_of(n_stem, config.MIN_PERCENT)),
            visual_lower=round_half_up((n_stem + o_round) / 2),
        )

    def resolve(self, char: str) -> Tuple[int, int]:
        left, right = tables.PROPAGATION_RULES[char]
        return getattr(self, left), getattr(self, right)


RULE_SOURCES = frozenset(f.name for f in fields(DerivedValues))


def apply_propagation_method(
    font: Font,
    settings: TracySettings,
    cfg: Optional[config.SpacingConfig] = None,
) -> Font:
    """Apply the propagation method to a canonical font, in place.

    1. Masters H, O, n, o are set exactly and copied to their diacritics.
    2. Every other letter takes its rule from the table, then its diacritics.
    3. Overrides are applied last; a null side keeps the derived value.
    """
    values = DerivedValues.from_settings(settings, cfg)
    masters = set(settings.masters)

    for char in settings.masters:
        pair = settings.master(char)
        mutation.apply_with_diacritics(font, char, pair.lsb, pair.rsb)

    derived = 0
    for char in tables.PROPAGATION_RULES:
        if char in masters:
            continue
        lsb, rsb = values.resolve(char)
        derived += mutation.apply_with_diacritics(font, char, lsb, rsb)

    for char, override in settings.overrides.items():
        mutation.set_side_bearings(font, char, override.lsb, override.rsb)

    logger.info(
        "propagation method: %d derived glyphs, %d overrides",
        derived,
        len(settings.overrides),
    )
    return font
