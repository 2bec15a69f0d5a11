"""Sanity checks for spacing settings against a font."""

from collections import Counter
from typing import List, Optional

from . import models
from . import settings as settings_mod
from . import tables

Font = models.Font

# A side bearing above this fraction of the em is almost certainly a typo
_MAX_SIDE_BEARING_RATIO = 0.5


def validate_settings(
    settings: settings_mod.Settings, font: Optional[Font] = None
) -> List[str]:
    """Return human-readable warnings; nothing here is fatal."""
    warnings: List[str] = []
    upm = font.units_per_em if font is not None else None

    for char in settings.masters:
        pair = settings.master(char)
        for side, value in (("lsb", pair.lsb), ("rsb", pair.rsb)):
            if value < 0:
                warnings.append(f"master {char} {side}={value} is negative")
            elif upm and value > upm * _MAX_SIDE_BEARING_RATIO:
                warnings.append(
                    f"master {char} {side}={value} exceeds half the em ({upm})"
                )
        if font is not None and font.glyph_for_char(char) is None:
            warnings.append(f"master {char} is missing from the font")

    for char, override in settings.overrides.items():
        if override.lsb is None and override.rsb is None:
            warnings.append(f"override {char} sets neither side (no effect)")
        if font is not None and font.glyph_for_char(char) is None:
            warnings.append(f"override {char} has no glyph in the font (skipped)")

    if isinstance(settings, settings_mod.SousaSettings):
        groups = settings.groups.as_dict()
        counts = Counter(ch for members in groups.values() for ch in members)
        repeated = sorted(ch for ch, n in counts.items() if n > 1)
        if repeated:
            warnings.append(f"characters in more than one group: {''.join(repeated)}")
        untyped = sorted(ch for ch in counts if ch not in tables.TOPOLOGY)
        if untyped:
            warnings.append(
                f"grouped characters without a topology entry: {''.join(untyped)}"
            )
    return warnings
