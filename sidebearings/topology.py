"""Topology method: each letter edge matches the master of its stroke class."""

import logging
from typing import Optional

from . import config
from . import models
from . import mutation
from . import settings as settings_mod
from . import tables

logger = logging.getLogger(__name__)

Font = models.Font
SousaSettings = settings_mod.SousaSettings
Topology = tables.Topology
round_half_up = models.round_half_up


def topology_value(char: str, topology: Topology, settings: SousaSettings) -> int:
    """Side bearing for one edge of ``char`` given its topology class.

    Uppercase letters read the H/O masters, everything else n/o.
    """
    if char.isupper():
        stem, round_ = settings.H, settings.O
    else:
        stem, round_ = settings.n, settings.o
    if topology is Topology.STEM:
        return stem.lsb
    if topology is Topology.ROUND:
        return round_.lsb
    if topology is Topology.ARCH:
        return stem.rsb
    return round_half_up(stem.lsb * config.VISUAL_PERCENT / 100)


def apply_topology_method(font: Font, settings: SousaSettings) -> Font:
    """Apply the topology method to a canonical font, in place.

    Letters (and their diacritics) take values by topology class; overrides
    are applied next, then each master not overridden is re-set exactly.
    The settings' groups are not consulted.
    """
    derived = 0
    for char, entry in tables.TOPOLOGY.items():
        lsb = topology_value(char, entry.left, settings)
        rsb = topology_value(char, entry.right, settings)
        derived += mutation.apply_with_diacritics(font, char, lsb, rsb)

    for char, override in settings.overrides.items():
        mutation.set_side_bearings(font, char, override.lsb, override.rsb)

    for char in settings.masters:
        if char in settings.overrides:
            continue
        pair = settings.master(char)
        mutation.set_side_bearings(font, char, pair.lsb, pair.rsb)

    logger.info(
        "topology method: %d derived glyphs, %d overrides",
        derived,
        len(settings.overrides),
    )
    return font
