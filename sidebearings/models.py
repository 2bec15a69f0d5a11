"""Glyph, font and side-bearing data models."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Optional, Set, Tuple

from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.recordingPen import replayRecording

from . import config

logger = logging.getLogger(__name__)

# Recorded pen operations: [("moveTo", ((x, y),)), ("qCurveTo", ((x, y), None)), ...]
Command = Tuple[str, Tuple]


class SettingsError(ValueError):
    """Raised when spacing settings are structurally invalid."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (57.5 -> 58)."""
    return int(math.floor(value + 0.5))


class BoundingBox(NamedTuple):
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min


@dataclass(frozen=True)
class SideBearingPair:
    """Left/right side bearings; ``None`` on a side means "derive from rule"."""

    lsb: Optional[int] = None
    rsb: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.lsb is not None and self.rsb is not None

    def as_tuple(self) -> Tuple[Optional[int], Optional[int]]:
        return (self.lsb, self.rsb)


@dataclass(frozen=True)
class PartialOverride(SideBearingPair):
    """Propagation-method override; a null side keeps its derived value."""


@dataclass(frozen=True)
class FullOverride(SideBearingPair):
    """Topology-method override; both sides are always concrete."""

    def __post_init__(self):
        if self.lsb is None or self.rsb is None:
            raise SettingsError(
                f"full override needs both sides, got lsb={self.lsb} rsb={self.rsb}"
            )


@dataclass(frozen=True)
class VisualMetrics:
    ascender: int
    descender: int
    cap_height: int
    x_height: int


def _shift_point(point, dx: float):
    # qCurveTo may end in None (implied on-curve point)
    if point is None:
        return None
    return (point[0] + dx, point[1])


class Glyph:
    """A glyph outline as recorded pen commands plus its horizontal metrics."""

    def __init__(
        self,
        name: str,
        codepoint: Optional[int] = None,
        commands: Optional[List[Command]] = None,
        advance_width: float = 0,
        lsb: float = 0,
    ):
        self.name = name
        self.codepoint = codepoint
        self.commands: List[Command] = list(commands or [])
        self.advance_width = advance_width
        self.lsb = lsb  # stored left side bearing (hmtx)
        self._bounds: Optional[BoundingBox] = None
        self._bounds_dirty = True

    def __repr__(self) -> str:
        return (
            f"Glyph({self.name!r}, codepoint={self.codepoint}, "
            f"advance_width={self.advance_width})"
        )

    @property
    def has_outline(self) -> bool:
        return bool(self.commands)

    @property
    def is_space(self) -> bool:
        return (
            self.name == config.SPACE_GLYPH_NAME
            or self.codepoint == config.SPACE_CODEPOINT
        )

    def bounds(self) -> Optional[BoundingBox]:
        """Ink bounding box, or None for a glyph without ink."""
        if self._bounds_dirty:
            self._bounds = self._compute_bounds()
            self._bounds_dirty = False
        return self._bounds

    def _compute_bounds(self) -> Optional[BoundingBox]:
        if not self.commands:
            return None
        pen = BoundsPen(None)
        replayRecording(self.commands, pen)
        if pen.bounds is None:
            return None
        xMin, yMin, xMax, yMax = pen.bounds
        return BoundingBox(float(xMin), float(yMin), float(xMax), float(yMax))

    def invalidate_bounds(self) -> None:
        self._bounds_dirty = True

    def translate(self, dx: float) -> None:
        """Shift every outline coordinate horizontally by ``dx``."""
        if not dx:
            return
        self.commands = [
            (op, tuple(_shift_point(pt, dx) for pt in args))
            for op, args in self.commands
        ]
        self.invalidate_bounds()

    def copy(self) -> "Glyph":
        clone = Glyph(
            self.name,
            codepoint=self.codepoint,
            commands=list(self.commands),
            advance_width=self.advance_width,
            lsb=self.lsb,
        )
        clone._bounds = self._bounds
        clone._bounds_dirty = self._bounds_dirty
        return clone


class Font:
    """Ordered glyph set plus the scalar metrics the engines read."""

    def __init__(
        self,
        glyphs: Iterable[Glyph],
        units_per_em: int = 1000,
        ascender: int = 0,
        descender: int = 0,
        weight_class: Optional[int] = None,
        cmap: Optional[Dict[int, str]] = None,
        tables: Optional[Iterable[str]] = None,
        source_data: Optional[bytes] = None,
    ):
        self.glyphs: Dict[str, Glyph] = {g.name: g for g in glyphs}
        self.declared_upm = units_per_em
        if units_per_em is None or units_per_em <= 0:
            logger.warning(
                "unitsPerEm %s is invalid; using %d",
                units_per_em,
                config.DEFAULT_CONFIG.fallback_upm,
            )
        self.ascender = ascender  # container-declared, used as fallback only
        self.descender = descender
        self.weight_class = weight_class
        self.tables: Set[str] = set(tables or ())
        self.source_data = source_data
        if cmap is None:
            cmap = {
                g.codepoint: g.name
                for g in self.glyphs.values()
                if g.codepoint is not None
            }
        self.cmap: Dict[int, str] = dict(cmap)

    def __len__(self) -> int:
        return len(self.glyphs)

    def __iter__(self):
        return iter(self.glyphs.values())

    @property
    def units_per_em(self) -> int:
        if self.declared_upm is None or self.declared_upm <= 0:
            return config.DEFAULT_CONFIG.fallback_upm
        return int(self.declared_upm)

    def glyph_for_char(self, char: str) -> Optional[Glyph]:
        if not char:
            return None
        name = self.cmap.get(ord(char[0]))
        if name is None:
            return None
        return self.glyphs.get(name)

    def mapped_chars(self) -> List[Tuple[int, str]]:
        """(codepoint, character) for every cmap entry, sorted by codepoint."""
        return [(cp, chr(cp)) for cp in sorted(self.cmap)]

    def copy(self) -> "Font":
        """Independent copy for one derivation attempt."""
        clone = Font(
            [g.copy() for g in self.glyphs.values()],
            units_per_em=self.units_per_em,
            ascender=self.ascender,
            descender=self.descender,
            weight_class=self.weight_class,
            cmap=self.cmap,
            tables=self.tables,
            source_data=self.source_data,
        )
        # keep the declared value without warning a second time
        clone.declared_upm = self.declared_upm
        return clone
