"""Spacing settings for the propagation and topology methods, with JSON I/O."""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional, Union

from . import config
from . import models

SideBearingPair = models.SideBearingPair
PartialOverride = models.PartialOverride
FullOverride = models.FullOverride
SettingsError = models.SettingsError

PROPAGATION = "propagation"
TOPOLOGY = "topology"
METHODS = (PROPAGATION, TOPOLOGY)


def _coerce_value(value, where: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise SettingsError(f"{where}: expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise SettingsError(f"{where}: expected an integer, got {value!r}")


def _coerce_pair(value, where: str, cls=SideBearingPair) -> SideBearingPair:
    if isinstance(value, SideBearingPair):
        lsb, rsb = value.lsb, value.rsb
    elif isinstance(value, dict):
        unknown = set(value) - {"lsb", "rsb"}
        if unknown:
            raise SettingsError(f"{where}: unknown keys {sorted(unknown)}")
        lsb, rsb = value.get("lsb"), value.get("rsb")
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        lsb, rsb = value
    else:
        raise SettingsError(f"{where}: expected {{lsb, rsb}}, got {value!r}")
    return cls(_coerce_value(lsb, f"{where}.lsb"), _coerce_value(rsb, f"{where}.rsb"))


def _coerce_master(value, char: str) -> SideBearingPair:
    pair = _coerce_pair(value, f"master {char}")
    if not pair.is_complete:
        raise SettingsError(f"master {char} needs both lsb and rsb")
    return pair


def _check_char_key(key) -> str:
    if not isinstance(key, str) or len(key) != 1:
        raise SettingsError(f"override key must be a single character, got {key!r}")
    return key


@dataclass
class TracySettings:
    """Propagation-method settings: four masters plus partial overrides."""

    H: SideBearingPair = field(default_factory=lambda: SideBearingPair(50, 50))
    O: SideBearingPair = field(default_factory=lambda: SideBearingPair(40, 40))
    n: SideBearingPair = field(default_factory=lambda: SideBearingPair(35, 30))
    o: SideBearingPair = field(default_factory=lambda: SideBearingPair(30, 30))
    overrides: Dict[str, PartialOverride] = field(default_factory=dict)

    method = PROPAGATION
    masters = config.PROPAGATION_MASTERS

    def __post_init__(self):
        for char in self.masters:
            setattr(self, char, _coerce_master(getattr(self, char), char))
        self.overrides = {
            _check_char_key(k): _coerce_pair(v, f"override {k}", PartialOverride)
            for k, v in self.overrides.items()
        }

    def master(self, char: str) -> SideBearingPair:
        return getattr(self, char)


@dataclass
class SousaGroups:
    """Topology-method character groups. Informational only: the derivation
    reads the static topology table, never these lists."""

    group1: List[str] = field(default_factory=lambda: list("bdhilmnopqu"))
    group2: List[str] = field(default_factory=lambda: list("acefjkrt"))
    group3: List[str] = field(default_factory=lambda: list("gsvwxyz"))
    upper_group1: List[str] = field(default_factory=lambda: list("BDEFHINOQ"))
    upper_group2: List[str] = field(default_factory=lambda: list("CGJKLPR"))
    upper_group3: List[str] = field(default_factory=lambda: list("AMSTUVWXYZ"))

    LABELS = {
        "group1": "Group 1 (Relational)",
        "group2": "Group 2 (Semi)",
        "group3": "Group 3 (Visual)",
        "upper_group1": "Upper G1 (Relational)",
        "upper_group2": "Upper G2 (Semi)",
        "upper_group3": "Upper G3 (Visual)",
    }

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str):
                value = list(value)
            if not isinstance(value, (list, tuple)) or not all(
                isinstance(ch, str) and len(ch) == 1 for ch in value
            ):
                raise SettingsError(
                    f"group {f.name} must be a string or a list of single "
                    f"characters, got {value!r}"
                )
            # Unique, non-blank, first occurrence wins
            seen: List[str] = []
            for ch in value:
                if ch.strip() and ch not in seen:
                    seen.append(ch)
            setattr(self, f.name, seen)

    def as_dict(self) -> Dict[str, List[str]]:
        return {f.name: list(getattr(self, f.name)) for f in fields(self)}


@dataclass
class SousaSettings:
    """Topology-method settings: four masters plus full overrides."""

    n: SideBearingPair = field(default_factory=lambda: SideBearingPair(30, 25))
    o: SideBearingPair = field(default_factory=lambda: SideBearingPair(25, 25))
    H: SideBearingPair = field(default_factory=lambda: SideBearingPair(45, 45))
    O: SideBearingPair = field(default_factory=lambda: SideBearingPair(35, 35))
    overrides: Dict[str, FullOverride] = field(default_factory=dict)
    groups: SousaGroups = field(default_factory=SousaGroups)

    method = TOPOLOGY
    masters = config.TOPOLOGY_MASTERS

    def __post_init__(self):
        for char in self.masters:
            setattr(self, char, _coerce_master(getattr(self, char), char))
        self.overrides = {
            _check_char_key(k): _coerce_pair(v, f"override {k}", FullOverride)
            for k, v in self.overrides.items()
        }
        if isinstance(self.groups, dict):
            self.groups = SousaGroups(**self.groups)

    def master(self, char: str) -> SideBearingPair:
        return getattr(self, char)


Settings = Union[TracySettings, SousaSettings]


def settings_from_dict(data: dict, method: Optional[str] = None) -> Settings:
    """Build settings from JSON-shaped data.

    ``method`` wins over a ``"method"`` key in the data; propagation is the
    default when neither is given.
    """
    if not isinstance(data, dict):
        raise SettingsError("settings must be a JSON object")
    method = method or data.get("method") or PROPAGATION
    if method not in METHODS:
        raise SettingsError(f"unknown method {method!r} (expected one of {METHODS})")

    cls = TracySettings if method == PROPAGATION else SousaSettings
    kwargs = {}
    for char in cls.masters:
        if char in data:
            kwargs[char] = data[char]
    overrides = data.get("overrides") or {}
    if not isinstance(overrides, dict):
        raise SettingsError("overrides must be an object keyed by character")
    kwargs["overrides"] = overrides
    if cls is SousaSettings and data.get("groups") is not None:
        groups = data["groups"]
        if not isinstance(groups, dict):
            raise SettingsError("groups must be an object")
        unknown = set(groups) - set(SousaGroups.LABELS)
        if unknown:
            raise SettingsError(f"unknown groups {sorted(unknown)}")
        kwargs["groups"] = SousaGroups(**groups)
    elif cls is TracySettings and data.get("groups") is not None:
        raise SettingsError("groups only apply to the topology method")
    return cls(**kwargs)


def settings_to_dict(settings: Settings) -> dict:
    data: dict = {"method": settings.method}
    for char in settings.masters:
        pair = settings.master(char)
        data[char] = {"lsb": pair.lsb, "rsb": pair.rsb}
    data["overrides"] = {
        ch: {"lsb": ov.lsb, "rsb": ov.rsb} for ch, ov in settings.overrides.items()
    }
    if isinstance(settings, SousaSettings):
        data["groups"] = settings.groups.as_dict()
    return data


def load_settings(path: Union[str, Path], method: Optional[str] = None) -> Settings:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"cannot read settings from {path}: {e}") from e
    return settings_from_dict(data, method=method)


def dump_settings(settings: Settings, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings_to_dict(settings), f, indent=2, ensure_ascii=False)


def default_settings(method: str) -> Settings:
    if method == PROPAGATION:
        return TracySettings()
    if method == TOPOLOGY:
        return SousaSettings()
    raise SettingsError(f"unknown method {method!r}")
