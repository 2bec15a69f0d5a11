"""CLI parsing and main orchestration."""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from . import config
from . import console as cs
from . import font_io
from . import harmonic
from . import measurements
from . import models
from . import normalization
from . import propagation
from . import settings as settings_mod
from . import topology
from . import validation

console = cs.get_console()

FontIOError = font_io.FontIOError
SettingsError = models.SettingsError

METHOD_APPLIERS = {
    settings_mod.PROPAGATION: propagation.apply_propagation_method,
    settings_mod.TOPOLOGY: topology.apply_topology_method,
}


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity level. Use -v for VERBOSE, -vv for DEBUG level output",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sidebearings",
        description="Derive and apply letter side bearings from four master glyphs",
        epilog="Supported formats: TTF, OTF, WOFF, WOFF2",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    metrics = sub.add_parser("metrics", help="Show visual metrics of a font")
    metrics.add_argument("font", help="Font file")
    metrics.add_argument(
        "--extra",
        action="store_true",
        help="Also list side bearings of digits, punctuation and accented glyphs",
    )
    _add_common(metrics)

    apply = sub.add_parser("apply", help="Apply a spacing method to a font")
    apply.add_argument("font", help="Font file")
    apply.add_argument(
        "-m",
        "--method",
        choices=settings_mod.METHODS,
        default=None,
        help="Spacing method (default: from --settings, else propagation)",
    )
    apply.add_argument(
        "-s", "--settings", metavar="JSON", help="Settings file (masters, overrides)"
    )
    apply.add_argument(
        "-o", "--output", metavar="PATH", help="Output path (default: FONT_<method>)"
    )
    apply.add_argument(
        "-n", "--dry-run", action="store_true", help="Preview without writing"
    )
    apply.add_argument(
        "--changed-only", action="store_true", help="Only list letters that changed"
    )
    _add_common(apply)

    suggest = sub.add_parser("suggest", help="Suggest balanced side bearings")
    suggest.add_argument("font", help="Font file")
    suggest.add_argument(
        "chars",
        nargs="*",
        help="Characters to estimate (default: the four masters)",
    )
    _add_common(suggest)

    proof = sub.add_parser("proof", help="Print proofing strings for a character")
    proof.add_argument("char", help="Single character")
    proof.add_argument(
        "-s", "--settings", metavar="JSON", help="Topology settings (for groups)"
    )
    _add_common(proof)

    return parser.parse_args(argv)


def _load_settings(args: argparse.Namespace) -> settings_mod.Settings:
    if args.settings:
        return settings_mod.load_settings(args.settings, method=args.method)
    return settings_mod.default_settings(args.method or settings_mod.PROPAGATION)


def _default_output(path: Path, method: str) -> Path:
    return path.with_name(f"{path.stem}_{method}{path.suffix}")


def cmd_metrics(args: argparse.Namespace) -> int:
    font = font_io.load_font(args.font)
    vm = measurements.extract_visual_metrics(font)
    table = cs.make_table(Path(args.font).name, "metric", "value")
    table.add_row("unitsPerEm", str(font.units_per_em))
    table.add_row("ascender", str(vm.ascender))
    table.add_row("descender", str(vm.descender))
    table.add_row("cap height", str(vm.cap_height))
    table.add_row("x-height", str(vm.x_height))
    table.add_row("average side bearing", str(measurements.average_side_bearing(font)))
    console.print(table)

    if args.extra:
        extra = cs.make_table("Other glyphs", "char", "lsb", "rsb")
        for char, pair in measurements.extra_glyph_side_bearings(font):
            extra.add_row(cs.fmt_char(char), str(pair.lsb), str(pair.rsb))
        console.print(extra)
    return 0


def cmd_apply(args: argparse.Namespace) -> int:
    start_time = time.time()
    path = Path(args.font)
    settings = _load_settings(args)

    original = font_io.load_font(path)
    baseline = normalization.normalize(original.copy())

    warnings = validation.validate_settings(settings, baseline)
    for warning in warnings:
        cs.status("warning", escape(warning))

    work = baseline.copy()
    METHOD_APPLIERS[settings.method](work, settings)

    rows = measurements.compare_side_bearings(original, work)
    if args.changed_only:
        rows = [row for row in rows if row.changed]
    table = cs.make_table(
        f"{path.name}: {settings.method} method", "char", "lsb", "rsb", "Δlsb", "Δrsb"
    )
    for row in rows:
        table.add_row(
            cs.fmt_char(row.char),
            f"{row.before.lsb} → {row.after.lsb}",
            f"{row.before.rsb} → {row.after.rsb}",
            cs.fmt_delta(row.lsb_delta),
            cs.fmt_delta(row.rsb_delta),
        )
    console.print(table)
    cs.status(
        "info",
        f"Average side bearing: {measurements.average_side_bearing(original)}"
        f" → {measurements.average_side_bearing(work)}",
    )

    if args.dry_run:
        cs.status("unchanged", "Dry run, nothing written")
        return 0

    output = Path(args.output) if args.output else _default_output(path, settings.method)
    try:
        font_io.save_font(work, output)
    except FontIOError as e:
        cs.status("error", escape(f"Failed to write {output}: {e}"))
        return 2
    cs.status(
        "success",
        f"Wrote {output}",
        [f"[dim]Total time: [bold]{time.time() - start_time:.1f}[/bold]s[/dim]"],
    )
    return 0


def cmd_suggest(args: argparse.Namespace) -> int:
    font = font_io.load_canonical(args.font)
    chars = args.chars or list(config.TOPOLOGY_MASTERS)
    table = cs.make_table("Balanced side bearings", "char", "suggested")
    for char in chars:
        if font.glyph_for_char(char) is None:
            cs.status("warning", f"{cs.fmt_char(char)} not in font (default used)")
        table.add_row(
            cs.fmt_char(char), str(harmonic.estimate_balanced_spacing(font, char))
        )
    console.print(table)
    return 0


def cmd_proof(args: argparse.Namespace) -> int:
    if len(args.char) != 1:
        raise SettingsError(f"expected a single character, got {args.char!r}")
    groups = None
    if args.settings:
        settings = settings_mod.load_settings(args.settings, method=settings_mod.TOPOLOGY)
        groups = settings.groups
        cs.status("info", harmonic.group_label(args.char, groups))
    for line in harmonic.proof_strings(args.char, groups):
        console.print(line, markup=False)
    return 0


COMMANDS = {
    "metrics": cmd_metrics,
    "apply": cmd_apply,
    "suggest": cmd_suggest,
    "proof": cmd_proof,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cs.setup_logging(cs.verbosity_from_count(args.verbose))
    try:
        return COMMANDS[args.command](args)
    except FontIOError as e:
        cs.status("error", escape(str(e)))
        return 1
    except SettingsError as e:
        cs.status("error", escape(f"Invalid settings: {e}"))
        return 1


def run() -> None:
    sys.exit(main())
