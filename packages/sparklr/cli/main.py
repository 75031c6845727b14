"""Command-line interface for sparklr.

Commands:
    check    Report the format-version status of asset files
    upgrade  Rewrite outdated asset files at the current format version
    sample   Print curve or gradient samples of one emitter
    bake     Write baked lookup tables as .npy files
    presets  List the built-in curve presets
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np
from rich.console import Console
from rich.table import Table

from sparklr.core.asset import (
    LOADERS,
    AssetFormat,
    AssetLoaderError,
    FieldPathError,
    Outdated,
    ParticleSystemAsset,
    ParticleSystemAssetLoader,
    get_field,
    loader_for_path,
)
from sparklr.core.baking import BakedTextureCache, prepare_asset
from sparklr.core.caching import compute_fingerprint
from sparklr.core.config import AppConfig, LoggingConfig, configure_logging, load_app_config
from sparklr.core.curves import CURVE_PRESETS, CurveTexture
from sparklr.core.gradients import Gradient
from sparklr.core.utils.json import write_json
from sparklr.core.utils.logging import get_logger

console = Console()
logger = logging.getLogger(__name__)

# Short names accepted by ``sample --field``.
FIELD_ALIASES: dict[str, str] = {
    "scale": "scale.scale_over_lifetime",
    "angle": "angle.angle_over_lifetime",
    "alpha": "colors.alpha_over_lifetime",
    "emission": "colors.emission_over_lifetime",
    "color": "colors.color_over_lifetime",
    "initial_color": "colors.initial_color.gradient",
    "radial_velocity": "velocities.radial_velocity.velocity_over_lifetime",
    "angular_velocity": "velocities.angular_velocity.velocity_over_lifetime",
    "turbulence": "turbulence.influence_over_lifetime",
}


def _load(path: Path) -> ParticleSystemAsset:
    return loader_for_path(path).load(path)


def _output_loader(path: Path, config: AppConfig) -> ParticleSystemAssetLoader:
    try:
        return loader_for_path(path)
    except ValueError:
        fmt = AssetFormat(config.format.default_format)
        logger.debug("No loader for %s, writing as %s", path.name, fmt.value)
        return next(loader for loader in LOADERS if loader.fmt == fmt)


def cmd_check(args: argparse.Namespace, config: AppConfig) -> int:
    """Print the version status of each file. Exit 1 if any fails to load."""
    failures = 0
    for raw in args.paths:
        path = Path(raw)
        try:
            _, status = loader_for_path(path).load_with_status(path)
        except (ValueError, AssetLoaderError) as e:
            console.print(f"[red]ERROR: {path}: {e}[/red]")
            failures += 1
            continue

        if isinstance(status, Outdated):
            console.print(
                f"[yellow]OUTDATED[/yellow] {path} "
                f"(format_version {status.found}, current is {status.current})"
            )
        else:
            console.print(f"[green]CURRENT[/green] {path}")

    return 1 if failures else 0


def cmd_upgrade(args: argparse.Namespace, config: AppConfig) -> int:
    """Rewrite an outdated asset at the current format version."""
    path = Path(args.path)
    out = Path(args.out) if args.out else path
    try:
        asset, status = loader_for_path(path).load_with_status(path)
    except (ValueError, AssetLoaderError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    if not isinstance(status, Outdated) and out == path:
        console.print(f"[green]{path} is already at format_version {asset.format_version}[/green]")
        return 0

    try:
        _output_loader(out, config).save(asset, out)
    except AssetLoaderError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1
    console.print(f"[green]Wrote {out} at format_version {asset.format_version}[/green]")
    return 0


def cmd_sample(args: argparse.Namespace, config: AppConfig) -> int:
    """Sample one curve or gradient field of an emitter."""
    path = Path(args.path)
    field_path = FIELD_ALIASES.get(args.field, args.field)
    try:
        asset = _load(path)
        source = get_field(asset, f"emitters.{args.emitter}.{field_path}")
    except (ValueError, AssetLoaderError, FieldPathError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    table = Table(title=f"{asset.name} / emitter {args.emitter} / {field_path}")
    table.add_column("t", justify="right")
    if isinstance(source, CurveTexture):
        table.add_column("value", justify="right")
        for t in args.t:
            table.add_row(f"{t:g}", f"{source.sample(t):.6g}")
    elif isinstance(source, Gradient):
        table.add_column("rgba", justify="right")
        for t in args.t:
            table.add_row(f"{t:g}", ", ".join(f"{c:.4f}" for c in source.sample(t)))
    elif source is None:
        console.print(f"[yellow]{field_path} is not set on emitter {args.emitter}[/yellow]")
        return 1
    else:
        console.print(f"[red]ERROR: {field_path} is not a curve or gradient[/red]")
        return 1

    console.print(table)
    return 0


def cmd_bake(args: argparse.Namespace, config: AppConfig) -> int:
    """Bake every table of an asset into ``<out>/<field path>.npy``."""
    path = Path(args.path)
    out_dir = Path(args.out)
    width = args.width or config.baking.texture_width
    try:
        asset = _load(path)
        cache = BakedTextureCache(width)
    except (ValueError, AssetLoaderError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    prepared = prepare_asset(asset, cache)
    tables = {**prepared.curves, **prepared.gradients}
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        for key, table in tables.items():
            np.save(out_dir / f"{key}.npy", table)
        write_json(
            out_dir / "manifest.json",
            {
                "asset": asset.name,
                "format_version": asset.format_version,
                "fingerprint": compute_fingerprint(asset.model_dump(mode="json")),
                "width": width,
                "tables": sorted(tables),
                "constant_curves": prepared.constant_curves,
            },
        )
    except OSError as e:
        console.print(f"[red]ERROR: Could not write {out_dir}: {e}[/red]")
        return 1

    console.print(
        f"[green]Baked {len(prepared)} tables ({len(cache)} unique, width {width}) "
        f"to {out_dir}[/green]"
    )
    for key, value in prepared.constant_curves.items():
        console.print(f"  constant {key} = {value:g}")
    return 0


def cmd_presets(args: argparse.Namespace, config: AppConfig) -> int:
    table = Table(title="Curve presets")
    table.add_column("name")
    table.add_column("mode")
    table.add_column("easing")
    table.add_column("tension", justify="right")
    for preset in CURVE_PRESETS:
        table.add_row(preset.name, preset.mode.value, preset.easing.value, f"{preset.tension:.4f}")
    console.print(table)
    return 0


COMMANDS = {
    "check": cmd_check,
    "upgrade": cmd_upgrade,
    "sample": cmd_sample,
    "bake": cmd_bake,
    "presets": cmd_presets,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="sparklr",
        description="sparklr - particle effect asset tools",
    )
    p.add_argument(
        "--app-config",
        default=str(AppConfig.default_path()),
        help="Path to app config JSON/YAML (default: sparklr.json)",
    )
    p.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = p.add_subparsers(dest="cmd", required=True)

    check = sub.add_parser("check", help="Report format-version status of asset files")
    check.add_argument("paths", nargs="+", help="Asset files (.sparklr.json / .sparklr.yaml)")

    upgrade = sub.add_parser("upgrade", help="Rewrite an outdated asset file")
    upgrade.add_argument("path", help="Asset file")
    upgrade.add_argument("--out", default=None, help="Output path (default: overwrite input)")

    sample = sub.add_parser("sample", help="Sample a curve or gradient of one emitter")
    sample.add_argument("path", help="Asset file")
    sample.add_argument("--emitter", type=int, default=0, help="Emitter index (default: 0)")
    sample.add_argument(
        "--field",
        default="scale",
        help=f"Field path or alias ({', '.join(FIELD_ALIASES)})",
    )
    sample.add_argument(
        "--t", type=float, nargs="+", default=[0.0, 0.25, 0.5, 0.75, 1.0], help="Sample positions"
    )

    bake = sub.add_parser("bake", help="Bake lookup tables to .npy files")
    bake.add_argument("path", help="Asset file")
    bake.add_argument("--out", required=True, help="Output directory")
    bake.add_argument("--width", type=int, default=None, help="Texels per table (default: config)")

    sub.add_parser("presets", help="List curve presets")

    return p


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    try:
        config = load_app_config(args.app_config)
        if args.log_level:
            logging_config = LoggingConfig.model_validate(
                {**config.logging.model_dump(), "level": args.log_level.upper()}
            )
            config = config.model_copy(update={"logging": logging_config})
    except (OSError, ValueError) as e:
        console.print(f"[red]ERROR: Could not load config {args.app_config}: {e}[/red]")
        sys.exit(1)
    configure_logging(config)

    get_logger(__name__, command=args.cmd).debug("Running %s", args.cmd)
    sys.exit(COMMANDS[args.cmd](args, config))


if __name__ == "__main__":
    main()
