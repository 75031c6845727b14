"""Tests for the sparklr command-line interface."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

import numpy as np
import pytest

from sparklr.cli.main import FIELD_ALIASES, build_arg_parser, main
from sparklr.core.asset.loader import ParticleSystemAssetLoader
from sparklr.core.asset.versioning import Current
from sparklr.core.config import clear_app_config_cache


@pytest.fixture(autouse=True)
def _isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SPARKLR_LOG_LEVEL", raising=False)
    monkeypatch.setenv("COLUMNS", "200")
    clear_app_config_cache()
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_app_config_cache()


@pytest.fixture
def sparks(assets_dir: Path) -> Path:
    return assets_dir / "sparks.sparklr.json"


def _output(capsys: pytest.CaptureFixture[str]) -> str:
    # Rich wraps long lines; compare on single spaces.
    return " ".join(capsys.readouterr().out.split())


def run(*argv: str) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(list(argv))
    return excinfo.value.code


class TestArgParser:
    """Tests for build_arg_parser()."""

    def test_command_required(self) -> None:
        """A subcommand must be given."""
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args([])

    def test_sample_defaults(self) -> None:
        """sample defaults to the first emitter's scale curve."""
        args = build_arg_parser().parse_args(["sample", "a.sparklr.json"])
        assert args.emitter == 0
        assert args.field == "scale"
        assert args.t == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_aliases_resolve_to_field_paths(self) -> None:
        """Every alias is a dotted path."""
        assert all("." in path for path in FIELD_ALIASES.values())


class TestCheck:
    """Tests for the check command."""

    def test_current_and_outdated(self, sparks: Path, assets_dir: Path, capsys) -> None:
        """Both loadable statuses are reported and the exit code is 0."""
        code = run("check", str(sparks), str(assets_dir / "outdated.sparklr.json"))
        out = _output(capsys)
        assert code == 0
        assert "CURRENT" in out
        assert "OUTDATED" in out

    def test_failures_exit_nonzero(self, sparks: Path, assets_dir: Path, capsys) -> None:
        """Any failing file makes the command fail."""
        code = run("check", str(sparks), str(assets_dir / "unknown.sparklr.json"))
        out = _output(capsys)
        assert code == 1
        assert "ERROR" in out

    def test_unsupported_extension(self, tmp_path: Path, capsys) -> None:
        """Files without an asset extension are errors."""
        path = tmp_path / "effect.json"
        path.write_text("{}", encoding="utf-8")
        assert run("check", str(path)) == 1
        assert "Unsupported asset extension" in _output(capsys)


class TestUpgrade:
    """Tests for the upgrade command."""

    def test_writes_current_version(self, assets_dir: Path, tmp_path: Path) -> None:
        """Outdated files are rewritten at the current version."""
        out = tmp_path / "smoke.sparklr.json"
        assert run("upgrade", str(assets_dir / "outdated.sparklr.json"), "--out", str(out)) == 0

        asset, status = ParticleSystemAssetLoader().load_with_status(out)
        assert status == Current()
        assert asset.name == "Old smoke"

    def test_converts_between_formats(self, sparks: Path, tmp_path: Path) -> None:
        """The output extension selects the format."""
        out = tmp_path / "sparks.sparklr.yaml"
        assert run("upgrade", str(sparks), "--out", str(out)) == 0
        assert out.read_text(encoding="utf-8").startswith("format_version:")

    def test_current_file_left_alone(self, sparks: Path, tmp_path: Path, capsys) -> None:
        """In-place upgrade of a current file is a no-op."""
        path = tmp_path / "sparks.sparklr.json"
        shutil.copy(sparks, path)
        before = path.read_bytes()

        assert run("upgrade", str(path)) == 0
        assert "already at format_version" in _output(capsys)
        assert path.read_bytes() == before

    def test_unknown_output_extension_uses_default_format(
        self, sparks: Path, tmp_path: Path
    ) -> None:
        """Outputs without an asset extension are written in the configured format."""
        out = tmp_path / "sparks.txt"
        assert run("upgrade", str(sparks), "--out", str(out)) == 0
        assert json.loads(out.read_text(encoding="utf-8"))["name"] == "Sparks"

    def test_load_failure(self, assets_dir: Path) -> None:
        """Unloadable inputs fail."""
        assert run("upgrade", str(assets_dir / "malformed.sparklr.json")) == 1


class TestSample:
    """Tests for the sample command."""

    def test_curve(self, sparks: Path, capsys) -> None:
        """Curves print one value per position."""
        assert run("sample", str(sparks), "--field", "scale", "--t", "0", "1") == 0
        out = _output(capsys)
        assert "value" in out

    def test_gradient(self, sparks: Path, capsys) -> None:
        """Gradients print RGBA per position."""
        assert run("sample", str(sparks), "--field", "color", "--t", "0") == 0
        assert "1.0000, 1.0000, 0.0000, 1.0000" in _output(capsys)

    def test_full_field_path(self, sparks: Path) -> None:
        """Full dotted paths work as well as aliases."""
        assert run("sample", str(sparks), "--field", "colors.alpha_over_lifetime") == 0

    def test_unset_curve(self, sparks: Path, capsys) -> None:
        """Unset optional curves fail with a message."""
        assert run("sample", str(sparks), "--field", "angle") == 1
        assert "is not set" in _output(capsys)

    def test_not_a_curve(self, sparks: Path, capsys) -> None:
        """Scalar fields cannot be sampled."""
        assert run("sample", str(sparks), "--field", "name") == 1
        assert "not a curve or gradient" in _output(capsys)

    @pytest.mark.parametrize("argv", [("--field", "nope"), ("--emitter", "3")])
    def test_bad_path(self, sparks: Path, argv: tuple[str, ...], capsys) -> None:
        """Unresolvable fields and emitters fail."""
        assert run("sample", str(sparks), *argv) == 1
        assert "Invalid field path" in _output(capsys)


class TestBake:
    """Tests for the bake command."""

    def test_writes_tables_and_manifest(self, sparks: Path, tmp_path: Path) -> None:
        """Each table is an .npy file and the manifest lists them."""
        out = tmp_path / "baked"
        assert run("bake", str(sparks), "--out", str(out), "--width", "16") == 0

        manifest = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
        assert manifest["asset"] == "Sparks"
        assert manifest["width"] == 16
        assert manifest["tables"] == [
            "emitters.0.colors.color_over_lifetime",
            "emitters.0.scale.scale_over_lifetime",
        ]
        assert manifest["constant_curves"] == {"emitters.0.colors.alpha_over_lifetime": 1.0}
        assert len(manifest["fingerprint"]) == 64

        table = np.load(out / "emitters.0.scale.scale_over_lifetime.npy")
        assert table.shape == (16, 4)
        assert table.dtype == np.uint8

    def test_width_from_config(self, sparks: Path, tmp_path: Path) -> None:
        """Without --width the configured width is used."""
        config = tmp_path / "app.yaml"
        config.write_text("baking:\n  texture_width: 8\n", encoding="utf-8")
        out = tmp_path / "baked"

        assert run("--app-config", str(config), "bake", str(sparks), "--out", str(out)) == 0
        table = np.load(out / "emitters.0.colors.color_over_lifetime.npy")
        assert table.shape == (8, 4)

    def test_fingerprint_is_stable(self, sparks: Path, tmp_path: Path) -> None:
        """Baking the same asset twice gives the same fingerprint."""
        run("bake", str(sparks), "--out", str(tmp_path / "a"), "--width", "4")
        run("bake", str(sparks), "--out", str(tmp_path / "b"), "--width", "4")
        first = json.loads((tmp_path / "a" / "manifest.json").read_text(encoding="utf-8"))
        second = json.loads((tmp_path / "b" / "manifest.json").read_text(encoding="utf-8"))
        assert first["fingerprint"] == second["fingerprint"]

    def test_invalid_width(self, sparks: Path, tmp_path: Path) -> None:
        """Widths below 2 fail."""
        assert run("bake", str(sparks), "--out", str(tmp_path / "x"), "--width", "1") == 1

    def test_unwritable_output_fails_cleanly(self, sparks: Path, tmp_path: Path, capsys) -> None:
        """An --out that is an existing file reports an error and exits 1."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        assert run("bake", str(sparks), "--out", str(blocker)) == 1
        assert "ERROR: Could not write" in _output(capsys)


class TestGlobalOptions:
    """Tests for options shared by every command."""

    def test_presets(self, capsys) -> None:
        """presets lists the built-in curves."""
        assert run("presets") == 0
        out = _output(capsys)
        assert "Quad out" in out
        assert "Circ in out" in out

    def test_invalid_app_config(self, tmp_path: Path, capsys) -> None:
        """Broken config files stop the CLI."""
        config = tmp_path / "app.json"
        config.write_text("{", encoding="utf-8")
        assert run("--app-config", str(config), "presets") == 1
        assert "Could not load config" in _output(capsys)

    def test_invalid_log_level(self, capsys) -> None:
        """Unknown --log-level values are rejected."""
        assert run("--log-level", "chatty", "presets") == 1

    def test_log_level_override(self) -> None:
        """--log-level applies to the root logger."""
        assert run("--log-level", "debug", "presets") == 0
        assert logging.getLogger().level == logging.DEBUG
