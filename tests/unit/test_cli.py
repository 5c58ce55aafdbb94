"""Smoke tests for the aursrcinfo command line."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from typer.testing import CliRunner

from aursrcinfo import parse_file, parse_str
from aursrcinfo.cli import cli, resolve_path

runner = CliRunner()


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_check_ok(fixtures_dir: Path) -> None:
    result = runner.invoke(cli, ["check", str(fixtures_dir / "libc++.SRCINFO"), str(fixtures_dir / "gdc-bin.SRCINFO")])

    assert result.exit_code == 0
    assert result.stdout.count(": ok") == 2


def test_check_reports_failures(tmp_path: Path, fixtures_dir: Path) -> None:
    bad = _write(tmp_path / "bad.SRCINFO", "pkgbase = a\npkgver = 1\npkgname = a\n")

    result = runner.invoke(cli, ["check", str(fixtures_dir / "multiarch.SRCINFO"), str(bad)])

    assert result.exit_code == 1
    assert "field 'pkgrel' is required" in result.stdout


def test_check_accepts_package_directory(tmp_path: Path, fixtures_dir: Path) -> None:
    package_dir = tmp_path / "libc++"
    package_dir.mkdir()
    shutil.copy(fixtures_dir / "libc++.SRCINFO", package_dir / ".SRCINFO")

    assert resolve_path(package_dir) == package_dir / ".SRCINFO"
    result = runner.invoke(cli, ["check", str(package_dir)])
    assert result.exit_code == 0


def test_fmt_prints_canonical_text(fixtures_dir: Path) -> None:
    path = fixtures_dir / "multiarch.SRCINFO"
    result = runner.invoke(cli, ["fmt", str(path)])

    assert result.exit_code == 0
    assert parse_str(result.stdout) == parse_file(path)


def test_fmt_writes_output_file(tmp_path: Path, fixtures_dir: Path) -> None:
    output = tmp_path / "out.SRCINFO"
    result = runner.invoke(cli, ["fmt", str(fixtures_dir / "gdc-bin.SRCINFO"), "--output", str(output)])

    assert result.exit_code == 0
    assert parse_file(output) == parse_file(fixtures_dir / "gdc-bin.SRCINFO")


def test_fmt_fails_on_invalid_file(tmp_path: Path) -> None:
    _write(tmp_path / ".SRCINFO", "pkgdesc = x\n")
    result = runner.invoke(cli, ["fmt", str(tmp_path)])
    assert result.exit_code == 1


def test_dump_outputs_json(fixtures_dir: Path) -> None:
    result = runner.invoke(cli, ["dump", str(fixtures_dir / "libc++.SRCINFO")])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["base"]["pkgbase"] == "libc++"
    assert [package["pkgname"] for package in data["packages"]] == ["libc++", "libc++abi", "libc++experimental"]


def test_info_shows_per_arch_values(fixtures_dir: Path) -> None:
    result = runner.invoke(cli, ["info", str(fixtures_dir / "multiarch.SRCINFO"), "--arch", "x86_64"])

    assert result.exit_code == 0
    assert "version: 1:2.1-3" in result.stdout
    assert "  depends: glibc lib32-glibc" in result.stdout
    assert "pkgname: multi-arm (not built for x86_64)" in result.stdout
    assert "makedepends" not in result.stdout

    result = runner.invoke(cli, ["info", str(fixtures_dir / "multiarch.SRCINFO"), "--arch", "aarch64"])
    assert result.exit_code == 0
    assert "makedepends: aarch64-linux-gnu-gcc" in result.stdout
    assert "  depends: libarm glibc" in result.stdout


def test_missing_file_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(cli, ["dump", str(tmp_path / "nope")])
    assert result.exit_code == 1
