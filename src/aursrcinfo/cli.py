"""aursrcinfo command line: check, format and inspect .SRCINFO files."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from .constants import DEFAULT_ARCH, LOG_LEVEL, SRCINFO_FILENAME
from .errors import SrcinfoError
from .formatter import to_text
from .models import Srcinfo
from .parser import parse_file

logger = logging.getLogger(__name__)

cli = typer.Typer(no_args_is_help=True)

PACKAGE_INFO_FIELDS = ["depends", "optdepends", "provides", "conflicts", "replaces"]
BASE_INFO_FIELDS = ["makedepends", "checkdepends", "source"]


@cli.callback()
def setup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Parse, validate and reformat .SRCINFO files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def resolve_path(path: Path) -> Path:
    """Map a package directory to the .SRCINFO file inside it."""
    if path.is_dir():
        return path / SRCINFO_FILENAME
    return path


def load(path: Path) -> Srcinfo:
    """Parse ``path``, logging the error and exiting with status 1 on failure."""
    path = resolve_path(path)
    try:
        return parse_file(path)
    except SrcinfoError as e:
        logger.error(f"{path}: {e}")
        raise typer.Exit(code=1) from e


@cli.command()
def check(
    paths: list[Path] = typer.Argument(..., help=".SRCINFO files or directories containing one"),
):
    """Validate one or more .SRCINFO files."""
    failed = 0
    for path in paths:
        path = resolve_path(path)
        try:
            srcinfo = parse_file(path)
        except SrcinfoError as e:
            failed += 1
            typer.echo(f"{path}: {e}")
            continue
        logger.debug(f"{path}: {srcinfo.pkgbase} {srcinfo.version()}")
        typer.echo(f"{path}: ok")

    if failed:
        logger.error(f"{failed} of {len(paths)} file(s) failed to parse")
        raise typer.Exit(code=1)


@cli.command()
def fmt(
    path: Path = typer.Argument(..., help=".SRCINFO file or directory containing one"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
):
    """Print the canonical form of a .SRCINFO file."""
    text = to_text(load(path))
    if output is None:
        typer.echo(text, nl=False)
    else:
        output.write_text(text, encoding="utf-8")
        logger.info(f"Wrote {output}")


@cli.command()
def dump(
    path: Path = typer.Argument(..., help=".SRCINFO file or directory containing one"),
    indent: int = typer.Option(2, help="JSON indentation"),
):
    """Print a .SRCINFO file as JSON."""
    typer.echo(load(path).model_dump_json(indent=indent))


@cli.command()
def info(
    path: Path = typer.Argument(..., help=".SRCINFO file or directory containing one"),
    arch: str = typer.Option(DEFAULT_ARCH, help="Architecture to show values for"),
):
    """Show the version and per-architecture relations of each package."""
    srcinfo = load(path)
    typer.echo(f"pkgbase: {srcinfo.pkgbase}")
    typer.echo(f"version: {srcinfo.version()}")
    for field in BASE_INFO_FIELDS:
        values = srcinfo.active(field, arch)
        if values:
            typer.echo(f"{field}: {' '.join(values)}")

    for package in srcinfo.packages:
        suffix = "" if package.supports_arch(arch) else f" (not built for {arch})"
        typer.echo(f"\npkgname: {package.pkgname}{suffix}")
        if package.pkgdesc:
            typer.echo(f"  pkgdesc: {package.pkgdesc}")
        for field in PACKAGE_INFO_FIELDS:
            values = package.active(field, arch)
            if values:
                typer.echo(f"  {field}: {' '.join(values)}")


def main() -> None:
    """Main entry point for the aursrcinfo CLI."""
    cli()
