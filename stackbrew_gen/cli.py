"""CLI entry point for stackbrew-gen."""

from __future__ import annotations

import signal
import subprocess
import sys
from pathlib import Path

import click

from stackbrew_gen.config import default_config_toml, load_config
from stackbrew_gen.models import GeneratorConfig, RenderContext
from stackbrew_gen.pipeline import run_generate
from stackbrew_gen.render import render_dockerfile
from stackbrew_gen.versions import is_version_tag

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML config file overriding the built-in defaults.",
)


def _load(config_path: Path | None) -> GeneratorConfig:
    return load_config(config_path) if config_path else GeneratorConfig()


def _terminate(signum: int, frame: object) -> None:
    # Unwind through context managers so the temporary clone is removed
    sys.exit(128 + signum)


@click.group()
@click.version_option(package_name="stackbrew-gen")
def cli() -> None:
    """Generate MistServer Dockerfiles and the stackbrew library manifest."""


@cli.command()
@config_option
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory that receives one subdirectory per version.",
)
def generate(config_path: Path | None, output_dir: Path) -> None:
    """Write per-version Dockerfiles and print the manifest."""
    config = _load(config_path)
    previous = signal.signal(signal.SIGTERM, _terminate)

    try:
        manifest = run_generate(config, output_dir)
    except subprocess.CalledProcessError as exc:
        if exc.stderr:
            click.echo(exc.stderr.rstrip(), err=True)
        sys.exit(exc.returncode)
    finally:
        signal.signal(signal.SIGTERM, previous)

    click.echo(manifest, nl=False)


@cli.command()
@config_option
@click.argument("version")
def render(config_path: Path | None, version: str) -> None:
    """Print the Dockerfile for VERSION without touching the network."""
    if not is_version_tag(version):
        raise click.BadParameter(
            f"{version!r} is not a MAJOR.MINOR[.PATCH] version", param_hint="VERSION"
        )
    config = _load(config_path)
    context = RenderContext(version=version, filename=config.filename)
    click.echo(render_dockerfile(context), nl=False)


@cli.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default="stackbrew.toml",
    show_default=True,
    help="Where to write the config file.",
)
def init(path: Path) -> None:
    """Scaffold a config file holding the default settings."""
    if path.exists():
        raise click.ClickException(f"{path} already exists; not overwriting.")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(default_config_toml(), encoding="utf-8")

    click.echo(f"✓ Wrote config to {path}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Edit the settings you want to change")
    click.echo(f"  2. stackbrew-gen generate --config {path}")
