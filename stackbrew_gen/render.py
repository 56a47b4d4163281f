"""Dockerfile rendering.

The build definition lives in templates/Dockerfile.mistserver with a
__VERSION__ placeholder. Docker build arguments such as ${DEBUG} are left
untouched for the image build to expand.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .models import GeneratorConfig, RenderContext
from .shell import info, step

TEMPLATES_DIR = Path(__file__).parent / "templates"
DOCKERFILE_TEMPLATE = TEMPLATES_DIR / "Dockerfile.mistserver"


def render_dockerfile(context: RenderContext) -> str:
    """Render the two-stage build definition for one version."""
    template = DOCKERFILE_TEMPLATE.read_text(encoding="utf-8")
    return template.replace("__VERSION__", context.version)


def write_dockerfiles(
    versions: Iterable[str], config: GeneratorConfig, output_dir: Path
) -> list[Path]:
    """Write <output_dir>/<version>/<filename> for every version.

    Existing files are overwritten.

    Returns:
        Paths of the written files, in input order.
    """
    step("Writing build definitions")

    written: list[Path] = []
    for version in versions:
        context = RenderContext(version=version, filename=config.filename)
        dest_dir = output_dir / version
        dest_dir.mkdir(parents=True, exist_ok=True)
        dest = dest_dir / context.filename
        dest.write_text(render_dockerfile(context), encoding="utf-8")
        info(f"  {dest}")
        written.append(dest)
    return written
