"""Config file reading and writing.

Config files are TOML with the GeneratorConfig fields as top-level keys.
Uses tomlkit so the file written by `stackbrew-gen init` keeps its comments
and layout when edited by hand.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit
from pydantic import ValidationError
from tomlkit.exceptions import TOMLKitError

from .models import GeneratorConfig
from .shell import fatal


def load_config(path: Path) -> GeneratorConfig:
    """Load and validate a config file.

    Keys missing from the file fall back to GeneratorConfig defaults.

    Raises:
        SystemExit: If the file is not valid TOML or fails validation.
    """
    try:
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    except TOMLKitError as exc:
        fatal(f"{path}: invalid TOML: {exc}")
    try:
        return GeneratorConfig.model_validate(doc.unwrap())
    except ValidationError as exc:
        fatal(f"{path}: invalid config:\n{exc}")


def default_config_toml() -> str:
    """Render the default configuration as a TOML document."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("stackbrew-gen configuration"))
    doc.add(tomlkit.comment("Every key is optional; omitted keys use the built-in default."))
    doc.add(tomlkit.nl())

    for key, value in GeneratorConfig().model_dump().items():
        if isinstance(value, list):
            # One item per line keeps diffs of the maintainer list readable
            array = tomlkit.array()
            for item in value:
                array.append(item)
            array.multiline(len(value) > 2)
            doc.add(key, array)
        else:
            doc.add(key, value)
    return tomlkit.dumps(doc)
