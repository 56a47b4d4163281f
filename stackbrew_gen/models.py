"""Data models for stackbrew-gen.

These Pydantic models carry configuration and the values passed between
the discovery, rendering and manifest stages.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .versions import is_version_tag

SOURCE_REPO = "https://github.com/DDVTECH/mistserver.git"
DOCKER_REPO = "https://github.com/DDVTECH/mistserver-docker-builder.git"
DOCKERFILE_NAME = "Dockerfile.mistserver"

MAINTAINERS = [
    "Jaron Viëtor <jaron.vietor@ddvtech.com> (@Thulinma)",
    "Marco van Dijk <marco.van.dijk@ddvtech.com> (@stronk-dev)",
    "Carina van der Meer <carina.van.der.meer@ddvtech.com> (@thoronwen)",
    "Balder Viëtor <balder.vietor@ddvtech.com> (@Rokamun)",
    "Ramkoemar Bhoera <ramkoemar.bhoera@ddvtech.com> (@ramkoemar)",
    "Juno Jense <unit-stamp-sled@duck.com> (@junojense)",
]


class GeneratorConfig(BaseModel):
    """Settings for a generator run.

    The defaults reproduce the official MistServer library definition; a
    TOML config file may override any of them.

    Attributes:
        source_repo: Repository whose release tags are turned into images.
        docker_repo: Repository holding the generated build definitions,
                     referenced from the manifest header.
        docker_branch: Branch of docker_repo the manifest pins.
        filename: Build definition file that must exist at a tag for the
                  tag to qualify. Also the name of the generated file.
        architectures: Architectures listed for every manifest entry.
        min_version: Oldest version to consider.
        max_versions: Upper bound on the number of generated versions.
        maintainers: Manifest maintainer lines.
        builder: Builder named in the manifest header.
    """

    model_config = ConfigDict(extra="forbid")

    source_repo: str = SOURCE_REPO
    docker_repo: str = DOCKER_REPO
    docker_branch: str = "main"
    filename: str = DOCKERFILE_NAME
    architectures: list[str] = Field(
        default_factory=lambda: ["amd64", "arm64v8"], min_length=1
    )
    min_version: str = "3.9.2"
    max_versions: int = Field(default=10, ge=1)
    maintainers: list[str] = Field(default_factory=lambda: list(MAINTAINERS))
    builder: str = "buildkit"

    @field_validator("min_version")
    @classmethod
    def _check_min_version(cls, value: str) -> str:
        if not is_version_tag(value):
            raise ValueError(f"not a MAJOR.MINOR[.PATCH] version: {value!r}")
        return value


class RenderContext(BaseModel):
    """Everything the Dockerfile template depends on."""

    version: str
    filename: str = DOCKERFILE_NAME


class ManifestHeader(BaseModel):
    """Global block at the top of the manifest."""

    maintainers: list[str]
    git_repo: str
    git_fetch: str
    git_commit: str
    builder: str


class ManifestEntry(BaseModel):
    """One image entry in the manifest.

    Attributes:
        tags: Image tags, e.g. ["latest", "3.10.0"].
        architectures: Architectures the image is built for.
        directory: Directory holding the build definition.
        file: Build definition filename within directory.
    """

    tags: list[str]
    architectures: list[str]
    directory: str
    file: str
