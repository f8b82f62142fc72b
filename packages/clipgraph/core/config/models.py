"""Configuration models for clipgraph."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clipgraph.core.utils.files import normalize_extensions


class CatalogConfig(BaseModel):
    """Where clips come from and which files count as clips."""

    clip_dir: str | None = Field(default=None, description="Directory scanned for clip assets")

    manifest: str | None = Field(
        default=None, description="YAML/JSON clip manifest (takes precedence over clip_dir)"
    )

    extensions: list[str] = Field(
        default_factory=lambda: [".fbx", ".anim", ".bvh", ".glb", ".gltf"],
        description="Clip file suffixes accepted by the directory scan",
    )

    recursive: bool = Field(default=True, description="Descend into sub-directories")

    @field_validator("extensions")
    @classmethod
    def check_extensions(cls, value: list[str]) -> list[str]:
        """Lower-case and dot-prefix every extension."""
        normalized = list(normalize_extensions(value))
        if not normalized:
            raise ValueError("At least one clip extension is required")
        return normalized


class TransitionConfig(BaseModel):
    """Transition timing applied to every synthesized edge."""

    blend_duration: float = Field(
        default=0.25, ge=0.0, le=10.0, description="Cross-fade length in seconds"
    )


class ExportConfig(BaseModel):
    """Graph export settings."""

    format: Literal["json", "yaml"] = Field(default="json", description="Output document format")

    indent: int = Field(default=2, ge=0, le=8)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False


class ConfigBase(BaseModel):
    """Base class for clipgraph configurations.

    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, falling back to defaults when the default file is absent.

        Raises:
            FileNotFoundError: If an explicit path does not exist
            ValidationError: If config is invalid
        """
        from clipgraph.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
            if not Path(path).exists():
                return cls()

        raw = load_config(path)
        return cls.model_validate(raw)


class AppConfig(ConfigBase):
    """Application-level configuration."""

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    transitions: TransitionConfig = Field(default_factory=TransitionConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("clipgraph.yaml")
