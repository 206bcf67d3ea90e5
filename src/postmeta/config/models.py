"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, postmeta.toml only contains
overrides. An empty (or absent) file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- postmeta.toml sections ---


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    # Relative paths resolve against the directory holding postmeta.toml.
    directory: str | None = None


class ArticleDefaultsConfig(BaseModel):
    """[article] section — values every new post starts with."""

    model_config = {"frozen": True}

    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
