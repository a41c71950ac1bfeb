"""Pydantic models describing which files an operation acts on."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class FileFilter(StrEnum):
    """Filter applied to the files matched by a pattern."""

    LATEST = "latest"


class FilePattern(BaseModel):
    """A glob pattern plus an optional filter."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    """Glob pattern (local glob, or shell glob usable with ls on the device)."""

    filter: FileFilter | None = None
    """If 'latest', only the most recently modified match is used."""


FileSpec = str | list[str] | FilePattern
"""A single path, an ordered list of paths, or a FilePattern."""
