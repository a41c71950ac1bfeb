"""Resolve local file specifications into concrete paths."""

from __future__ import annotations

import asyncio
import glob
import os

from tizenbridge.exceptions import ConfigurationError
from tizenbridge.models.files import FileFilter, FilePattern, FileSpec


class FileLister:
    """Expands a FileSpec into an ordered list of local paths.

    Strings and string lists are returned as given; existence is not
    checked here. Patterns are globbed and sorted by name.
    """

    @staticmethod
    def get_latest(file_paths: list[str]) -> str | None:
        """Return the most recently modified path.

        Ties keep the earlier path in ``file_paths``.
        """
        if not file_paths:
            return None

        # max() keeps the first of equal keys
        return max(file_paths, key=lambda p: os.stat(p).st_mtime_ns)

    async def list(self, local_files: FileSpec) -> list[str]:
        """Resolve ``local_files`` into paths.

        Raises:
            ConfigurationError: If the file spec is not a string, list, or pattern.
        """
        if isinstance(local_files, str):
            return [local_files]

        if isinstance(local_files, list):
            return list(local_files)

        if isinstance(local_files, FilePattern):
            return await asyncio.to_thread(self._expand, local_files)

        raise ConfigurationError(
            "local files specification was not valid; "
            "use a string, string list, or pattern object"
        )

    def _expand(self, spec: FilePattern) -> list[str]:
        matches = sorted(glob.glob(os.path.expanduser(spec.pattern)))

        if spec.filter == FileFilter.LATEST:
            latest = self.get_latest(matches)
            return [latest] if latest is not None else []

        return matches
