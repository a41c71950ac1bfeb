"""Read application metadata from a Tizen widget config.xml."""

import xml.etree.ElementTree as ET
from pathlib import Path

from tizenbridge.exceptions import MetadataError
from tizenbridge.models.app import AppMetadata
from tizenbridge.utils.config import DEFAULT_CONFIG_XML

TIZEN_NS = "http://tizen.org/ns/widgets"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class TizenConfig:
    """Wraps a config.xml file and caches its parsed metadata.

    The metadata is parsed on first use and never re-read, even if
    ``config_file`` is changed afterwards.
    """

    def __init__(self, config_file: Path | str = DEFAULT_CONFIG_XML):
        self.config_file = Path(config_file)
        self._meta: AppMetadata | None = None

    def get_meta(self) -> AppMetadata:
        """Get metadata about the app.

        Returns:
            AppMetadata with id and package_name from <tizen:application>,
            uri from the <widget> id attribute and content from <content> src.

        Raises:
            MetadataError: If the file is missing, malformed or incomplete.
        """
        if self._meta is not None:
            return self._meta

        try:
            root = ET.parse(self.config_file).getroot()
        except OSError as e:
            raise MetadataError(f"Could not read {self.config_file}: {e}") from e
        except ET.ParseError as e:
            raise MetadataError(f"Malformed XML in {self.config_file}: {e}") from e

        if _local_name(root.tag) != "widget":
            raise MetadataError(f"No <widget> root element in {self.config_file}")

        application = root.find(f"{{{TIZEN_NS}}}application")
        if application is None:
            # Fall back to a namespace-agnostic match
            application = next(
                (el for el in root if _local_name(el.tag) == "application"), None
            )
        if application is None:
            raise MetadataError(
                f"No <tizen:application> element in {self.config_file}"
            )

        content = next((el for el in root if _local_name(el.tag) == "content"), None)

        try:
            self._meta = AppMetadata(
                id=application.attrib["id"],
                uri=root.attrib["id"],
                package_name=application.attrib["package"],
                content=content.get("src") if content is not None else None,
            )
        except KeyError as e:
            raise MetadataError(
                f"Missing attribute {e.args[0]!r} in {self.config_file}"
            ) from e

        return self._meta
