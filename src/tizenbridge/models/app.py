"""Pydantic models for Tizen application metadata."""

from pydantic import BaseModel, ConfigDict


class AppMetadata(BaseModel):
    """Identity of a widget, read from its config.xml."""

    model_config = ConfigDict(frozen=True)

    id: str
    """Application ID (<tizen:application> id attribute)."""

    uri: str
    """Widget URI (<widget> id attribute)."""

    package_name: str
    """Package name (<tizen:application> package attribute)."""

    content: str | None = None
    """Entry document (<content> src attribute)."""
