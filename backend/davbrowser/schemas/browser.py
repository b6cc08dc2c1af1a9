"""Value objects shared by the browser services."""

from pydantic import BaseModel, ConfigDict


class _FrozenBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class ResourceInfo(_FrozenBase):
    """Human-readable label and icon glyph for a node."""

    label: str
    icon: str


class ClassificationEntry(_FrozenBase):
    """One row of the resource-type table. ``icon`` is None when the entry never picks the icon."""

    qname: str
    label: str
    icon: str | None = None


class Asset(_FrozenBase):
    content_type: str
    length: int
    body: bytes
    cache_control: str
