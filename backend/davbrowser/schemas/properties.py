"""Tagged property values as handed over by the resource tree.

The tree decides the ``kind`` when it fetches a property, so rendering code
dispatches on the tag instead of inspecting concrete types.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class _PropertyBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PlainValue(_PropertyBase):
    kind: Literal["plain"] = "plain"
    value: str


class HrefValue(_PropertyBase):
    """A single link, relative to the server base URI."""

    kind: Literal["href"] = "href"
    href: str


class HrefListValue(_PropertyBase):
    kind: Literal["hreflist"] = "hreflist"
    hrefs: list[str] = Field(default_factory=list)


class QNameListValue(_PropertyBase):
    """A list of qualified names in Clark notation, e.g. a resource type."""

    kind: Literal["qnamelist"] = "qnamelist"
    names: list[str] = Field(default_factory=list)


class ValueListValue(_PropertyBase):
    kind: Literal["valuelist"] = "valuelist"
    values: list[str] = Field(default_factory=list)


class ComplexValue(_PropertyBase):
    """A typed value the browser does not know how to print. Only its type name is shown."""

    kind: Literal["complex"] = "complex"
    type_name: str


class UnknownValue(_PropertyBase):
    kind: Literal["unknown"] = "unknown"


# Discriminated union: the `kind` field routes parsing.
PropertyValue = Annotated[
    PlainValue | HrefValue | HrefListValue | QNameListValue | ValueListValue | ComplexValue | UnknownValue,
    Field(discriminator="kind"),
]

PropertySet = dict[str, PropertyValue]


def parse_clark(name: str) -> tuple[str | None, str]:
    """Split a ``{namespace}local`` name. Names without a namespace part return ``None`` for it."""
    if name.startswith("{"):
        end = name.find("}")
        if end > 0:
            return name[1:end], name[end + 1 :]
    return None, name


def display_name(name: str, namespaces: dict[str, str]) -> str:
    """Return ``prefix:local`` when the namespace has a known prefix, else the raw qualified name."""
    namespace, local_name = parse_clark(name)
    if namespace is not None and namespace in namespaces:
        return f"{namespaces[namespace]}:{local_name}"
    return name
