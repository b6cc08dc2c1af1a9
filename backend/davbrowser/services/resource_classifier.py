"""ResourceClassifier — turns a node's resource types into a label and an icon glyph."""

from collections.abc import Iterable

from davbrowser.schemas.browser import ClassificationEntry, ResourceInfo

# Ordered by priority: the first entry present in a node's resource types picks
# the icon. Entries without an icon never pick it.
RESOURCE_TYPES: tuple[ClassificationEntry, ...] = (
    ClassificationEntry(
        qname="{http://calendarserver.org/ns/}calendar-proxy-write", label="Proxy-Write", icon="people"
    ),
    ClassificationEntry(qname="{http://calendarserver.org/ns/}calendar-proxy-read", label="Proxy-Read", icon="people"),
    ClassificationEntry(qname="{urn:ietf:params:xml:ns:caldav}schedule-outbox", label="Outbox", icon="inbox"),
    ClassificationEntry(qname="{urn:ietf:params:xml:ns:caldav}schedule-inbox", label="Inbox", icon="inbox"),
    ClassificationEntry(qname="{urn:ietf:params:xml:ns:caldav}calendar", label="Calendar", icon="calendar"),
    ClassificationEntry(qname="{http://calendarserver.org/ns/}shared-owner", label="Shared"),
    ClassificationEntry(qname="{http://calendarserver.org/ns/}subscribed", label="Subscription"),
    ClassificationEntry(qname="{urn:ietf:params:xml:ns:carddav}directory", label="Directory", icon="globe"),
    ClassificationEntry(qname="{urn:ietf:params:xml:ns:carddav}addressbook", label="Address book", icon="book"),
    ClassificationEntry(qname="{DAV:}principal", label="Principal", icon="person"),
    ClassificationEntry(qname="{DAV:}collection", label="Collection", icon="folder"),
)

_MAPPED = frozenset(entry.qname for entry in RESOURCE_TYPES)

FILE = ResourceInfo(label="File", icon="file")
UNKNOWN = ResourceInfo(label="Unknown", icon="cog")


def classify(resource_types: Iterable[str], is_file: bool) -> ResourceInfo:
    """Describe a node.

    Every resource type contributes to the label (unmapped ones with their raw
    qualified name), but only the highest-priority mapped type decides the icon.
    Labels are listed in table order, followed by unmapped names sorted, so the
    result does not depend on the iteration order of ``resource_types``.
    """
    present = set(resource_types)
    if not present:
        return FILE if is_file else UNKNOWN

    labels = [entry.label for entry in RESOURCE_TYPES if entry.qname in present]
    labels.extend(sorted(qname for qname in present if qname not in _MAPPED))
    label = ", ".join(labels)
    icon = next(
        (entry.icon for entry in RESOURCE_TYPES if entry.icon is not None and entry.qname in present),
        "cog",
    )
    return ResourceInfo(label=label, icon=icon)
