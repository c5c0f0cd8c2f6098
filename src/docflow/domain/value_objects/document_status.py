"""Document lifecycle states."""

from enum import StrEnum


class DocumentStatus(StrEnum):
    """States of an issued document."""

    DRAFT = "draft"
    ISSUED = "issued"
    SIGNED = "signed"
    ARCHIVED = "archived"
