"""Value types exchanged between the store facade and the repositories."""

from collections import namedtuple
from enum import Enum


IndexRow = namedtuple("IndexRow", ["key", "value"])


class Stale(Enum):
    """Index consistency requested by a query.

    OK answers from whatever the index currently holds. FALSE makes the index
    catch up with every prior write before answering.
    """
    OK = "ok"
    FALSE = "false"


class IndexDefinition:
    """A named read path over a table that emits one (key, value) row per document.

    Documents missing the key attribute emit no row.
    """

    def __init__(self, name: str, key_attribute: str, value_attribute: str):
        if not name:
            raise ValueError("Index name is required")
        self.name = name
        self.key_attribute = key_attribute
        self.value_attribute = value_attribute

    def __repr__(self):
        return f"IndexDefinition({self.name!r}, {self.key_attribute!r}, {self.value_attribute!r})"


class IndexQuery:
    """Query against a registered index."""

    def __init__(self, index_name: str, stale: Stale = Stale.OK):
        self.index_name = index_name
        self.stale = stale

    def __repr__(self):
        return f"IndexQuery({self.index_name!r}, stale={self.stale.name})"


class Document:
    """A stored document: its key, JSON body and concurrency token.

    `stored` marks a document read from the store. `version` is None for a
    document that has not been written yet, and for a stored document that
    was written without a version attribute.
    """

    def __init__(self, key: str, content: dict, version: int = None, stored: bool = False):
        self.key = key
        self.content = content
        self.version = version
        self.stored = stored

    def with_content(self, content: dict):
        """Same key and version, new body. Used as the base for a replace."""
        return Document(self.key, content, self.version, stored=self.stored)

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        return (self.key, self.content, self.version) == (other.key, other.content, other.version)

    def __repr__(self):
        return f"Document({self.key!r}, {self.content!r}, version={self.version!r})"


class LookupStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


class LookupResult:
    """Outcome of a key lookup: found, not found, or failed."""

    def __init__(self, status: LookupStatus, document: Document = None, error: Exception = None):
        self.status = status
        self.document = document
        self.error = error

    @classmethod
    def found(cls, document: Document):
        return cls(LookupStatus.FOUND, document=document)

    @classmethod
    def not_found(cls):
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: Exception):
        return cls(LookupStatus.ERROR, error=error)

    def __repr__(self):
        return f"LookupResult({self.status.name}, document={self.document!r}, error={self.error!r})"
