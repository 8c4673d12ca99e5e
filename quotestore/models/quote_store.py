"""Quote store: keeps one document per person, keyed by their name."""

import logging

from quotestore.base.document import Document, IndexDefinition, IndexQuery, LookupResult, LookupStatus, Stale
from quotestore.models.quote import Quote
from quotestore.repositories.errors import DocumentExistsError
from quotestore.repositories.repository_factory import RepositoryFactory


logger = logging.getLogger(__name__)

NAME_AND_QUOTE_INDEX = "name_and_quote"


def name_and_quote_index(index_name: str = NAME_AND_QUOTE_INDEX) -> IndexDefinition:
    """Index emitting one (name, quote) row per stored quote"""
    return IndexDefinition(index_name, key_attribute="name", value_attribute="quote")


class QuoteStore:
    """Stores and reads Quote values in a document store.

    The store is constructed around a repository whose key field is `name`,
    so every person has at most one document. Writes are a read followed by
    exactly one create or replace; the repository's conditional writes make
    a concurrent writer lose cleanly instead of merging documents.
    """
    database_name = "quotes"
    key_field = "name"

    def __init__(self, repo, index_name: str = NAME_AND_QUOTE_INDEX):
        if repo is None:
            raise ValueError("repo must be provided")
        self.repo = repo
        self.index_name = index_name

    @classmethod
    def from_factory(cls, *, table_name=None, index_name=None):
        """Build a store on the repository handed out by the configured RepositoryFactory.

        Args:
            table_name: Optional table name override
            index_name: Optional name of the name-and-quote index
        """
        index_name = index_name or NAME_AND_QUOTE_INDEX
        repo = RepositoryFactory.get(
            cls.database_name,
            table_name=table_name,
            key_field=cls.key_field,
            indexes=[name_and_quote_index(index_name)]
        )
        return cls(repo, index_name=index_name)

    def upsert_quote(self, quote: Quote) -> bool:
        """
        Create the quote's document, or replace the quote text of the existing one

        Args:
            quote: The quote to store; quote.name is the document key

        Returns:
            True if the document was created or replaced.
            False if the document did not exist when checked but another writer
            created it before this create landed. The caller decides whether
            to retry.

        Raises:
            Any error from the existence check or the replace, unchanged
        """
        lookup = self.fetch_by_key(quote.name)

        if lookup.status is LookupStatus.ERROR:
            raise lookup.error

        if lookup.status is LookupStatus.NOT_FOUND:
            try:
                self.repo.insert(Document(quote.name, quote.to_dict()))
            except DocumentExistsError:
                logger.warning("Quote '%s' was created by another writer, not overwriting", quote.name)
                return False
            logger.info("Created quote for '%s'", quote.name)
            return True

        loaded = lookup.document
        content = dict(loaded.content)
        content["name"] = quote.name
        content["quote"] = quote.quote

        self.repo.replace(loaded.with_content(content))
        logger.info("Updated quote for '%s'", quote.name)
        return True

    def fetch_all_quotes(self) -> list:
        """
        Get every stored quote from the name_and_quote index.

        The index is brought up to date with all prior writes before it
        answers, so this is slower than a stale read but never misses a
        quote that was just written.

        Returns:
            List of Quote in index order (by name)
        """
        rows = self.repo.query_index(IndexQuery(self.index_name, stale=Stale.FALSE))
        return [Quote.from_row(row) for row in rows]

    def get_quote(self, name: str):
        """Get the quote stored for `name`, or None"""
        lookup = self.fetch_by_key(name)
        if lookup.status is LookupStatus.ERROR:
            raise lookup.error
        if lookup.status is LookupStatus.NOT_FOUND:
            return None

        return Quote.from_dict(lookup.document.content)

    def fetch_by_key(self, key: str) -> LookupResult:
        """Look up the document stored under `key`.

        A missing document is NOT_FOUND. Any failure of the read is logged and
        reported as ERROR, never as NOT_FOUND.
        """
        try:
            document = self.repo.get_document(key)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Lookup of quote '%s' failed: %s", key, exc)
            return LookupResult.failed(exc)

        if document is None:
            return LookupResult.not_found()
        return LookupResult.found(document)

    def close(self):
        """Release the store connection. The store is unusable afterwards."""
        self.repo.close()
