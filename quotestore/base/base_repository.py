"""Base repository interface for document store operations."""

class BaseRepository:
    """Base repository class defining the interface for document store operations.

    Implementations map documents onto a concrete backend. Every document is
    addressed by the value of `key_field`.
    """

    def __init__(self, key_field: str = "key"):
        """Initialize the repository with the specified key field.

        Args:
            key_field: The name of the field used as the document key
        """
        self.key_field = key_field

    def get_document(self, key: str):
        """Get a single document by key.

        Args:
            key: The key of the document to retrieve

        Returns:
            The Document if found, None otherwise
        """
        raise NotImplementedError

    def insert(self, document):
        """Create a new document.

        Args:
            document: The Document to create

        Returns:
            The stored Document, carrying its initial version

        Raises:
            DocumentExistsError: If a document with the same key already exists
        """
        raise NotImplementedError

    def replace(self, document):
        """Replace an existing document, using it as the base of the write.

        The write only succeeds if the stored document still carries the
        version of `document`.

        Args:
            document: A Document previously read from the store, with new content

        Returns:
            The stored Document, carrying its new version

        Raises:
            VersionConflictError: If the document was changed since it was read
            DocumentNotFoundError: If the document no longer exists
        """
        raise NotImplementedError

    def query_index(self, index_query):
        """Query a registered index.

        Args:
            index_query: The IndexQuery naming the index and its consistency

        Returns:
            List of IndexRow ordered by key
        """
        raise NotImplementedError

    def close(self):
        """Release the connection held by this repository."""
        raise NotImplementedError
