"""
A Repository factory to control database type and table access
"""


class RepositoryFactory:
    """Factory class for creating and managing repository instances.

    This factory holds the one DynamoDB connection shared by the process,
    hands out a cached repository per object type and releases the
    connection on close().
    """
    _instances = {}
    _backend = None
    _dynamo_client = None

    @staticmethod
    def get_dynamodb_client(flask_app):
        """Get DynamoDB client instance.

        Args:
            flask_app: Flask application instance with DynamoDB configuration

        Returns:
            DynamoDB client instance
        """
        # Import locally to avoid hard dependency when DynamoDB not used
        import boto3
        session = boto3.Session(
            aws_access_key_id=flask_app.config.get("DYNAMODB_ACCESS_KEY"),
            aws_secret_access_key=flask_app.config.get("DYNAMODB_SECRET_KEY"),
            region_name=flask_app.config.get("DYNAMODB_REGION") or "us-west-2"
        )
        return session.resource("dynamodb", endpoint_url=flask_app.config.get("DYNAMODB_ENDPOINT"))

    @classmethod
    def configure(cls, backend: str, *, dynamo_client=None, flask_app=None):
        """Configure the repository factory with backend and clients.

        Args:
            backend: Database backend type ('dynamo')
            dynamo_client: Optional DynamoDB client instance
            flask_app: Optional Flask app used to build the client when none is given
        """
        cls._backend = backend.lower()
        if dynamo_client is None and flask_app is not None and cls._backend == "dynamo":
            dynamo_client = cls.get_dynamodb_client(flask_app)
        cls._dynamo_client = dynamo_client

    @classmethod
    def get(cls, object_type: str, *, table_name=None, key_field="key", indexes=None):
        """Get or create a repository instance for the specified object type.

        Args:
            object_type: Type of object the repository will handle
            table_name: Optional table name override (for DynamoDB)
            key_field: Field name to use as primary key
            indexes: Optional IndexDefinition list the repository can query

        Returns:
            Repository instance for the specified object type

        Raises:
            ValueError: If factory is not configured or backend is unsupported
        """
        if cls._backend is None:
            raise ValueError("RepositoryFactory not configured.")

        if object_type in cls._instances:
            return cls._instances[object_type]

        if cls._backend == "dynamo":
            # Lazy import to avoid importing unused backends at module import time
            from quotestore.repositories.dynamo_repository import DynamoRepository
            repo = DynamoRepository(
                table_name=table_name or object_type,
                key_field=key_field,
                dynamo_client=cls._dynamo_client,
                indexes=indexes
            )
        else:
            raise ValueError(f"Unsupported backend: {cls._backend}")

        cls._instances[object_type] = repo
        return repo

    @classmethod
    def close(cls):
        """Release the shared connection and forget every repository."""
        if cls._dynamo_client is not None:
            cls._dynamo_client.meta.client.close()
        cls._instances = {}
        cls._backend = None
        cls._dynamo_client = None
