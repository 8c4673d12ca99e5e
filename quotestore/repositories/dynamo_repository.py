"""DynamoDB repository implementation for document store operations."""

import logging
from decimal import Decimal

from quotestore.base.base_repository import BaseRepository
from quotestore.base.document import Document, IndexRow, Stale
from quotestore.repositories.errors import (
    DocumentExistsError,
    DocumentNotFoundError,
    StoreError,
    TableNotFoundError,
    VersionConflictError
)


logger = logging.getLogger(__name__)

VERSION_FIELD = "version"


def convert_floats_to_decimals(obj):
    """
    Recursively convert float values to Decimal types for DynamoDB compatibility

    Args:
        obj: The object to convert (dict, list, or primitive type)

    Returns:
        The converted object with floats replaced by Decimals
    """
    if isinstance(obj, dict):
        return {key: convert_floats_to_decimals(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [convert_floats_to_decimals(item) for item in obj]
    if isinstance(obj, float):
        return Decimal(str(obj))
    # Return as is if not float
    return obj


def convert_decimals_to_numbers(obj):
    """
    Recursively convert Decimal values read from DynamoDB back to Python numbers.
    Whole numbers become int, everything else float.

    Args:
        obj: The object to convert (dict, list, or primitive type)

    Returns:
        The converted object with Decimals replaced by ints or floats
    """
    if isinstance(obj, dict):
        return {key: convert_decimals_to_numbers(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [convert_decimals_to_numbers(item) for item in obj]
    if isinstance(obj, Decimal):
        return int(obj) if obj % 1 == 0 else float(obj)
    return obj


class DynamoRepository(BaseRepository):
    """DynamoDB repository implementation of the document store interface.

    Each document is one item keyed by `key_field`. The item also carries a
    numeric `version` attribute which conditional writes use as the
    optimistic-concurrency token. Indexes are named projections over the table
    evaluated with a scan.
    """

    def __init__(self, table_name: str, key_field: str = "key", dynamo_client=None, indexes=None):
        super().__init__(key_field)
        if dynamo_client is None:
            raise ValueError("dynamo_client must be provided")
        self.table_name = table_name
        self.table = dynamo_client.Table(table_name)
        self.indexes = {index.name: index for index in indexes or []}

    @property
    def _exceptions(self):
        return self.table.meta.client.exceptions

    def _to_item(self, document: Document, version: int) -> dict:
        item = dict(document.content)
        item[self.key_field] = document.key
        item[VERSION_FIELD] = version
        return convert_floats_to_decimals(item)

    def _to_document(self, item: dict) -> Document:
        content = convert_decimals_to_numbers(item)
        version = content.pop(VERSION_FIELD, None)
        return Document(content.get(self.key_field), content, version, stored=True)

    def get_document(self, key: str):
        """Get a single document from DynamoDB"""
        try:
            response = self.table.get_item(Key={self.key_field: key}, ConsistentRead=True)
        except self._exceptions.ResourceNotFoundException as exc:
            raise TableNotFoundError(f"Table '{self.table_name}' does not exist") from exc

        item = response.get("Item")
        return self._to_document(item) if item else None

    def insert(self, document: Document):
        """Create a new document in DynamoDB, failing if the key is taken"""
        item = self._to_item(document, version=0)
        try:
            self.table.put_item(
                Item=item,
                ConditionExpression="attribute_not_exists(#key_field)",
                ExpressionAttributeNames={"#key_field": self.key_field}
            )
        except self._exceptions.ConditionalCheckFailedException as exc:
            raise DocumentExistsError(f"Document with key '{document.key}' already exists") from exc
        except self._exceptions.ResourceNotFoundException as exc:
            raise TableNotFoundError(f"Table '{self.table_name}' does not exist") from exc

        logger.debug("Inserted document '%s' into '%s'", document.key, self.table_name)
        return Document(document.key, dict(document.content), 0, stored=True)

    def replace(self, document: Document):
        """
        Replace an existing document in DynamoDB with version checking

        A document stored without a version attribute is replaced only while it
        still has none, and comes back at version 1.

        Args:
            document: Document read from the store, carrying the new content

        Returns:
            The stored Document with its new version
        """
        if not document.stored:
            raise ValueError("replace requires a document read from the store")

        put_kwargs = {
            'ReturnValuesOnConditionCheckFailure': "ALL_OLD"
        }
        if document.version is None:
            new_version = 1
            put_kwargs['ConditionExpression'] = "attribute_exists(#key_field) AND attribute_not_exists(#version)"
            put_kwargs['ExpressionAttributeNames'] = {"#key_field": self.key_field, "#version": VERSION_FIELD}
            read_at = "without a version"
        else:
            new_version = document.version + 1
            put_kwargs['ConditionExpression'] = "#version = :expected_version"
            put_kwargs['ExpressionAttributeNames'] = {"#version": VERSION_FIELD}
            put_kwargs['ExpressionAttributeValues'] = {":expected_version": document.version}
            read_at = f"at version {document.version}"

        item = self._to_item(document, version=new_version)
        try:
            self.table.put_item(Item=item, **put_kwargs)
        except self._exceptions.ConditionalCheckFailedException as exc:
            # ALL_OLD puts the current item, if any, on the error response
            current = getattr(exc, "response", {}).get("Item")
            if not current:
                raise DocumentNotFoundError(f"Document with key '{document.key}' does not exist") from exc
            raise VersionConflictError(
                f"Document with key '{document.key}' changed since it was read {read_at}"
            ) from exc
        except self._exceptions.ResourceNotFoundException as exc:
            raise TableNotFoundError(f"Table '{self.table_name}' does not exist") from exc

        logger.debug("Replaced document '%s' in '%s' at version %s", document.key, self.table_name, new_version)
        return Document(document.key, dict(document.content), new_version, stored=True)

    def query_index(self, index_query):
        """
        Evaluate a registered index over the whole table

        Args:
            index_query: IndexQuery naming the index and the consistency to read with

        Returns:
            List of IndexRow ordered by key
        """
        index = self.indexes.get(index_query.index_name)
        if index is None:
            raise StoreError(f"Index '{index_query.index_name}' is not defined for table '{self.table_name}'")

        scan_kwargs = {
            'ProjectionExpression': "#index_key, #index_value",
            'ExpressionAttributeNames': {
                '#index_key': index.key_attribute,
                '#index_value': index.value_attribute
            },
            'ConsistentRead': index_query.stale is Stale.FALSE
        }

        rows = []
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                for item in response.get("Items", []):
                    if index.key_attribute not in item:
                        continue
                    item = convert_decimals_to_numbers(item)
                    rows.append(IndexRow(item[index.key_attribute], item.get(index.value_attribute)))

                # Scans are paged at 1MB
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs['ExclusiveStartKey'] = last_key
        except self._exceptions.ResourceNotFoundException as exc:
            raise TableNotFoundError(f"Table '{self.table_name}' does not exist") from exc

        rows.sort(key=lambda row: str(row.key))
        return rows

    def close(self):
        """Close the connection pool of the underlying DynamoDB client"""
        self.table.meta.client.close()
