"""
Root conftest.py for the quote store test suite.

Provides fixtures for the Flask app, test client, an in-memory DynamoDB
resource and factory resets.
"""

import os
import subprocess
import threading
import pytest

# Load tests/envs.sh so INTEGRATION and DYNAMODB_* from that file apply (no need to source in shell)
_CONFTEST_DIR = os.path.dirname(os.path.abspath(__file__))
_ENVS_SH = os.path.join(_CONFTEST_DIR, "tests", "envs.sh")
if os.path.isfile(_ENVS_SH):
    _out = subprocess.run(
        ["bash", "-c", f"set -a && . '{_ENVS_SH}' && set +a && env -0"],
        capture_output=True,
        text=True,
        cwd=_CONFTEST_DIR,
        check=False,
    )
    if _out.returncode == 0 and _out.stdout:
        for _chunk in _out.stdout.split("\0"):
            if "=" in _chunk:
                _k, _, _v = _chunk.partition("=")
                os.environ[_k] = _v

# Set test environment before importing the app
# When INTEGRATION=1 (set in tests/envs.sh), leave DYNAMODB_* from env
os.environ['APP_SETTINGS'] = 'quotestore.config.DevelopmentConfig'
os.environ['FLASK_DEBUG'] = 'true'
if os.environ.get('INTEGRATION') != '1':
    os.environ.setdefault('DYNAMODB_ENDPOINT', 'http://localhost:98000')
    os.environ.setdefault('DYNAMODB_REGION', 'us-east-1')
    os.environ.setdefault('DYNAMODB_ACCESS_KEY', 'fakeMyKeyId')
    os.environ.setdefault('DYNAMODB_SECRET_KEY', 'fakeSecretAccessKey')


from quotestore.repositories.repository_factory import RepositoryFactory


def _reset_all_factories():
    """Reset the repository factory to a clean state."""
    RepositoryFactory._instances = {}
    RepositoryFactory._backend = None
    RepositoryFactory._dynamo_client = None


class ConditionalCheckFailedException(Exception):
    """Mirrors botocore's error: the current item rides on `response` when asked for."""

    def __init__(self, message, item=None):
        super().__init__(message)
        self.response = {"Error": {"Code": "ConditionalCheckFailedException", "Message": message}}
        if item is not None:
            self.response["Item"] = item


class ResourceNotFoundException(Exception):
    pass


class MockLowLevelClient:
    """Stands in for table.meta.client."""

    class _Exceptions:
        ConditionalCheckFailedException = ConditionalCheckFailedException
        ResourceNotFoundException = ResourceNotFoundException

    exceptions = _Exceptions()

    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class MockMeta:

    def __init__(self, client):
        self.client = client


class MockDynamoTable:
    """In-memory mock of a DynamoDB table for testing.

    Supports the condition expressions, projections and scan paging the
    repositories use. `page_size` bounds the number of items a scan returns
    before handing back a LastEvaluatedKey.
    """

    def __init__(self, table_name, key_field="name", client=None, page_size=None):
        self.table_name = table_name
        self.key_field = key_field
        self.meta = MockMeta(client or MockLowLevelClient())
        self.page_size = page_size
        self.items = {}
        self.scan_calls = []
        self.get_calls = []
        self._lock = threading.Lock()

    def get_item(self, Key, ConsistentRead=False):
        self.get_calls.append({'Key': Key, 'ConsistentRead': ConsistentRead})
        item = self.items.get(Key.get(self.key_field))
        if item:
            return {'Item': dict(item)}
        return {}

    @staticmethod
    def _condition_holds(condition, current, names, values):
        """Evaluate the ' AND '-joined clauses the repositories write with."""
        for clause in condition.split(' AND '):
            clause = clause.strip()
            if clause.startswith('attribute_not_exists('):
                placeholder = clause[clause.index('(') + 1:-1]
                attr_name = names.get(placeholder, placeholder)
                if current is not None and attr_name in current:
                    return False
            elif clause.startswith('attribute_exists('):
                placeholder = clause[clause.index('(') + 1:-1]
                attr_name = names.get(placeholder, placeholder)
                if current is None or attr_name not in current:
                    return False
            elif ' = ' in clause:
                attr_placeholder, val_placeholder = [part.strip() for part in clause.split(' = ')]
                attr_name = names.get(attr_placeholder, attr_placeholder)
                if current is None or current.get(attr_name) != values.get(val_placeholder):
                    return False
        return True

    def put_item(self, Item, ConditionExpression=None, ExpressionAttributeNames=None,
                 ExpressionAttributeValues=None, ReturnValuesOnConditionCheckFailure=None):
        names = ExpressionAttributeNames or {}
        values = ExpressionAttributeValues or {}
        key = Item[self.key_field]

        with self._lock:
            current = self.items.get(key)

            if ConditionExpression and not self._condition_holds(ConditionExpression, current, names, values):
                old_item = dict(current) if current and ReturnValuesOnConditionCheckFailure == 'ALL_OLD' else None
                raise ConditionalCheckFailedException("The conditional request failed", item=old_item)

            self.items[key] = dict(Item)

    def scan(self, **kwargs):
        self.scan_calls.append(dict(kwargs))
        keys = sorted(self.items)

        start_key = kwargs.get('ExclusiveStartKey')
        if start_key:
            keys = [key for key in keys if key > start_key[self.key_field]]

        last_evaluated_key = None
        if self.page_size is not None and len(keys) > self.page_size:
            keys = keys[:self.page_size]
            last_evaluated_key = {self.key_field: keys[-1]}

        items = [dict(self.items[key]) for key in keys]

        projection = kwargs.get('ProjectionExpression')
        if projection:
            names = kwargs.get('ExpressionAttributeNames', {})
            attributes = [names.get(part.strip(), part.strip()) for part in projection.split(',')]
            items = [{attr: item[attr] for attr in attributes if attr in item} for item in items]

        response = {'Items': items, 'Count': len(items)}
        if last_evaluated_key:
            response['LastEvaluatedKey'] = last_evaluated_key
        return response


class MockDynamoClient:
    """Mock DynamoDB resource that returns MockDynamoTable instances."""

    def __init__(self, key_field="name", page_size=None):
        self.key_field = key_field
        self.page_size = page_size
        self.meta = MockMeta(MockLowLevelClient())
        self.tables = {}

    def Table(self, table_name):
        if table_name not in self.tables:
            self.tables[table_name] = MockDynamoTable(
                table_name,
                key_field=self.key_field,
                client=self.meta.client,
                page_size=self.page_size
            )
        return self.tables[table_name]


@pytest.fixture
def mock_dynamo_client():
    """Provide a mock DynamoDB resource."""
    return MockDynamoClient()


@pytest.fixture
def quotes_table(mock_dynamo_client):
    """The in-memory table backing the quote store."""
    return mock_dynamo_client.Table('quotes')


@pytest.fixture
def app(mock_dynamo_client):
    """Create a Flask application for testing with a mocked DynamoDB."""
    from flask import Flask
    import quotestore.helpers.error as qserror
    from quotestore.api_v1 import health
    from quotestore.api_v2 import quotes
    from quotestore.models.quote_store import QuoteStore

    # Reset all factories to ensure clean state
    _reset_all_factories()

    flask_app = Flask(__name__, instance_relative_config=True)
    flask_app.config['TESTING'] = True
    flask_app.config['DYNAMODB_ENDPOINT'] = 'http://localhost:98000'
    flask_app.config['DYNAMODB_REGION'] = 'us-east-1'
    flask_app.config['DYNAMODB_ACCESS_KEY'] = 'fakeMyKeyId'
    flask_app.config['DYNAMODB_SECRET_KEY'] = 'fakeSecretAccessKey'
    flask_app.config['QUOTES_TABLE_NAME'] = 'quotes'
    flask_app.config['QUOTES_INDEX_NAME'] = 'name_and_quote'

    # Configure factory with the mock
    RepositoryFactory.configure(
        "dynamo",
        dynamo_client=mock_dynamo_client,
        flask_app=flask_app
    )
    flask_app.extensions["quote_store"] = QuoteStore.from_factory(
        table_name='quotes',
        index_name='name_and_quote'
    )

    # Register blueprints
    flask_app.register_blueprint(health.bp)
    flask_app.register_blueprint(quotes.bp)

    # Register error handlers
    for code in [400, 404, 405, 409, 500]:
        flask_app.register_error_handler(code, qserror.handle_error)

    yield flask_app

    # Cleanup after test
    _reset_all_factories()


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def quote_store(app):
    """The QuoteStore registered on the test app."""
    return app.extensions["quote_store"]


@pytest.fixture
def json_headers():
    """Provide JSON content-type headers."""
    return {
        'Content-Type': 'application/json'
    }


@pytest.fixture
def sample_quote_data():
    """Provide sample quote data for POST requests."""
    return {
        'name': 'Alice',
        'quote': 'Hello'
    }


@pytest.fixture
def sample_quote_item():
    """Provide a quote item as stored in the database."""
    return {
        'name': 'Bob',
        'quote': 'Old',
        'version': 0
    }


@pytest.fixture
def make_dynamo_client():
    """Build extra in-memory DynamoDB resources, e.g. make_dynamo_client(page_size=2)."""
    return MockDynamoClient


@pytest.fixture
def reset_factories():
    """Reset the repository factory on demand."""
    return _reset_all_factories


@pytest.fixture
def unversioned_quote_item():
    """Provide a quote item stored as plain {name, quote}, without a version."""
    return {
        'name': 'Bob',
        'quote': 'Old'
    }
