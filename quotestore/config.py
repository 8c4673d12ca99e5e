"""
Configuration objects for the Flask application.
Sets the data that can be accessed with app.config["key"]
"""

import os


class BaseConfig:
    # pylint: disable=too-few-public-methods
    """Base configuration"""

    SECRET_KEY = os.environ.get('SECRET_KEY')

    DATABASE_BACKEND = 'dynamo'.lower()
    DYNAMODB_REGION = os.environ.get('DYNAMODB_REGION')
    DYNAMODB_ENDPOINT = os.environ.get('DYNAMODB_ENDPOINT')
    DYNAMODB_ACCESS_KEY = os.environ.get('DYNAMODB_ACCESS_KEY')
    DYNAMODB_SECRET_KEY = os.environ.get('DYNAMODB_SECRET_KEY')

    # Quote storage
    QUOTES_TABLE_NAME = os.environ.get('QUOTES_TABLE_NAME', 'quotes')
    QUOTES_INDEX_NAME = os.environ.get('QUOTES_INDEX_NAME', 'name_and_quote')


class DevelopmentConfig(BaseConfig):
    # pylint: disable=too-few-public-methods
    """Development configuration"""

    DEBUG = True
    FLASK_DEBUG = True


class QAConfig(BaseConfig):
    # pylint: disable=too-few-public-methods
    """QA configuration"""

    DEBUG = False
    FLASK_DEBUG = False


class ProductionConfig(BaseConfig):
    # pylint: disable=too-few-public-methods
    """Production configuration"""

    DEBUG = False
    FLASK_DEBUG = False
