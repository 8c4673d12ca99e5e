"""
Flask Application init
"""

import logging
import os

from flask import Flask

import quotestore.helpers.error as qserror
from quotestore.repositories.repository_factory import RepositoryFactory
from quotestore.models.quote_store import QuoteStore
from quotestore.api_v1 import health
from quotestore.api_v2 import quotes


def create_app(config_object=None):
    """
    create_app Will setup the Flask application, all blueprints and the quote store

    :param config_object: Optional config object or import path, defaults to $APP_SETTINGS
    """

    # create and configure the flask_application
    flask_application = Flask(__name__, instance_relative_config=True)

    # load the app config values from the config python file
    app_settings = config_object or os.getenv('APP_SETTINGS', 'quotestore.config.DevelopmentConfig')
    flask_application.config.from_object(app_settings)

    # Configure logging
    if flask_application.debug:
        flask_application.logger.setLevel(logging.DEBUG)
    else:
        flask_application.logger.setLevel(logging.INFO)

    # Setup repository factory and the quote store on top of it
    RepositoryFactory.configure(
        flask_application.config.get("DATABASE_BACKEND", "dynamo"),
        dynamo_client=RepositoryFactory.get_dynamodb_client(flask_application),
        flask_app=flask_application
    )
    flask_application.extensions["quote_store"] = QuoteStore.from_factory(
        table_name=flask_application.config.get("QUOTES_TABLE_NAME"),
        index_name=flask_application.config.get("QUOTES_INDEX_NAME")
    )

    # load api endpoints
    flask_application.register_blueprint(health.bp)
    flask_application.register_blueprint(quotes.bp)

    # Setup the Error handlers
    for code in [400, 404, 405, 409, 500]:
        flask_application.register_error_handler(code, qserror.handle_error)

    return flask_application
