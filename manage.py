"""
Manager module for the Flask Application
"""


import click
from flask import current_app
from flask.cli import FlaskGroup
import serverless_wsgi
import logging

from quotestore import create_app
from quotestore.helpers.quote import get_quote_store
from quotestore.models.quote import Quote


def clear_root_handlers(root=None):
    """Cleanup logging for proper lambda logs"""
    root = root or logging.getLogger()
    for root_handler in list(root.handlers):
        root.removeHandler(root_handler)


clear_root_handlers()

# very important for the running of uwsgi to have app here
app = create_app()
cli = FlaskGroup(create_app=create_app)


@cli.command('add-quote')
@click.argument('name')
@click.argument('quote')
def add_quote(name, quote):
    """
    add_quote Store QUOTE for NAME, replacing any quote NAME already has
    """
    if get_quote_store().upsert_quote(Quote(name=name, quote=quote)):
        click.echo(f"Stored quote for {name}")
    else:
        current_app.logger.warning("Quote for %s was created concurrently", name)
        raise click.ClickException(f"Quote for {name} was created by another writer, run again to update it")


@cli.command('list-quotes')
def list_quotes():
    """
    list_quotes Print every stored quote
    """
    for quote in get_quote_store().fetch_all_quotes():
        click.echo(f"{quote.name}: {quote.quote}")


def handler(event, context):
    print("=== Starting Flask App ===")
    return serverless_wsgi.handle_request(app, event, context)


if __name__ == '__main__':
    cli()
