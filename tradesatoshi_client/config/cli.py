"""Command-line interface for querying the TradeSatoshi API."""

import functools
import json
import sys
from pathlib import Path
from typing import Optional

import click

from ..api.client import TradeSatoshiClient
from ..api.errors import APIError, TradeSatoshiError, TransportError
from ..api.signer import Credentials
from ..api.transport import Transport
from ..logging.logger import initialize_logging
from .manager import DEFAULT_CONFIG_PATH, LOGGING_DEFAULTS, ConfigManager, ConfigValidationError


def _to_json(result) -> str:
    if isinstance(result, list):
        payload = [item.to_dict() for item in result]
    else:
        payload = result.to_dict()
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _build_client(config_path: Optional[str]) -> TradeSatoshiClient:
    """Client from the config file when one exists, built-in defaults otherwise."""
    manager = ConfigManager(config_path)
    if config_path is None and not Path(manager.config_path).exists():
        return TradeSatoshiClient(credentials=Credentials.from_env(), transport=Transport())
    return TradeSatoshiClient.from_config(manager)


def api_command(func):
    """Run an endpoint callback and print its result, or the error in red."""
    @functools.wraps(func)
    @click.pass_context
    def wrapper(ctx, **kwargs):
        try:
            client = _build_client(ctx.obj['config_path'])
            result = func(client, **kwargs)
        except ConfigValidationError as e:
            click.echo(click.style("✗ Configuration error:", fg='red'), err=True)
            click.echo(f"  Error: {e.message}", err=True)
            if e.field_path:
                click.echo(f"  Field: {e.field_path}", err=True)
            sys.exit(1)
        except APIError as e:
            click.echo(click.style(f"✗ Exchange rejected the request: {e.message}", fg='red'), err=True)
            sys.exit(1)
        except TransportError as e:
            click.echo(click.style(f"✗ Request failed: {e}", fg='red'), err=True)
            sys.exit(1)
        except TradeSatoshiError as e:
            click.echo(click.style(f"✗ {type(e).__name__}: {e}", fg='red'), err=True)
            sys.exit(1)
        click.echo(_to_json(result))
    return wrapper


@click.group()
@click.option('--config-path', '-c', default=None,
              help=f'Path to configuration file (default: $TRADESATOSHI_CONFIG or {DEFAULT_CONFIG_PATH})')
@click.option('--log-level', default=None, help='Override the configured log level')
@click.pass_context
def cli(ctx, config_path: Optional[str], log_level: Optional[str]):
    """Query the TradeSatoshi exchange API."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path

    settings = dict(LOGGING_DEFAULTS)
    manager = ConfigManager(config_path)
    if Path(manager.config_path).exists():
        try:
            settings = manager.get_logging_settings()
        except ConfigValidationError:
            # reported by the command itself
            pass

    initialize_logging(
        log_level=log_level or settings['level'],
        log_dir=settings['dir'],
        console_output=settings['console'],
        file_output=settings['file'],
        structured_format=settings['structured'],
    )


@cli.command('validate-config')
@click.pass_context
def validate_config(ctx):
    """Validate a configuration file."""
    manager = ConfigManager(ctx.obj['config_path'])
    click.echo(f"Validating configuration: {manager.config_path}")

    try:
        manager.load_config()
    except ConfigValidationError as e:
        click.echo(click.style("✗ Configuration validation failed:", fg='red'))
        click.echo(f"  Error: {e.message}")
        if e.field_path:
            click.echo(f"  Field: {e.field_path}")
        if e.expected_type and e.actual_value:
            click.echo(f"  Expected: {e.expected_type}, Got: {e.actual_value}")
        sys.exit(1)

    click.echo(click.style("✓ Configuration is valid", fg='green'))
    api = manager.get_api_settings()
    click.echo("\nConfiguration Summary:")
    click.echo(f"  Base URL: {api['base_url']}")
    click.echo(f"  Timeout: {api['timeout']}s")
    click.echo(f"  Request logging: {'on' if api['log_requests'] else 'off'}")
    has_credentials = Credentials.from_env() is not None
    click.echo(f"  Credentials: {'found in environment' if has_credentials else 'not set'}")


@cli.command()
@api_command
def currencies(client):
    """List all currencies."""
    return client.get_currencies()


@cli.command()
@click.argument('market')
@api_command
def ticker(client, market: str):
    """Show the ticker for MARKET (e.g. LTC_BTC)."""
    return client.get_ticker(market)


@cli.command()
@click.argument('market')
@click.option('--count', type=int, default=None, help='Number of trades (default 20)')
@api_command
def history(client, market: str, count: Optional[int]):
    """Show recent public trades for MARKET."""
    return client.get_market_history(market, count=count)


@cli.command()
@click.argument('market')
@api_command
def summary(client, market: str):
    """Show the 24h summary for MARKET."""
    return client.get_market_summary(market)


@cli.command()
@api_command
def summaries(client):
    """Show 24h summaries for all markets."""
    return client.get_market_summaries()


@cli.command()
@click.argument('market')
@click.option('--type', 'book_type', type=click.Choice(['buy', 'sell', 'both']), default=None)
@click.option('--depth', type=int, default=None, help='Levels per side (default 20)')
@api_command
def orderbook(client, market: str, book_type: Optional[str], depth: Optional[int]):
    """Show the order book for MARKET."""
    return client.get_order_book(market, type=book_type, depth=depth)


@cli.command()
@click.argument('currency')
@api_command
def balance(client, currency: str):
    """Show the balance of CURRENCY (requires credentials)."""
    return client.get_balance(currency)


@cli.command()
@api_command
def balances(client):
    """Show all balances (requires credentials)."""
    return client.get_balances()


@cli.command()
@click.option('--market', default=None, help="Market name (default 'all')")
@click.option('--count', type=int, default=None)
@api_command
def orders(client, market: Optional[str], count: Optional[int]):
    """List open orders (requires credentials)."""
    return client.get_orders(market=market, count=count)


@cli.command()
@click.option('--market', default=None, help="Market name (default 'all')")
@click.option('--count', type=int, default=None)
@click.option('--page', 'page_num', type=int, default=None)
@api_command
def trades(client, market: Optional[str], count: Optional[int], page_num: Optional[int]):
    """List executed trades (requires credentials)."""
    return client.get_trade_history(market=market, count=count, page_num=page_num)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
