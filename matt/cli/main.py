"""
MATT CLI - Command Line Interface for MATT auction clearing

Main entry point for all CLI commands.
"""

import asyncio
import json

import click

from matt.utils.logger import CLI, MattLogger, get_logger

logger = get_logger(CLI)


def _load_bids(path, max_bids):
    from matt.core.bid import BidFormatError
    from matt.core.schemas import load_signed_bids

    try:
        bids = load_signed_bids(path, max_bids=max_bids)
    except BidFormatError as e:
        raise click.ClickException(str(e))
    logger.debug(f"Loaded {len(bids)} bids from {path}")
    return bids


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="JSON config file")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, config_path):
    """MATT - uniform-price NFT auction clearing"""
    from matt.core.config import load_config

    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    MattLogger.setup_from_config(config, debug=debug)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# =============================================================================
# Clearing Commands
# =============================================================================


@cli.command("clear")
@click.argument("bids_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--reject", multiple=True, help="Bidder address to treat as failing verification")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def clear(ctx, bids_file, reject, as_json):
    """Choose the winning bids and the clearing price"""
    from matt.core.clearing import clear_bids

    config = ctx.obj["config"]
    bids = _load_bids(bids_file, config.max_bids)
    rejected = {address.lower() for address in reject}

    def verify(signed_bid):
        return signed_bid.bidder.lower() not in rejected

    result = asyncio.run(clear_bids(bids, verify, max_concurrency=config.verify_concurrency))

    if as_json:
        click.echo(json.dumps({
            "clearing_price": result.clearing_price,
            "revenue": result.revenue,
            "editions": result.editions,
            "verified": result.verified_count,
            "winners": [b.to_dict() for b in result.winners],
        }, indent=2))
        return

    click.echo(f"Clearing price: {result.clearing_price}")
    click.echo(f"Editions: {result.editions} of {result.verified_count} verified bids")
    click.echo(f"Revenue: {result.revenue}")
    for signed_bid in result.winners:
        click.echo(f"  {signed_bid.bidder}  bid={signed_bid.amount}  pays={result.clearing_price}")


@cli.command("curve")
@click.argument("bids_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def curve(ctx, bids_file):
    """Show seller revenue at every bid price"""
    from matt.core.clearing import revenue_curve

    config = ctx.obj["config"]
    bids = _load_bids(bids_file, config.max_bids)
    points = revenue_curve(bids)
    if not points:
        click.echo("No bids.")
        return

    click.echo(f"{'price':>20} {'bidders':>8} {'revenue':>24}")
    for point in points:
        click.echo(f"{point.price:>20} {point.bidders:>8} {point.revenue:>24}")


@cli.command("digest")
@click.argument("bids_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--chain-id", type=int, default=None, help="Chain id of the auction contract")
@click.option("--contract", default=None, help="Auction contract address")
@click.pass_context
def digest(ctx, bids_file, chain_id, contract):
    """Print the EIP-712 digest each bidder signed"""
    from matt.core.typed_data import create_typed_message, signing_digest
    from matt.crypto import bytes_to_hex, is_valid_address

    config = ctx.obj["config"]
    chain_id = chain_id if chain_id is not None else config.chain_id
    contract = contract or config.verifying_contract
    if not contract or not is_valid_address(contract):
        raise click.ClickException("A valid --contract address is required")

    for signed_bid in _load_bids(bids_file, config.max_bids):
        message = create_typed_message(
            signed_bid.bid,
            chain_id,
            contract,
            name=config.domain_name,
            version=config.domain_version,
        )
        try:
            value = signing_digest(message)
        except ValueError as e:
            raise click.ClickException(f"Cannot hash bid from {signed_bid.bidder}: {e}")
        click.echo(f"{signed_bid.bidder}  {bytes_to_hex(value)}")


if __name__ == "__main__":
    cli()
