#!/usr/bin/env python3
"""
Command-line interface for vault quotes and token metadata.

Usage:
    python -m vaultswap.cli metadata --token 0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48
    python -m vaultswap.cli quote --token-a 0x... --token-b 0x... --amount 1000000 --price 2000000
    python -m vaultswap.cli quote --token-a native --token-b 0x... --amount 1000000 --price 2000000 --sell
"""

import argparse
import logging
import sys

from vaultswap.chain import Web3Backend
from vaultswap.config import get_config
from vaultswap.core import NATIVE, Currency, VaultError, currency_from_address
from vaultswap.pricing import PriceConverter
from vaultswap.tokens import TokenMetadataProbe


# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def parse_currency(value: str) -> Currency:
    """Parse 'native' or a token address into a currency."""
    if value.lower() == "native":
        return NATIVE
    return currency_from_address(value)


def run_metadata(args, probe: TokenMetadataProbe) -> bool:
    """Probe and display token metadata."""
    metadata = probe.get_metadata(args.token)

    logger.info(f"Token:    {metadata.address}")
    logger.info(f"Name:     {metadata.name if metadata.name is not None else '<unavailable>'}")
    logger.info(f"Symbol:   {metadata.symbol if metadata.symbol is not None else '<unavailable>'}")
    logger.info(f"Decimals: {metadata.decimals if metadata.has_decimals else '<unavailable>'}")
    return metadata.has_decimals


def run_quote(args, probe: TokenMetadataProbe) -> bool:
    """Compute and display a swap quote."""
    config = get_config()
    converter = PriceConverter(probe, config.pricing)
    token_a = parse_currency(args.token_a)
    token_b = parse_currency(args.token_b)

    amount_out = converter.get_amount_out(
        not args.sell, token_a, token_b, args.amount, args.price
    )

    side = "sell" if args.sell else "buy"
    logger.info(f"{side} {args.amount} @ {args.price} (fee {config.pricing.FEE_RATE_BP} bp)")
    print(amount_out)
    return True


def main():
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Vault swap quotes and token metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Metadata of USDC
  python -m vaultswap.cli metadata --token 0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48

  # Spend 100 WETH for USDC at 2 USDC per WETH
  python -m vaultswap.cli quote --token-a 0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2 \\
      --token-b 0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48 \\
      --amount 100000000000000000000 --price 2000000
        """,
    )
    parser.add_argument("--rpc-url", help="RPC endpoint (defaults to RPC_URL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    metadata_parser = subparsers.add_parser("metadata", help="Probe token metadata")
    metadata_parser.add_argument("--token", required=True, help="Token address")

    quote_parser = subparsers.add_parser("quote", help="Quote a swap")
    quote_parser.add_argument("--token-a", required=True, help="Traded token address or 'native'")
    quote_parser.add_argument("--token-b", required=True, help="Reference token address or 'native'")
    quote_parser.add_argument("--amount", type=int, required=True, help="Amount in, base units")
    quote_parser.add_argument(
        "--price", type=int, required=True, help="Price scaled to token B's decimals"
    )
    quote_parser.add_argument(
        "--sell", action="store_true", help="Spend token B for token A (default: buy)"
    )

    args = parser.parse_args()

    try:
        config = get_config()
        backend = Web3Backend.from_rpc_url(
            args.rpc_url or config.chains.RPC_URL,
            receipt_timeout=config.chains.RECEIPT_TIMEOUT_SECONDS,
        )
        probe = TokenMetadataProbe(backend, native_decimals=config.chains.NATIVE_DECIMALS)

        if args.command == "metadata":
            success = run_metadata(args, probe)
        else:
            success = run_quote(args, probe)

        sys.exit(0 if success else 1)

    except VaultError as e:
        logger.error(f"{e.kind.value}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
