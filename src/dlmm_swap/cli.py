import argparse
import asyncio
import logging
import os
import sys
import time
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

from .client import DlmmClient
from .collaborators import HttpPoolDataSource, HttpSwapSubmitter
from .config import ClientConfig, load_config
from .errors import DlmmError, ValidationError
from .models import SwapParams
from .registry import UNKNOWN_PAIR_NAME, find_pair

PLACEHOLDER_WALLET = "REPLACE_WITH_YOUR_PUBLIC_KEY"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    log = logging.getLogger("dlmm_swap")
    log.setLevel(level)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        fmt = logging.Formatter("%(asctime)sZ %(levelname)-7s %(name)s: %(message)s", "%Y-%m-%dT%H:%M:%S")
        fmt.converter = time.gmtime
        handler.setFormatter(fmt)
        log.addHandler(handler)
    return log


def build_client(config: ClientConfig, live: bool) -> DlmmClient:
    if not live:
        return DlmmClient(config)
    return DlmmClient(config, submitter=HttpSwapSubmitter(config), pool_data=HttpPoolDataSource(config))


async def run_demo(client: DlmmClient, params: SwapParams, pair_address: Optional[str]) -> List[str]:
    lines = [f"Network: {client.config.network} ({client.config.rpc_endpoint})"]

    quote = client.quote(params)
    lines.append(f"Quote {params.input_token} -> {params.output_token}")
    lines.append(f"  Input: {quote.input_amount} {params.input_token}")
    lines.append(f"  Expected Output: {quote.expected_output:.2f} {params.output_token}")
    lines.append(f"  Price Impact: {quote.price_impact:.8f}%")
    lines.append(f"  Estimated Fee: {quote.fee:.4f} {params.input_token}")

    result = await client.execute_swap(params)
    if result.success:
        lines.append(f"Swap submitted: {result.signature}")
    else:
        lines.append(f"Swap failed ({result.error_kind}): {result.error}")

    if pair_address is None:
        lines.append(f"Pair {params.input_token}-{params.output_token}: {UNKNOWN_PAIR_NAME}, no liquidity data")
        return lines

    stats = await client.get_pair_stats(pair_address)
    lines.append(f"Pair {stats.name}: total liquidity {stats.total_liquidity:,.0f}")
    if stats.volume_24h is not None:
        lines.append(f"  24h Volume: {stats.volume_24h:,.0f}")
    if stats.apy is not None:
        lines.append(f"  APY: {stats.apy}%")
    if stats.bin_count is not None:
        lines.append(f"  Active Bins: {stats.bin_count}")
    return lines


def parse_amount(raw: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {raw}") from None


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Quote and execute a DLMM swap")
    parser.add_argument("--config", type=Path, default=None, help="YAML client configuration")
    parser.add_argument("--wallet", default=os.environ.get("WALLET_PUBLIC_KEY", PLACEHOLDER_WALLET))
    parser.add_argument("--input", dest="input_token", default="SOL")
    parser.add_argument("--output", dest="output_token", default="USDC")
    parser.add_argument("--amount", type=parse_amount, default=Decimal("1.0"))
    parser.add_argument("--pair", default=None, help="Pair address; looked up from the token pair when omitted")
    parser.add_argument("--min-output", type=parse_amount, default=None)
    parser.add_argument("--live", action="store_true", help="Submit through the configured HTTP services")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    log = configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        config = load_config(args.config) if args.config else ClientConfig()
        client = build_client(config, args.live)
    except (OSError, ValueError) as exc:
        log.error("cannot configure client: %s", exc)
        return 2
    if args.wallet == PLACEHOLDER_WALLET:
        log.warning("no wallet configured; set WALLET_PUBLIC_KEY or pass --wallet")

    pair = find_pair(args.input_token, args.output_token)
    pair_address = args.pair or (pair.address if pair else None)
    if pair_address is None:
        log.warning("no DLMM pair listed for %s-%s; pass --pair to query one", args.input_token, args.output_token)
    params = SwapParams(
        input_token=args.input_token,
        output_token=args.output_token,
        amount=args.amount,
        wallet_public_key=args.wallet,
        min_output_amount=args.min_output,
        pair_address=args.pair,
    )

    try:
        lines = asyncio.run(run_demo(client, params, pair_address))
    except ValidationError as exc:
        log.error("invalid swap parameters: %s", exc)
        return 1
    except DlmmError as exc:
        log.error("swap client failed: %s", exc)
        return 2

    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
