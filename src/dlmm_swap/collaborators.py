"""Services the client delegates to: swap submission and pool data.

The client only depends on the two abstract interfaces. The simulated
implementations back the demo driver and tests; the HTTP ones talk to a swap
service and a pool-data service.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Tuple

from .config import ClientConfig
from .errors import CollaboratorError
from .http_client import HttpClient
from .models import PairInfo, PoolStats, QuoteResult, SwapParams
from .registry import find_pair, pair_by_address, pair_name, token_info

log = logging.getLogger(__name__)

SIMULATED_SIGNATURE = "simulated-transaction-signature"
SIMULATED_LIQUIDITY = Decimal("2000000")
SIMULATED_VOLUME_24H = Decimal("800000")
SIMULATED_FEES_24H = Decimal("2400")
SIMULATED_APY = Decimal("18.5")
SIMULATED_BIN_COUNT = 150
SIMULATED_PRICE_RANGE = (-100, 100)


class TransactionSubmitter(ABC):
    @abstractmethod
    async def submit(self, params: SwapParams, quote: QuoteResult) -> str:
        """Submit a validated swap and return its transaction signature."""


class PoolDataSource(ABC):
    @abstractmethod
    async def total_liquidity(self, pair_address: str) -> Decimal:
        """Return the aggregate liquidity held by a pair."""

    async def pair_stats(self, pair_address: str) -> PoolStats:
        liquidity = await self.total_liquidity(pair_address)
        return PoolStats(address=pair_address, name=pair_name(pair_address), total_liquidity=liquidity)


class SimulatedSubmitter(TransactionSubmitter):
    def __init__(self, signature: str = SIMULATED_SIGNATURE) -> None:
        self.signature = signature

    async def submit(self, params: SwapParams, quote: QuoteResult) -> str:
        return self.signature


class StaticPoolData(PoolDataSource):
    def __init__(self, liquidity: Decimal = SIMULATED_LIQUIDITY) -> None:
        self.liquidity = liquidity

    async def total_liquidity(self, pair_address: str) -> Decimal:
        return self.liquidity

    async def pair_stats(self, pair_address: str) -> PoolStats:
        return PoolStats(
            address=pair_address,
            name=pair_name(pair_address),
            total_liquidity=self.liquidity,
            volume_24h=SIMULATED_VOLUME_24H,
            fees_24h=SIMULATED_FEES_24H,
            apy=SIMULATED_APY,
            bin_count=SIMULATED_BIN_COUNT,
            price_range=SIMULATED_PRICE_RANGE,
        )


class HttpSwapSubmitter(TransactionSubmitter):
    def __init__(self, config: ClientConfig, http: Optional[HttpClient] = None) -> None:
        if not config.swap_api_url:
            raise ValueError("swap_api_url is not configured")
        self.config = config
        self.base_url = config.swap_api_url.rstrip("/")
        self.http = http or HttpClient.from_config(config)

    def resolve_pair(self, params: SwapParams) -> PairInfo:
        if params.pair_address:
            pair = pair_by_address(params.pair_address)
        else:
            pair = find_pair(params.input_token, params.output_token)
        if pair is None:
            raise CollaboratorError(f"No DLMM pair found for {params.input_token}-{params.output_token}")
        return pair

    def build_payload(self, params: SwapParams, quote: QuoteResult) -> Dict[str, Any]:
        pair = self.resolve_pair(params)
        try:
            input_info = token_info(params.input_token)
            output_info = token_info(params.output_token)
        except KeyError as exc:
            raise CollaboratorError(str(exc.args[0])) from exc

        tolerance = Decimal(self.config.slippage_tolerance_bps) / Decimal(10_000)
        min_out = quote.expected_output * (Decimal(1) - tolerance)
        return {
            "pair": pair.address,
            "tokenMintX": input_info.mint,
            "tokenMintY": output_info.mint,
            "amount": str(input_info.to_base_units(params.amount)),
            "otherAmountOffset": str(output_info.to_base_units(min_out)),
            "isExactInput": True,
            "swapForY": params.input_token == pair.base.symbol,
            "slippageBps": self.config.slippage_tolerance_bps,
            "payer": params.wallet_public_key,
        }

    async def submit(self, params: SwapParams, quote: QuoteResult) -> str:
        payload = self.build_payload(params, quote)
        log.debug("posting swap for pair %s", payload["pair"])
        response = await asyncio.to_thread(self.http.post_json, f"{self.base_url}/swap", payload)
        signature = response.get("signature")
        if not signature:
            raise CollaboratorError(str(response.get("error") or "swap response missing signature"))
        return str(signature)


class HttpPoolDataSource(PoolDataSource):
    def __init__(self, config: ClientConfig, http: Optional[HttpClient] = None) -> None:
        if not config.pool_api_url:
            raise ValueError("pool_api_url is not configured")
        self.base_url = config.pool_api_url.rstrip("/")
        self.http = http or HttpClient.from_config(config)

    async def fetch_pair(self, pair_address: str) -> Dict[str, Any]:
        return await asyncio.to_thread(self.http.get_json, f"{self.base_url}/pair/{pair_address}")

    async def total_liquidity(self, pair_address: str) -> Decimal:
        return parse_liquidity(await self.fetch_pair(pair_address))

    async def pair_stats(self, pair_address: str) -> PoolStats:
        response = await self.fetch_pair(pair_address)
        bins = _optional_number(response, "binCount")
        active_id = _optional_number(response, "activeId")
        return PoolStats(
            address=pair_address,
            name=pair_name(pair_address),
            total_liquidity=parse_liquidity(response),
            active_id=None if active_id is None else int(active_id),
            volume_24h=_optional_number(response, "volume24h"),
            fees_24h=_optional_number(response, "fees24h"),
            apy=_optional_number(response, "apy"),
            bin_count=None if bins is None else int(bins),
            price_range=_optional_range(response, "priceRange"),
        )


def parse_liquidity(response: Dict[str, Any]) -> Decimal:
    liquidity = _optional_number(response, "totalLiquidity")
    if liquidity is None:
        raise CollaboratorError("pool response missing totalLiquidity")
    if liquidity < 0:
        raise CollaboratorError(f"totalLiquidity is negative: {liquidity}")
    return liquidity


def _optional_number(response: Dict[str, Any], key: str) -> Optional[Decimal]:
    raw = response.get(key)
    if raw is None:
        return None
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise CollaboratorError(f"{key} is not numeric: {raw!r}") from None
    if not value.is_finite():
        raise CollaboratorError(f"{key} is not numeric: {raw!r}")
    return value


def _optional_range(response: Dict[str, Any], key: str) -> Optional[Tuple[int, int]]:
    raw = response.get(key)
    if raw is None:
        return None
    try:
        lower, upper = (int(bound) for bound in raw)
    except (TypeError, ValueError):
        raise CollaboratorError(f"{key} is not a [lower, upper] pair: {raw!r}") from None
    return lower, upper
