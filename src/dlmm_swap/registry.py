"""Tokens and DLMM pairs the client knows how to route."""

from decimal import Decimal
from typing import Dict, Optional

from .models import PairInfo, Token

UNKNOWN_PAIR_NAME = "Unknown DLMM Pair"

TOKENS: Dict[str, Token] = {
    "SOL": Token(mint="So11111111111111111111111111111112", decimals=9, symbol="SOL"),
    "USDC": Token(mint="EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v", decimals=6, symbol="USDC"),
    "C98": Token(mint="C98A4nkJXhpVZNAZdHUA95RpTF3T4whtQubL3YobiUX9", decimals=6, symbol="C98"),
}

PAIRS: Dict[str, PairInfo] = {
    "SOL-USDC": PairInfo(
        address="EwsqJeioGAXE5EdZHj1QvcuvqgVhJDp9729H5wjh28DD",
        name="SOL-USDC DLMM Pair",
        base=TOKENS["SOL"],
        quote=TOKENS["USDC"],
        fee_rate=Decimal("0.003"),
    ),
    "C98-USDC": PairInfo(
        address="2wUvdZA8ZsY714Y5wUL9fkFmupJGGwzui2N74zqJWgty",
        name="C98-USDC DLMM Pair",
        base=TOKENS["C98"],
        quote=TOKENS["USDC"],
        fee_rate=Decimal("0.003"),
    ),
}


def token_info(symbol: str) -> Token:
    try:
        return TOKENS[symbol]
    except KeyError:
        raise KeyError(f"Token not found: {symbol}") from None


def find_pair(token_a: str, token_b: str) -> Optional[PairInfo]:
    for pair in PAIRS.values():
        if pair.has_token(token_a) and pair.has_token(token_b):
            return pair
    return None


def pair_by_address(address: str) -> Optional[PairInfo]:
    for pair in PAIRS.values():
        if pair.address == address:
            return pair
    return None


def pair_name(address: str) -> str:
    pair = pair_by_address(address)
    return pair.name if pair else UNKNOWN_PAIR_NAME
