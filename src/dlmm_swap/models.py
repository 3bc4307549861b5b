from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any, Optional, Tuple

VALIDATION = "validation"
COLLABORATOR = "collaborator"


def _as_decimal(value: Any) -> Any:
    # unconvertible values are left for the validator to reject
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            return value
    return value


@dataclass(frozen=True)
class Token:
    mint: str
    decimals: int
    symbol: str

    def __post_init__(self) -> None:
        if not 0 <= self.decimals <= 255:
            raise ValueError(f"token decimals out of range: {self.decimals}")

    def to_base_units(self, amount: Decimal) -> int:
        scaled = amount.scaleb(self.decimals).quantize(Decimal(1), rounding=ROUND_DOWN)
        return int(scaled)


@dataclass(frozen=True)
class PairInfo:
    address: str
    name: str
    base: Token
    quote: Token
    fee_rate: Decimal

    def has_token(self, symbol: str) -> bool:
        return symbol in (self.base.symbol, self.quote.symbol)


@dataclass(frozen=True)
class SwapParams:
    input_token: str
    output_token: str
    amount: Decimal
    wallet_public_key: str
    min_output_amount: Optional[Decimal] = None
    pair_address: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _as_decimal(self.amount))
        if self.min_output_amount is not None:
            object.__setattr__(self, "min_output_amount", _as_decimal(self.min_output_amount))


@dataclass(frozen=True)
class QuoteResult:
    input_amount: Decimal
    expected_output: Decimal
    price_impact: Decimal
    fee: Decimal


@dataclass(frozen=True)
class SwapResult:
    success: bool
    signature: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    quote: Optional[QuoteResult] = None

    def __post_init__(self) -> None:
        if self.success and (not self.signature or self.error is not None):
            raise ValueError("successful swap result needs a signature and no error")
        if not self.success and (not self.error or self.signature is not None):
            raise ValueError("failed swap result needs an error and no signature")

    @classmethod
    def ok(cls, signature: str, quote: Optional[QuoteResult] = None) -> "SwapResult":
        return cls(success=True, signature=signature, quote=quote)

    @classmethod
    def failed(cls, error: str, kind: str) -> "SwapResult":
        return cls(success=False, error=error, error_kind=kind)


@dataclass(frozen=True)
class PoolStats:
    address: str
    name: str
    total_liquidity: Decimal
    active_id: Optional[int] = None
    volume_24h: Optional[Decimal] = None
    fees_24h: Optional[Decimal] = None
    apy: Optional[Decimal] = None
    bin_count: Optional[int] = None
    price_range: Optional[Tuple[int, int]] = None
