from decimal import Decimal

from .models import QuoteResult, SwapParams

EXCHANGE_RATE = Decimal("100")
IMPACT_DIVISOR = Decimal("1000000")
IMPACT_COEFFICIENT = Decimal("0.05")
FEE_RATE = Decimal("0.003")


class PricingEngine:
    """Fixed-rate quote model.

    Output, impact and fee are linear in the input amount. A bin-aware model
    can replace this class as long as ``quote`` keeps its signature.
    Parameters are expected to have been validated already.
    """

    def __init__(
        self,
        exchange_rate: Decimal = EXCHANGE_RATE,
        impact_divisor: Decimal = IMPACT_DIVISOR,
        impact_coefficient: Decimal = IMPACT_COEFFICIENT,
        fee_rate: Decimal = FEE_RATE,
    ) -> None:
        self.exchange_rate = exchange_rate
        self.impact_divisor = impact_divisor
        self.impact_coefficient = impact_coefficient
        self.fee_rate = fee_rate

    def expected_output(self, amount: Decimal) -> Decimal:
        return amount * self.exchange_rate

    def price_impact(self, amount: Decimal) -> Decimal:
        return (amount / self.impact_divisor) * self.impact_coefficient

    def fee(self, amount: Decimal) -> Decimal:
        return amount * self.fee_rate

    def quote(self, params: SwapParams) -> QuoteResult:
        amount = params.amount
        return QuoteResult(
            input_amount=amount,
            expected_output=self.expected_output(amount),
            price_impact=self.price_impact(amount),
            fee=self.fee(amount),
        )
