import logging
from decimal import Decimal
from typing import Optional

from .collaborators import PoolDataSource, SimulatedSubmitter, StaticPoolData, TransactionSubmitter
from .config import ClientConfig
from .errors import CollaboratorError, ValidationError
from .models import COLLABORATOR, VALIDATION, PoolStats, QuoteResult, SwapParams, SwapResult
from .pricing import PricingEngine
from .validator import validate

log = logging.getLogger(__name__)


class DlmmClient:
    """Quotes and executes swaps against a DLMM pair.

    Submission and pool data are delegated to the injected collaborators; when
    none are given the simulated ones are used.
    """

    def __init__(
        self,
        config: ClientConfig,
        submitter: Optional[TransactionSubmitter] = None,
        pool_data: Optional[PoolDataSource] = None,
        pricing: Optional[PricingEngine] = None,
    ) -> None:
        self.config = config
        self.submitter = submitter or SimulatedSubmitter()
        self.pool_data = pool_data or StaticPoolData()
        self.pricing = pricing or PricingEngine()

    def validate(self, params: SwapParams) -> None:
        validate(params)

    def quote(self, params: SwapParams) -> QuoteResult:
        validate(params)
        return self.pricing.quote(params)

    async def execute_swap(self, params: SwapParams) -> SwapResult:
        try:
            validate(params)
        except ValidationError as exc:
            log.warning("swap rejected: %s", exc)
            return SwapResult.failed(str(exc), kind=VALIDATION)

        try:
            quote = self.pricing.quote(params)
        except (ArithmeticError, ValueError, CollaboratorError) as exc:
            log.error("quote failed, swap not submitted: %s", exc)
            return SwapResult.failed(f"Quote failed: {exc}", kind=COLLABORATOR)

        if params.min_output_amount is not None and quote.expected_output < params.min_output_amount:
            message = f"Expected output ({quote.expected_output}) below minimum ({params.min_output_amount})"
            log.warning("swap rejected: %s", message)
            return SwapResult.failed(message, kind=VALIDATION)

        log.info(
            "submitting %s %s -> %s on %s (expected %s)",
            params.amount,
            params.input_token,
            params.output_token,
            self.config.network,
            quote.expected_output,
        )
        try:
            signature = await self.submitter.submit(params, quote)
        except CollaboratorError as exc:
            log.error("swap submission failed: %s", exc)
            return SwapResult.failed(str(exc), kind=COLLABORATOR)

        log.info("swap submitted: %s", signature)
        return SwapResult.ok(signature, quote=quote)

    async def get_pool_stats(self, pair_address: str) -> Decimal:
        return await self.pool_data.total_liquidity(pair_address)

    async def get_pair_stats(self, pair_address: str) -> PoolStats:
        return await self.pool_data.pair_stats(pair_address)
