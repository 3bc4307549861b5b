from decimal import Decimal

from .errors import ValidationError
from .models import SwapParams


def validate(params: SwapParams) -> None:
    """Raise ValidationError for the first rule ``params`` violates.

    Rules run in a fixed order so callers always see the same message for the
    same input: input token present, output token present, positive amount,
    distinct tokens, then a numeric minimum output when one is set.
    """
    if not params.input_token:
        raise ValidationError("Input token is required", rule="input_token")
    if not params.output_token:
        raise ValidationError("Output token is required", rule="output_token")
    amount = params.amount
    if not isinstance(amount, Decimal) or not amount.is_finite() or not amount > 0:
        raise ValidationError("Amount must be positive", rule="amount")
    if params.input_token == params.output_token:
        raise ValidationError("Input and output tokens must be different", rule="distinct_tokens")
    minimum = params.min_output_amount
    if minimum is not None and (not isinstance(minimum, Decimal) or not minimum.is_finite()):
        raise ValidationError("Minimum output must be a number", rule="min_output_amount")
