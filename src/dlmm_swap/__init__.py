from .client import DlmmClient
from .collaborators import PoolDataSource, TransactionSubmitter
from .config import ClientConfig, load_config
from .errors import CollaboratorError, DlmmError, ValidationError
from .models import PairInfo, PoolStats, QuoteResult, SwapParams, SwapResult, Token
from .pricing import PricingEngine
from .validator import validate

__all__ = [
    "ClientConfig",
    "CollaboratorError",
    "DlmmClient",
    "DlmmError",
    "PairInfo",
    "PoolDataSource",
    "PoolStats",
    "PricingEngine",
    "QuoteResult",
    "SwapParams",
    "SwapResult",
    "Token",
    "TransactionSubmitter",
    "ValidationError",
    "load_config",
    "validate",
]
