import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

NETWORK_ENDPOINTS: Dict[str, List[str]] = {
    "mainnet-beta": [
        "https://api.mainnet-beta.solana.com",
        "https://solana-api.projectserum.com",
        "https://rpc.ankr.com/solana",
    ],
    "devnet": ["https://api.devnet.solana.com"],
    "testnet": ["https://api.testnet.solana.com"],
}

DEFAULT_NETWORK = "mainnet-beta"
DEFAULT_SLIPPAGE_BPS = 50
MAX_SLIPPAGE_BPS = 10_000


@dataclass(frozen=True)
class ClientConfig:
    network: str = DEFAULT_NETWORK
    slippage_tolerance_bps: int = DEFAULT_SLIPPAGE_BPS
    request_timeout: float = 5.0
    retries: int = 3
    swap_api_url: Optional[str] = None
    pool_api_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.network:
            raise ValueError("network identifier must be non-empty")
        if not 0 <= self.slippage_tolerance_bps <= MAX_SLIPPAGE_BPS:
            raise ValueError(f"slippage_tolerance_bps must be within 0..{MAX_SLIPPAGE_BPS}")

    @property
    def rpc_endpoints(self) -> List[str]:
        """Primary endpoint first, then fallbacks.

        The full list is for an RPC collaborator that fails over between
        endpoints; the client itself only reports the primary one.
        """
        return list(NETWORK_ENDPOINTS.get(self.network, NETWORK_ENDPOINTS[DEFAULT_NETWORK]))

    @property
    def rpc_endpoint(self) -> str:
        return self.rpc_endpoints[0]


def config_from_mapping(raw: Dict[str, Any], env: Optional[Dict[str, str]] = None) -> ClientConfig:
    """Build a ClientConfig from a parsed YAML mapping, letting the environment override it.

    ``SOLANA_NETWORK`` replaces ``network`` and ``SLIPPAGE_BPS`` replaces
    ``slippage_tolerance_bps``.
    """
    env = os.environ if env is None else env
    network = env.get("SOLANA_NETWORK") or raw.get("network", DEFAULT_NETWORK)
    slippage = env.get("SLIPPAGE_BPS") or raw.get("slippage_tolerance_bps", DEFAULT_SLIPPAGE_BPS)
    try:
        slippage_bps = int(slippage)
    except (TypeError, ValueError):
        raise ValueError(f"slippage_tolerance_bps is not an integer: {slippage!r}") from None

    return ClientConfig(
        network=network,
        slippage_tolerance_bps=slippage_bps,
        request_timeout=float(raw.get("request_timeout", 5.0)),
        retries=int(raw.get("retries", 3)),
        swap_api_url=raw.get("swap_api_url"),
        pool_api_url=raw.get("pool_api_url"),
    )


def load_config(config_path: Path, env: Optional[Dict[str, str]] = None) -> ClientConfig:
    with config_path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"{config_path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path} must contain a mapping")
    return config_from_mapping(raw, env=env)
