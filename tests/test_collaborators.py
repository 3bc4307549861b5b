import unittest
from decimal import Decimal

import requests

from dlmm_swap.collaborators import HttpPoolDataSource, HttpSwapSubmitter
from dlmm_swap.config import ClientConfig
from dlmm_swap.errors import CollaboratorError
from dlmm_swap.http_client import HttpClient
from dlmm_swap.models import SwapParams
from dlmm_swap.pricing import PricingEngine

CONFIG = ClientConfig(
    network="devnet",
    slippage_tolerance_bps=50,
    swap_api_url="https://swap/",
    pool_api_url="https://pools",
)


class _FakeHttp:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get_json(self, url, params=None):
        self.calls.append(("GET", url, params))
        return self.response

    def post_json(self, url, payload):
        self.calls.append(("POST", url, payload))
        return self.response


class _FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self.body = body

    def json(self):
        if self.body is None:
            raise ValueError("no json")
        return self.body


class _FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error

    def get(self, url, params=None, timeout=None):
        if self.error is not None:
            raise self.error
        return self.response


def swap(input_token="SOL", output_token="USDC", pair_address=None):
    return SwapParams(
        input_token=input_token,
        output_token=output_token,
        amount=Decimal("1.0"),
        wallet_public_key="wallet-key",
        pair_address=pair_address,
    )


class HttpSwapSubmitterTests(unittest.IsolatedAsyncioTestCase):
    async def test_posts_swap_payload_and_returns_signature(self) -> None:
        http = _FakeHttp({"signature": "5xSig"})
        submitter = HttpSwapSubmitter(CONFIG, http=http)
        params = swap()

        signature = await submitter.submit(params, PricingEngine().quote(params))

        self.assertEqual(signature, "5xSig")
        method, url, payload = http.calls[0]
        self.assertEqual((method, url), ("POST", "https://swap/swap"))
        self.assertEqual(payload["pair"], "EwsqJeioGAXE5EdZHj1QvcuvqgVhJDp9729H5wjh28DD")
        self.assertEqual(payload["amount"], "1000000000")
        self.assertEqual(payload["otherAmountOffset"], "99500000")
        self.assertTrue(payload["swapForY"])
        self.assertEqual(payload["slippageBps"], 50)
        self.assertEqual(payload["payer"], "wallet-key")

    async def test_reverse_direction_swaps_for_x(self) -> None:
        submitter = HttpSwapSubmitter(CONFIG, http=_FakeHttp({"signature": "s"}))
        params = swap(input_token="USDC", output_token="SOL")

        payload = submitter.build_payload(params, PricingEngine().quote(params))

        self.assertFalse(payload["swapForY"])
        self.assertEqual(payload["amount"], "1000000")

    async def test_unknown_pair_is_a_collaborator_error(self) -> None:
        submitter = HttpSwapSubmitter(CONFIG, http=_FakeHttp({"signature": "s"}))
        params = swap(input_token="SOL", output_token="C98")
        with self.assertRaises(CollaboratorError):
            await submitter.submit(params, PricingEngine().quote(params))

    async def test_missing_signature_is_a_collaborator_error(self) -> None:
        submitter = HttpSwapSubmitter(CONFIG, http=_FakeHttp({"error": "insufficient funds"}))
        params = swap()
        with self.assertRaises(CollaboratorError) as ctx:
            await submitter.submit(params, PricingEngine().quote(params))
        self.assertEqual(str(ctx.exception), "insufficient funds")

    def test_requires_swap_url(self) -> None:
        with self.assertRaises(ValueError):
            HttpSwapSubmitter(ClientConfig())


class HttpPoolDataSourceTests(unittest.IsolatedAsyncioTestCase):
    async def test_reads_total_liquidity(self) -> None:
        http = _FakeHttp({"totalLiquidity": "2500000.5"})
        source = HttpPoolDataSource(CONFIG, http=http)

        liquidity = await source.total_liquidity("pair-1")

        self.assertEqual(liquidity, Decimal("2500000.5"))
        self.assertEqual(http.calls[0][1], "https://pools/pair/pair-1")

    async def test_rejects_missing_or_bad_liquidity(self) -> None:
        for body in ({}, {"totalLiquidity": "lots"}, {"totalLiquidity": -1}, {"totalLiquidity": "NaN"}):
            source = HttpPoolDataSource(CONFIG, http=_FakeHttp(body))
            with self.assertRaises(CollaboratorError):
                await source.total_liquidity("pair-1")


    async def test_pair_stats_passes_optional_fields_through(self) -> None:
        http = _FakeHttp(
            {
                "totalLiquidity": "2000000",
                "activeId": 8388608,
                "volume24h": 800000,
                "fees24h": "2400",
                "apy": 18.5,
                "binCount": 150,
                "priceRange": [-100, 100],
            }
        )
        source = HttpPoolDataSource(CONFIG, http=http)

        stats = await source.pair_stats("EwsqJeioGAXE5EdZHj1QvcuvqgVhJDp9729H5wjh28DD")

        self.assertEqual(stats.name, "SOL-USDC DLMM Pair")
        self.assertEqual(stats.total_liquidity, Decimal("2000000"))
        self.assertEqual(stats.active_id, 8388608)
        self.assertEqual(stats.volume_24h, Decimal("800000"))
        self.assertEqual(stats.fees_24h, Decimal("2400"))
        self.assertEqual(stats.apy, Decimal("18.5"))
        self.assertEqual(stats.bin_count, 150)
        self.assertEqual(stats.price_range, (-100, 100))

    async def test_pair_stats_leaves_missing_fields_empty(self) -> None:
        source = HttpPoolDataSource(CONFIG, http=_FakeHttp({"totalLiquidity": 5}))

        stats = await source.pair_stats("pair-1")

        self.assertEqual(stats.name, "Unknown DLMM Pair")
        self.assertIsNone(stats.volume_24h)
        self.assertIsNone(stats.price_range)

    async def test_pair_stats_rejects_malformed_fields(self) -> None:
        for body in ({"totalLiquidity": 1, "priceRange": [1]}, {"totalLiquidity": 1, "apy": "high"}):
            source = HttpPoolDataSource(CONFIG, http=_FakeHttp(body))
            with self.assertRaises(CollaboratorError):
                await source.pair_stats("pair-1")


class HttpClientTests(unittest.TestCase):
    def test_maps_transport_errors(self) -> None:
        client = HttpClient(timeout=1.0, max_retries=0)
        client.session = _FakeSession(error=requests.ConnectionError("refused"))
        with self.assertRaises(CollaboratorError) as ctx:
            client.get_json("https://pools/pair/x")
        self.assertIsInstance(ctx.exception.cause, requests.ConnectionError)

    def test_maps_error_status_and_bad_json(self) -> None:
        client = HttpClient(timeout=1.0, max_retries=0)
        client.session = _FakeSession(response=_FakeResponse(502))
        with self.assertRaises(CollaboratorError) as ctx:
            client.get_json("https://pools/pair/x")
        self.assertEqual(ctx.exception.http_status, 502)

        client.session = _FakeSession(response=_FakeResponse(200))
        with self.assertRaises(CollaboratorError):
            client.get_json("https://pools/pair/x")

    def test_returns_json_object(self) -> None:
        client = HttpClient(timeout=1.0, max_retries=0)
        client.session = _FakeSession(response=_FakeResponse(200, {"totalLiquidity": 1}))
        self.assertEqual(client.get_json("https://pools/pair/x"), {"totalLiquidity": 1})


if __name__ == "__main__":
    unittest.main()
