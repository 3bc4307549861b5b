from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter, Retry

from .config import ClientConfig
from .errors import CollaboratorError

USER_AGENT = "dlmm-swap/0.1"


class HttpClient:
    """JSON over HTTP with a retrying session; transport failures become CollaboratorError."""

    def __init__(self, timeout: float, max_retries: int, user_agent: str = USER_AGENT) -> None:
        self.timeout = timeout
        self.session = requests.Session()
        retry_policy = Retry(
            total=max_retries,
            backoff_factor=0.2,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET", "POST"),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_policy, pool_connections=4, pool_maxsize=16)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({"User-Agent": user_agent})

    @classmethod
    def from_config(cls, config: ClientConfig) -> "HttpClient":
        return cls(timeout=config.request_timeout, max_retries=config.retries)

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CollaboratorError(f"GET {url} failed", cause=exc) from exc
        return self._decode(url, response)

    def post_json(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CollaboratorError(f"POST {url} failed", cause=exc) from exc
        return self._decode(url, response)

    @staticmethod
    def _decode(url: str, response: requests.Response) -> Dict[str, Any]:
        if response.status_code >= 400:
            raise CollaboratorError(f"{url} returned an error status", http_status=response.status_code)
        try:
            body = response.json()
        except ValueError as exc:
            raise CollaboratorError(f"{url} did not return JSON", http_status=response.status_code, cause=exc) from exc
        if not isinstance(body, dict):
            raise CollaboratorError(f"{url} returned a non-object JSON body", http_status=response.status_code)
        return body
