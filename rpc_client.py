import itertools
import os
import threading

import requests
from pydantic import ValidationError

import logging_utils
import metrics
from schema import AccountInfo

# [Config] Devnet by default; point SOLANA_RPC_URL at any JSON-RPC node.
RPC_URL = os.getenv("SOLANA_RPC_URL", "https://api.devnet.solana.com")
COMMITMENT = os.getenv("SOLANA_COMMITMENT", "confirmed")
TIMEOUT = float(os.getenv("SOLANA_RPC_TIMEOUT", "10"))

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


class RpcError(Exception):
    """Upstream call failed: transport error, bad reply, or JSON-RPC error."""


class AccountNotFoundError(RpcError):
    pass


class RpcClient:
    def __init__(self, url=RPC_URL, commitment=COMMITMENT, timeout=TIMEOUT, session=None):
        if commitment not in COMMITMENT_LEVELS:
            raise ValueError(f"unknown commitment level: {commitment}")
        self.url = url
        self.commitment = commitment
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)
        self._ids_lock = threading.Lock()

    def _next_id(self):
        with self._ids_lock:
            return next(self._ids)

    def call(self, method, params=None):
        """
        Sends one JSON-RPC 2.0 request and returns its "result".
        Every outcome is counted in rpc_requests_total.
        """
        payload = {"jsonrpc": "2.0", "id": self._next_id(), "method": method}
        if params is not None:
            payload["params"] = params

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as exc:
            metrics.inc("rpc_requests_total", {"method": method, "result": "transport_error"})
            logging_utils.log_event("ERROR", "rpc_failed", method=method, error=str(exc))
            raise RpcError(f"{method}: {exc}") from exc
        except ValueError as exc:
            # Reply was not JSON
            metrics.inc("rpc_requests_total", {"method": method, "result": "bad_reply"})
            logging_utils.log_event("ERROR", "rpc_failed", method=method, error="invalid JSON reply")
            raise RpcError(f"{method}: invalid JSON reply") from exc

        if not isinstance(body, dict):
            metrics.inc("rpc_requests_total", {"method": method, "result": "bad_reply"})
            raise RpcError(f"{method}: unexpected reply")

        if "error" in body:
            error = body["error"] if isinstance(body["error"], dict) else {"message": str(body["error"])}
            metrics.inc("rpc_requests_total", {"method": method, "result": "rpc_error"})
            logging_utils.log_event(
                "ERROR", "rpc_failed", method=method,
                code=error.get("code"), error=error.get("message"),
            )
            raise RpcError(f"{method}: {error.get('message')}")

        metrics.inc("rpc_requests_total", {"method": method, "result": "ok"})
        return body.get("result")

    def get_balance(self, pubkey: str) -> int:
        result = self.call("getBalance", [pubkey, {"commitment": self.commitment}])
        try:
            return int(result["value"])
        except (TypeError, KeyError, ValueError) as exc:
            raise RpcError("getBalance: unexpected reply") from exc

    def get_account(self, pubkey: str) -> AccountInfo:
        result = self.call(
            "getAccountInfo",
            [pubkey, {"commitment": self.commitment, "encoding": "base64"}],
        )
        if not isinstance(result, dict) or "value" not in result:
            raise RpcError("getAccountInfo: unexpected reply")

        value = result["value"]
        if value is None:
            raise AccountNotFoundError(pubkey)
        if not isinstance(value, dict):
            raise RpcError("getAccountInfo: unexpected reply")

        # "data" comes back as [payload, encoding]
        data = value.get("data")
        if isinstance(data, list):
            data = data[0] if data else ""
        try:
            return AccountInfo(**{**value, "data": data})
        except ValidationError as exc:
            raise RpcError("getAccountInfo: unexpected reply") from exc

    def get_health(self) -> bool:
        """True when the node reports itself healthy. Never raises."""
        try:
            return self.call("getHealth") == "ok"
        except RpcError:
            return False
