"""
Solana JSON-RPC client — fetch a single wallet's SOL balance via `getBalance`.
"""

import asyncio
from dataclasses import dataclass

import aiohttp
from loguru import logger

from balance_checker.config import LAMPORTS_PER_SOL, RPC_METHOD, RPC_REQUEST_ID

U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class WalletBalance:
    address: str
    balance: float  # SOL


class FetchError(Exception):
    """A per-wallet failure. Recovered by the aggregator, never fatal."""

    def __init__(self, address: str, cause: str):
        self.address = address
        self.cause = cause
        super().__init__(cause)


class TransportError(FetchError):
    """HTTP call failed or the body could not be parsed."""


class RpcRejectedError(FetchError):
    """The node answered with a JSON-RPC `error` object."""

    def __init__(self, address: str, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(address, f"RPC error: {message} (code: {code})")


class EmptyResultError(FetchError):
    def __init__(self, address: str):
        super().__init__(address, "no balance result in RPC response")


def lamports_to_sol(lamports: int) -> float:
    # Plain float division: values above 2**53 lamports lose precision.
    return lamports / LAMPORTS_PER_SOL


def build_request(address: str, request_id: int = RPC_REQUEST_ID) -> dict:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": RPC_METHOD,
        "params": [address],
    }


def _is_u64(n) -> bool:
    return isinstance(n, int) and not isinstance(n, bool) and 0 <= n <= U64_MAX


def parse_response(address: str, body) -> WalletBalance:
    """
    Validate a `getBalance` response envelope and convert it.

    `error` wins over `result` when a node sends both; a body with neither
    is an EmptyResultError.
    """
    if not isinstance(body, dict):
        raise TransportError(address, f"unexpected response body: {body!r}")

    error = body.get("error")
    if error is not None:
        code = error.get("code") if isinstance(error, dict) else None
        message = error.get("message") if isinstance(error, dict) else None
        if isinstance(code, bool) or not isinstance(code, int) or not isinstance(message, str):
            raise TransportError(address, f"malformed RPC error: {error!r}")
        raise RpcRejectedError(address, code, message)

    result = body.get("result")
    if result is None:
        raise EmptyResultError(address)

    if not isinstance(result, dict) or not isinstance(result.get("context"), dict):
        raise TransportError(address, f"malformed balance result: {result!r}")
    value = result.get("value")
    slot = result["context"].get("slot")
    if not (_is_u64(value) and _is_u64(slot)):
        raise TransportError(address, f"malformed balance result: {result!r}")

    return WalletBalance(address=address, balance=lamports_to_sol(value))


async def fetch_balance(session: aiohttp.ClientSession,
                        rpc_url: str,
                        address: str,
                        request_id: int = RPC_REQUEST_ID) -> WalletBalance:
    """POST one `getBalance` call for `address` and return its SOL balance."""
    payload = build_request(address, request_id)
    headers = {"Content-Type": "application/json"}

    try:
        async with session.post(rpc_url, json=payload, headers=headers) as resp:
            # Status is not checked: nodes put JSON-RPC errors in 4xx/5xx bodies too.
            body = await resp.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransportError(address, f"request failed: {str(e) or type(e).__name__}") from e
    except ValueError as e:
        raise TransportError(address, f"failed to parse response: {e}") from e

    balance = parse_response(address, body)
    logger.debug(f"{address[:8]}: {balance.balance} SOL")
    return balance
