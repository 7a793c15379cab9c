"""
Aggregator — fan out one `getBalance` call per wallet and collect the results.

Every wallet is queried at once unless `max_concurrency` is set. All tasks run
to completion; failures are logged per wallet and never abort the batch.
"""

import asyncio

import aiohttp
from loguru import logger

from balance_checker.config import Config
from balance_checker.rpc_client import FetchError, WalletBalance, fetch_balance


async def get_wallet_balances(config: Config,
                              session: aiohttp.ClientSession | None = None,
                              max_concurrency: int | None = None) -> list[WalletBalance]:
    """
    Return the balances that could be fetched, in the order of `config.wallets`.
    """
    if max_concurrency is not None and max_concurrency < 0:
        raise ValueError(f"max_concurrency must be >= 0, got {max_concurrency}")

    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await get_wallet_balances(config, own_session, max_concurrency)

    sem = asyncio.Semaphore(max_concurrency) if max_concurrency and max_concurrency > 0 else None

    async def _fetch(wallet: str) -> WalletBalance:
        if sem is None:
            return await fetch_balance(session, config.rpc_url, wallet)
        async with sem:
            return await fetch_balance(session, config.rpc_url, wallet)

    logger.debug(
        f"Querying {len(config.wallets)} wallets "
        f"(max in-flight: {max_concurrency if sem else 'unbounded'})"
    )
    tasks = [asyncio.ensure_future(_fetch(w)) for w in config.wallets]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    # Zip against the wallet list so the report follows input order, not completion order.
    balances = []
    for wallet, result in zip(config.wallets, results):
        if isinstance(result, WalletBalance):
            balances.append(result)
        elif isinstance(result, FetchError):
            logger.warning(f"Error fetching balance for wallet {wallet}: {result}")
        else:
            logger.warning(f"Task error for wallet {wallet}: {result!r}")

    logger.debug(f"{len(balances)}/{len(config.wallets)} balances fetched")
    return balances
