"""
Reporter — render fetched balances as plain text lines.
"""

import numpy as np

from balance_checker.config import UNIT
from balance_checker.rpc_client import WalletBalance


def format_amount(amount: float) -> str:
    """Shortest positional form: 0, 0.000000001, 1, 18446744073.709553."""
    return np.format_float_positional(amount, trim="-")


def format_report(balances: list[WalletBalance]) -> list[str]:
    lines = [f"Balances for {len(balances)} wallets:"]
    for b in balances:
        lines.append(f"{b.address}: {format_amount(b.balance)} {UNIT}")
    return lines


def print_report(balances: list[WalletBalance]) -> None:
    for line in format_report(balances):
        print(line)
