import pytest
from balance_checker.report import format_amount, format_report, print_report
from balance_checker.rpc_client import WalletBalance, lamports_to_sol


@pytest.mark.parametrize("lamports, text", [
    (0, "0"),
    (1, "0.000000001"),
    (1_000_000_000, "1"),
    (1_234_500_000, "1.2345"),
    (2**64 - 1, "18446744073.709553"),
])
def test_format_amount(lamports, text):
    assert format_amount(lamports_to_sol(lamports)) == text


def test_format_report():
    lines = format_report([WalletBalance("A1", 1.5), WalletBalance("B2", 0.0)])
    assert lines == [
        "Balances for 2 wallets:",
        "A1: 1.5 SOL",
        "B2: 0 SOL",
    ]


def test_print_empty_report(capsys):
    print_report([])
    assert capsys.readouterr().out == "Balances for 0 wallets:\n"
