# [TESTER] v1

from __future__ import annotations

from tools.pool_quote_demo import main


def test_swap_quote(capsys) -> None:
    assert main(["swap", "--amount-in", "100", "--reserve-in", "10000", "--reserve-out", "10000"]) == 0
    assert "amount_out=98" in capsys.readouterr().out


def test_deposit_and_withdraw_quotes(capsys) -> None:
    assert main(["deposit", "--amount-a", "10000", "--amount-b", "40000"]) == 0
    assert main(["withdraw", "--shares", "2000", "--reserve-a", "10000", "--reserve-b", "40000", "--lp-supply", "20000"]) == 0
    out = capsys.readouterr().out
    assert "shares_to_mint=19000" in out
    assert "amount_a=1000 amount_b=4000" in out


def test_domain_error_exit_code(capsys) -> None:
    assert main(["swap", "--amount-in", "0", "--reserve-in", "10000", "--reserve-out", "10000"]) == 1
    assert "InvalidAmount" in capsys.readouterr().err


def test_cycle(capsys) -> None:
    assert main(["cycle"]) == 0
    out = capsys.readouterr().out
    assert "shares=1413213 locked=1000" in out
    assert "amount_out=19743" in out
