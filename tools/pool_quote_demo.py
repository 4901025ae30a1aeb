#!/usr/bin/env python3
"""
Offline pool demo: quote against given reserves, or run a full
create / deposit / swap / withdraw cycle against the in-memory ledger.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from njaswap.core import quote_deposit, quote_swap, quote_withdrawal
from njaswap.errors import DexError
from njaswap.integration import InMemoryLedger, PoolProgram


def _cmd_swap(args: argparse.Namespace) -> int:
    out = quote_swap(args.amount_in, args.reserve_in, args.reserve_out, args.fee_bps)
    print(f"[quote] amount_out={out}")
    return 0


def _cmd_deposit(args: argparse.Namespace) -> int:
    shares = quote_deposit(args.amount_a, args.amount_b, args.reserve_a, args.reserve_b, args.lp_supply)
    print(f"[quote] shares_to_mint={shares}")
    return 0


def _cmd_withdraw(args: argparse.Namespace) -> int:
    amount_a, amount_b = quote_withdrawal(args.shares, args.reserve_a, args.reserve_b, args.lp_supply)
    print(f"[quote] amount_a={amount_a} amount_b={amount_b}")
    return 0


def _cmd_cycle(args: argparse.Namespace) -> int:
    user = "user-1"
    asset_a, asset_b = "asset-A", "asset-B"

    ledger = InMemoryLedger()
    ledger.credit(user, asset_a, 10_000_000)
    ledger.credit(user, asset_b, 10_000_000)
    program = PoolProgram(ledger)

    pool, _ = program.initialize_pool(
        user,
        asset_a,
        asset_b,
        args.fee_bps,
        authority_ref="pool-authority",
        vault_a_ref="vault-A",
        vault_b_ref="vault-B",
        share_mint_ref="lp-mint",
    )
    print(f"[cycle] pool_id={pool.pool_id}")

    dep = program.add_liquidity(pool.pool_id, user, user, 1_000_000, 2_000_000, 0)
    print(f"[cycle] deposit: shares={dep.effect.shares_minted} locked={dep.effect.shares_locked}")

    sw = program.swap(pool.pool_id, user, user, args.amount_in, 0, True)
    print(f"[cycle] swap: amount_in={args.amount_in} amount_out={sw.effect.amount_out}")

    shares = ledger.shares_of(user, "lp-mint")
    wd = program.remove_liquidity(pool.pool_id, user, user, shares, 0, 0)
    print(f"[cycle] withdraw: amount_a={wd.effect.amount_a} amount_b={wd.effect.amount_b}")

    final = program.registry.get(pool.pool_id)
    print(f"[cycle] final reserves: reserve_a={final.reserve_a} reserve_b={final.reserve_b}")
    print(f"[cycle] user balances: A={ledger.balance_of(user, asset_a)} B={ledger.balance_of(user, asset_b)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("-v", "--verbose", action="store_true", help="log engine/program activity")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("swap", help="quote an exact-in swap")
    p.add_argument("--amount-in", type=int, required=True)
    p.add_argument("--reserve-in", type=int, required=True)
    p.add_argument("--reserve-out", type=int, required=True)
    p.add_argument("--fee-bps", type=int, default=30)
    p.set_defaults(func=_cmd_swap)

    p = sub.add_parser("deposit", help="quote LP shares for a deposit")
    p.add_argument("--amount-a", type=int, required=True)
    p.add_argument("--amount-b", type=int, required=True)
    p.add_argument("--reserve-a", type=int, default=0)
    p.add_argument("--reserve-b", type=int, default=0)
    p.add_argument("--lp-supply", type=int, default=0)
    p.set_defaults(func=_cmd_deposit)

    p = sub.add_parser("withdraw", help="quote assets returned for burning shares")
    p.add_argument("--shares", type=int, required=True)
    p.add_argument("--reserve-a", type=int, required=True)
    p.add_argument("--reserve-b", type=int, required=True)
    p.add_argument("--lp-supply", type=int, required=True)
    p.set_defaults(func=_cmd_withdraw)

    p = sub.add_parser("cycle", help="run create/deposit/swap/withdraw on an in-memory ledger")
    p.add_argument("--amount-in", type=int, default=10_000)
    p.add_argument("--fee-bps", type=int, default=30)
    p.set_defaults(func=_cmd_cycle)

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except DexError as exc:
        print(f"[error] {exc.name} ({exc.code}): {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
