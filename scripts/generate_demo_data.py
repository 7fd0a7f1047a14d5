#!/usr/bin/env python3
"""
Generate demo data: one funded user trading the seeded listings.

Usage: from project root (with the package installed):
  python scripts/generate_demo_data.py [data_dir]
"""

import random
import sys
from decimal import Decimal
from pathlib import Path
from typing import Optional

from investsim.app_context import AppContext
from investsim.core.exceptions import AppError

DEMO_EMAIL = "demo@investsim.local"
TRADES = 40


def generate_demo_data(data_dir: Optional[Path] = None, seed: int = 7) -> str:
    """Create (or reuse) the demo user and run a random series of trades."""
    ctx = AppContext()
    ctx.initialize(data_dir)
    rng = random.Random(seed)

    try:
        account = ctx.accounts.sign_up(DEMO_EMAIL, "Demo Investor")
        print(f"✓ Account '{DEMO_EMAIL}' created")
        ctx.reconciler.deposit(account.user_id, Decimal("250000"))
        print("✓ Initial deposit: 250,000.00")
    except AppError as e:
        if "already exists" not in e.message:
            raise
        account = next(a for a in ctx.accounts.list_accounts() if a.email == DEMO_EMAIL)
        print(f"✓ Account '{DEMO_EMAIL}' already exists")

    symbols = [listing.symbol for listing in ctx.market.list_listings()]
    print(f"\nPlacing {TRADES} trades over {len(symbols)} listings")
    print("=" * 60)

    placed = 0
    for _ in range(TRADES):
        symbol = rng.choice(symbols)
        held = {h.symbol: h.quantity for h in ctx.portfolio.get_snapshot(account.user_id).holdings}
        try:
            if symbol in held and rng.random() < 0.35:
                quantity = rng.randint(1, int(held[symbol]))
                result = ctx.reconciler.sell(account.user_id, symbol, quantity)
            else:
                result = ctx.reconciler.buy(account.user_id, symbol, rng.randint(1, 10))
        except AppError as e:
            print(f"  skipped {symbol}: {e.message}")
            continue
        placed += 1
        trade = result.trade
        print(f"  {trade.action.value:<4} {trade.quantity:>3} {trade.symbol:<12} @ {trade.price}")

    snapshot = ctx.portfolio.get_snapshot(account.user_id)
    print("=" * 60)
    print(f"✓ {placed} trades placed")
    print(f"  Cash:        {snapshot.cash_balance:,.2f}")
    print(f"  Total value: {snapshot.total_value:,.2f}")
    ctx.close()
    return account.user_id


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    generate_demo_data(target)
