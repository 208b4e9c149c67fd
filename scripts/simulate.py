"""
Order Flow Simulation Script

Fires a burst of customer sessions at the order store, each filling a
random cart from the menu and placing an order, then runs a kitchen pass
that completes part of them.

Against a running API (default):
    uvicorn canteen.main:app --port 8001
    python scripts/simulate.py --orders 25

Without a server, against an in-process store:
    python scripts/simulate.py --local
"""

import argparse
import asyncio
import os
import random
import sys
import tempfile
import time
from datetime import datetime
from typing import Any

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from canteen.core.config import setup_logging
from canteen.menu import get_menu
from canteen.services.orders import BaseOrderService, HttpOrderService, LocalOrderService
from canteen.session import SessionManager, TokenFile
from canteen.store import OrderStore

TOTAL_ORDERS = 20

FIRST_NAMES = ["Jo", "Asha", "Ravi", "Mei", "Tom", "Priya", "Sam", "Lena", "Arjun", "Kim"]


def generate_random_customer() -> dict[str, str]:
    """Generate random customer info."""
    return {
        "name": random.choice(FIRST_NAMES),
        "phone": f"555-{random.randint(1000, 9999):04d}",
    }


async def run_customer(
    service: BaseOrderService,
    session_dir: str,
    customer_num: int,
) -> dict[str, Any]:
    """One customer: start a session, fill a cart, place the order."""
    token_file = TokenFile(path=os.path.join(session_dir, f"customer_{customer_num}.json"))
    session = SessionManager(service, token_file=token_file)
    await session.start()

    menu = get_menu()
    for item in random.sample(menu, k=random.randint(1, 4)):
        for _ in range(random.randint(1, 3)):
            session.add_to_cart(item)

    customer = generate_random_customer()
    total = session.cart_total
    start_time = time.time()
    token = await session.place_order(customer["name"], customer["phone"])
    elapsed = round(time.time() - start_time, 3)

    return {
        "customer_num": customer_num,
        "success": token is not None,
        "token": token,
        "total": total,
        "time": elapsed,
        "error": session.error,
        "my_orders": len(session.my_orders),
    }


async def run_kitchen(service: BaseOrderService, share: float) -> int:
    """Complete a share of the open orders, oldest first."""
    kitchen = SessionManager(service, remember_tokens=False)
    await kitchen.refresh_orders()

    open_orders = [order for order in reversed(kitchen.orders) if not order.is_completed]
    to_complete = open_orders[: int(len(open_orders) * share)]
    for order in to_complete:
        await kitchen.complete_order(order.token)
    return len(to_complete)


async def run_simulation(
    service: BaseOrderService,
    num_orders: int = TOTAL_ORDERS,
    complete_share: float = 0.5,
) -> dict[str, Any]:
    """
    Run the simulation.

    Args:
        service: Order service every session talks to
        num_orders: Number of customers placing an order
        complete_share: Fraction of open orders the kitchen completes
    """
    print("=" * 70)
    print("🍜 ORDER FLOW SIMULATION")
    print("=" * 70)
    print(f"📋 Customers: {num_orders}")
    print(f"🎯 Target: {service.provider_name}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    with tempfile.TemporaryDirectory() as session_dir:
        tasks = [run_customer(service, session_dir, i + 1) for i in range(num_orders)]
        results = await asyncio.gather(*tasks)

    completed = await run_kitchen(service, complete_share)
    orders = await service.get_orders()
    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]
    tokens = [order.token for order in orders]
    duplicates = len(tokens) - len(set(tokens))

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)

    print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"👨‍🍳 Completed by kitchen: {completed}")
    print(f"🧾 Orders in store: {len(orders)}")
    print(f"⏱️  Total Time: {total_time}s")

    if duplicates:
        print(f"\n⚠️  {duplicates} duplicate tokens in store")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        total_revenue = sum(r["total"] for r in successful)
        print(f"\n📈 Average placement: {avg_time}s")
        print(f"   💰 Total Revenue: ${total_revenue:.2f}")

    if failed:
        print(f"\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Customer #{f['customer_num']}: {f.get('error') or 'Unknown error'}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "completed": completed,
        "duplicates": duplicates,
        "total_time": total_time,
        "results": results,
    }


async def main(args: argparse.Namespace) -> int:
    if args.local:
        service: BaseOrderService = LocalOrderService(OrderStore())
    else:
        service = HttpOrderService(base_url=args.url)
        if not await service.health_check():
            print(f"\n❌ Order API not reachable at {service.base_url}")
            await service.close()
            return 1

    try:
        summary = await run_simulation(service, args.orders, args.complete)
    finally:
        await service.close()

    return 0 if summary["failed"] == 0 else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Flow Simulation")
    parser.add_argument("--local", action="store_true", help="Use an in-process store")
    parser.add_argument("--url", default=None, help="Order API base URL")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of customers")
    parser.add_argument("--complete", type=float, default=0.5, help="Share of orders to complete")
    args = parser.parse_args()

    setup_logging()

    sys.exit(asyncio.run(main(args)))
