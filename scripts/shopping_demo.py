"""Demo: Seed the Inventory Ledger from a catalog and simulate shoppers.

Reconciles a catalog into the ledger, then runs a number of shopper
sessions that fill a cart, check out and occasionally cancel. Prints the
inventory report at the end so the stock movements are visible.

Usage:
    # Bundled catalog, 20 shoppers
    python scripts/shopping_demo.py --shoppers 20

    # Custom catalog with a fixed random seed
    python scripts/shopping_demo.py --catalog data/products.json --seed 7

Runs against the provider configured in src/storefront/domain.toml
(memory by default, so every run starts from the catalog baseline).
"""

import argparse
import random
import sys
import time

# Add src/ to path so we can import domain modules
sys.path.insert(0, "src")


def main():
    parser = argparse.ArgumentParser(
        description="Seed stock from a catalog and simulate shopper sessions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --shoppers 50                  # Fifty shoppers on the bundled catalog
  %(prog)s --cancel-rate 0.5 --seed 1     # Half of all orders get cancelled
        """,
    )
    parser.add_argument("--catalog", help="Catalog JSON file (default: bundled products.json)")
    parser.add_argument("--shoppers", type=int, default=20, help="Number of shopper sessions (default: 20)")
    parser.add_argument(
        "--cancel-rate", type=float, default=0.2, help="Fraction of placed orders to cancel (default: 0.2)"
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible run")
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    from protean.exceptions import ValidationError

    from storefront.cart.items import AddToCart
    from storefront.catalog import StaticCatalog, get_catalog, set_catalog
    from storefront.domain import storefront
    from storefront.inventory.ledger import inventory_report
    from storefront.inventory.reconciliation import ReconcileCatalog
    from storefront.order.cancellation import CancelOrder
    from storefront.order.checkout import Checkout
    from storefront.order.delivery import ConfirmDelivery
    from storefront.utils.logging import configure_logging

    configure_logging()
    storefront.init()
    if args.catalog:
        set_catalog(StaticCatalog.from_file(args.catalog))

    print(f"\n{'=' * 60}")
    print("  Storefront Shopping Demo")
    print(f"{'=' * 60}")
    print(f"  Shoppers:     {args.shoppers:,}")
    print(f"  Cancel rate:  {args.cancel_rate:.0%}")
    print(f"{'=' * 60}\n")

    placed = delivered = cancelled = refused = 0
    start = time.monotonic()

    with storefront.domain_context():
        storefront.process(ReconcileCatalog(), asynchronous=False)
        product_ids = [entry.product_id for entry in get_catalog().entries()]

        for i in range(args.shoppers):
            user_key = f"demo-shopper-{i + 1}"
            try:
                for product_id in random.sample(product_ids, k=min(2, len(product_ids))):
                    storefront.process(
                        AddToCart(user_key=user_key, product_id=product_id, quantity=random.randint(1, 3)),
                        asynchronous=False,
                    )
                order_id = storefront.process(
                    Checkout(user_key=user_key, shipping_address=f"{i + 1} Demo Street", shipping_city="Demo City"),
                    asynchronous=False,
                )
                placed += 1
            except ValidationError as exc:
                refused += 1
                print(f"  [REFUSED] {user_key}: {exc.messages}")
                continue

            if random.random() < args.cancel_rate:
                storefront.process(CancelOrder(order_id=order_id, reason="Demo cancellation"), asynchronous=False)
                cancelled += 1
            else:
                storefront.process(ConfirmDelivery(order_id=order_id), asynchronous=False)
                delivered += 1

        report = inventory_report()

    elapsed = time.monotonic() - start

    print(f"\n{'=' * 60}")
    print("  Inventory Report")
    print(f"{'=' * 60}")
    for line in report.lines:
        print(f"  {line.product_id:<12} {line.available_quantity:>6}  {line.status}")
    print(f"  Critical (low or out): {report.critical_count}")
    print(f"{'=' * 60}")
    print(f"  Orders placed:    {placed:,}")
    print(f"  Delivered:        {delivered:,}")
    print(f"  Cancelled:        {cancelled:,}")
    print(f"  Refused sessions: {refused:,}")
    print(f"  Total time:       {elapsed:.2f}s")
    print(f"{'=' * 60}\n")


if __name__ == "__main__":
    main()
