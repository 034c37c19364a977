#!/usr/bin/env python3
"""Load users/orders CSV exports into the SQL record store, or verify what is there.

Usage:
    python load_data.py load --users users.csv --orders orders.csv
    python load_data.py load --users s3://exports/users.csv --orders s3://exports/orders.csv
    CSV_BUCKET=exports python load_data.py load --users daily/users.csv --orders daily/orders.csv
    python load_data.py verify
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from config.settings import Settings  # noqa: E402
from repositories.factory import build_sql_store, resolve_db_url  # noqa: E402
from services.csv_loader import CsvRecordLoader  # noqa: E402
from utils.error_handling import AppError  # noqa: E402


def _store(settings: Settings):
    db_url = resolve_db_url(settings)
    if not db_url:
        print("DATABASE_URL (or DB_SECRET_ARN) must be set")
        sys.exit(1)
    return build_sql_store(db_url, settings)


def load(args, settings: Settings) -> None:
    store = _store(settings)
    loader = CsvRecordLoader(default_bucket=settings.csv_bucket)
    try:
        customers = loader.load_customers(args.users)
        orders = loader.load_orders(args.orders)
        store.create_schema()
        print(f"Inserted {store.insert_customers(customers)} users")
        print(f"Inserted {store.insert_orders(orders)} orders")
    finally:
        store.close()


def verify(args, settings: Settings) -> None:
    store = _store(settings)
    try:
        print("=== DATA VERIFICATION ===")
        for customer in store.fetch_all_customers()[: args.sample]:
            print(f"  user {customer.id}: {customer.name} <{customer.email}>")
        counts = store.counts()
        print(f"Total Users: {counts['users']}")
        print(f"Total Orders: {counts['orders']}")
        print("Sample join:")
        for row in store.sample_join(limit=args.sample):
            print(f"  order {row['id']}: {row['product']} {row['amount']} by {row['name']}")
    finally:
        store.close()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    load_cmd = sub.add_parser("load", help="create tables and insert CSV rows")
    load_cmd.add_argument("--users", required=True, help="users CSV path, s3:// URI, or key in CSV_BUCKET")
    load_cmd.add_argument("--orders", required=True, help="orders CSV path, s3:// URI, or key in CSV_BUCKET")
    load_cmd.set_defaults(func=load)

    verify_cmd = sub.add_parser("verify", help="print row counts and a sample join")
    verify_cmd.add_argument("--sample", type=int, default=5)
    verify_cmd.set_defaults(func=verify)

    args = parser.parse_args()
    try:
        args.func(args, Settings.from_environment())
    except AppError as exc:
        print(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
