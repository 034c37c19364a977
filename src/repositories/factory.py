"""
Record store wiring.

Builds the store once per process from Settings. The database URL is read
from the environment or, when only a Secrets Manager ARN is configured,
assembled from the RDS secret. Without a database the store is populated
from CSV exports held in memory.
"""

from __future__ import annotations

import json
from typing import Optional

import boto3
from sqlalchemy import create_engine
from sqlalchemy.pool import QueuePool

from config.settings import Settings
from repositories.base import RecordStore
from repositories.memory_repo import InMemoryRecordStore
from repositories.sql_repo import SqlRecordStore
from utils.logging_config import get_logger

logger = get_logger(__name__)


def _secret_to_db_url(secret_arn: str) -> Optional[str]:
    """Build a SQLAlchemy URL from an RDS secret."""
    try:
        sm = boto3.client("secretsmanager")
        secret_value = sm.get_secret_value(SecretId=secret_arn)["SecretString"]
        secret = json.loads(secret_value)
        host = secret.get("host")
        port = secret.get("port", 5432)
        username = secret.get("username")
        password = secret.get("password")
        dbname = secret.get("dbname", "postgres")
        if not (host and username and password):
            return None
        return f"postgresql+psycopg2://{username}:{password}@{host}:{port}/{dbname}"
    except Exception as exc:
        logger.warning("Failed to load DB secret", extra={"error": str(exc)})
        return None


def resolve_db_url(settings: Settings) -> Optional[str]:
    if settings.database_url:
        return settings.database_url
    if settings.db_secret_arn:
        return _secret_to_db_url(settings.db_secret_arn)
    return None


def build_sql_store(db_url: str, settings: Settings) -> SqlRecordStore:
    """Create a pooled SQLAlchemy engine and wrap it in a store."""
    if db_url.startswith("sqlite"):
        engine = create_engine(db_url)
    else:
        engine = create_engine(
            db_url,
            poolclass=QueuePool,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
            pool_recycle=300,
        )
    return SqlRecordStore(engine)


def build_record_store(settings: Settings) -> RecordStore:
    """Pick the store implementation for this process."""
    db_url = resolve_db_url(settings)
    if db_url:
        logger.info("Using SQL record store", extra={"environment": settings.environment})
        return build_sql_store(db_url, settings)

    if settings.customers_csv and settings.orders_csv:
        # Imported here to keep the loader out of the SQL-only import path.
        from services.csv_loader import CsvRecordLoader

        loader = CsvRecordLoader()
        customers = loader.load_customers(settings.customers_csv)
        orders = loader.load_orders(settings.orders_csv)
        logger.info(
            "Using in-memory record store from CSV",
            extra={"customers": len(customers), "orders": len(orders)},
        )
        return InMemoryRecordStore(customers, orders)

    logger.warning("No database or CSV source configured; using an empty store")
    return InMemoryRecordStore()
