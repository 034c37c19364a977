"""
Environment-specific configuration settings.

Defaults suit local development against CSV exports; production points at
a PostgreSQL database, either directly or through a Secrets Manager secret.
"""

from dataclasses import dataclass
import os
from typing import Optional


@dataclass
class Settings:
    """Application settings read once at process start."""

    # Environment
    environment: str = "dev"

    # Database Configuration
    database_url: Optional[str] = None
    db_secret_arn: Optional[str] = None
    db_pool_size: int = 1
    db_max_overflow: int = 2

    # CSV sources used when no database is configured
    customers_csv: Optional[str] = None
    orders_csv: Optional[str] = None

    # Bucket holding CSV exports; the loader reads bare keys from it
    csv_bucket: Optional[str] = None

    # Per-row stats fan-out
    stats_max_workers: int = 8

    @property
    def debug(self) -> bool:
        """Expose error details in responses outside production."""
        return self.environment == "dev"

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        common = dict(
            environment=env,
            database_url=os.environ.get("DATABASE_URL") or None,
            db_secret_arn=os.environ.get("DB_SECRET_ARN") or None,
            customers_csv=os.environ.get("CUSTOMERS_CSV") or None,
            orders_csv=os.environ.get("ORDERS_CSV") or None,
            csv_bucket=os.environ.get("CSV_BUCKET") or None,
        )
        workers = os.environ.get("STATS_MAX_WORKERS")

        # Production overrides
        if env == "prod":
            return cls(
                **common,
                db_pool_size=int(os.environ.get("DB_POOL_SIZE", "5")),
                db_max_overflow=10,
                stats_max_workers=int(workers or "16"),
            )

        return cls(
            **common,
            db_pool_size=int(os.environ.get("DB_POOL_SIZE", "1")),
            stats_max_workers=int(workers or "8"),
        )
