"""S3 repository for CSV exports."""

from typing import Iterable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from utils.error_handling import StoreError


class S3Repository:
    """Minimal helper around S3 for reading CSV exports."""

    def __init__(self, bucket_name: str, client=None):
        self.bucket_name = bucket_name
        self.client = client or boto3.client("s3")

    def read_text(self, key: str, encoding: str = "utf-8") -> str:
        """Download an object and decode it as text."""
        try:
            resp = self.client.get_object(Bucket=self.bucket_name, Key=key)
            return resp["Body"].read().decode(encoding)
        except (BotoCoreError, ClientError) as exc:
            raise StoreError(f"Failed to read s3://{self.bucket_name}/{key}: {exc}") from exc

    def list_keys(self, prefix: str = "") -> Iterable[str]:
        """List object keys under a prefix."""
        paginator = self.client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
            for item in page.get("Contents", []):
                yield item["Key"]
