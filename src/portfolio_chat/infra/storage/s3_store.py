from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from portfolio_chat.application.ports.object_store_port import ObjectStorePort
from portfolio_chat.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass
class S3ObjectStore(ObjectStorePort):
    """ObjectStorePort backed by one S3 bucket."""

    bucket: str
    region: str = "us-east-1"
    client: Any = None

    def __post_init__(self) -> None:
        if self.client is None:
            import boto3

            self.client = boto3.client("s3", region_name=self.region)

    def list_keys(self, prefix: str) -> Iterator[str]:
        paginator = self.client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for obj in page.get("Contents", []) or []:
                key = obj.get("Key")
                if key:
                    yield key

    def get_text(self, key: str) -> str | None:
        try:
            resp = self.client.get_object(Bucket=self.bucket, Key=key)
            return resp["Body"].read().decode("utf-8")
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_CODES:
                logger.info("s3://%s/%s not found", self.bucket, key)
                return None
            raise DocumentLoadError(f"Could not read s3://{self.bucket}/{key}: {code}") from e
        except (BotoCoreError, UnicodeDecodeError) as e:
            raise DocumentLoadError(f"Could not read s3://{self.bucket}/{key}: {e}") from e

    def put_text(self, key: str, body: str, content_type: str = "application/json") -> None:
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body.encode("utf-8"),
            ContentType=content_type,
        )
        logger.info("Uploaded s3://%s/%s (%d bytes)", self.bucket, key, len(body))
