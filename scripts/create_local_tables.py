#!/usr/bin/env python3
"""Create DynamoDB tables (and the media bucket) for local development.

Creates the trips, blogs and assets tables against DynamoDB Local. When
S3_ENDPOINT points at a local S3-compatible server, the media bucket is
created there as well.

Usage:
    python scripts/create_local_tables.py
"""

import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

# Add src to path for config import
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import get_config


def create_table(dynamodb, table_name):
    """Create a table keyed by the string attribute ``id``."""
    try:
        dynamodb.create_table(
            TableName=table_name,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"✓ Created {table_name} table")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"✓ {table_name} table already exists")
        else:
            raise


def create_bucket(s3, bucket):
    try:
        s3.create_bucket(Bucket=bucket)
        print(f"✓ Created {bucket} bucket")
    except ClientError as e:
        if e.response["Error"]["Code"] in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
            print(f"✓ {bucket} bucket already exists")
        else:
            raise


def main():
    """Create all local resources."""
    config = get_config()

    endpoint_url = config.dynamodb_endpoint or "http://localhost:8000"

    print(f"Creating DynamoDB tables at {endpoint_url}...")
    print()

    # For DynamoDB Local, use dummy credentials
    dynamodb = boto3.client(
        "dynamodb",
        endpoint_url=endpoint_url,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    for table_name in (config.trips_table, config.blogs_table, config.assets_table):
        create_table(dynamodb, table_name)

    if config.s3_endpoint:
        s3 = boto3.client(
            "s3",
            endpoint_url=config.s3_endpoint,
            region_name=config.aws_region,
            aws_access_key_id="dummy",
            aws_secret_access_key="dummy",
        )
        create_bucket(s3, config.assets_bucket)

    print()
    print("✅ Local tables ready")


if __name__ == "__main__":
    main()
