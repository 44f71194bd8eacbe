#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""
Order workflow handlers
Each function backs one Lambda task of the order state machine. Results are
wrapped as {"statusCode": 200, "body": {...}} and the state machine picks the
Payload of every invocation, so the next task receives that envelope.
"""
import json
import logging
import os
import random
import time
from datetime import datetime, timezone
from typing import Any, Dict, List

import boto3
import botocore.exceptions

logger = logging.getLogger()
logger.setLevel(logging.INFO)

ORDERS_PREFIX = "orders/"
IN_STOCK_PROBABILITY = 0.9
PAYMENT_APPROVAL_PROBABILITY = 0.95
MIN_STOCK_LEVEL = 10
MAX_STOCK_LEVEL = 109


class EnvKeys:
    S3_BUCKET_NAME = "S3_BUCKET_NAME"


class PaymentStatus:
    APPROVED = "approved"
    DECLINED = "declined"


class OrderStatus:
    PROCESSED = "processed"
    COMPLETED = "completed"
    FAILED = "failed"


# Lambda loads each handler module as a top level module of the asset folder
# while tests import it from the package, so the helpers up to current_timestamp
# are kept in both order_handlers and api_handler.
class InvalidRequestException(Exception):
    pass


def current_time_ms() -> int:
    return int(time.time() * 1000)


def current_timestamp() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def success(body: Dict[str, Any]) -> Dict[str, Any]:
    return {"statusCode": 200, "body": body}


def get_order(event: Any) -> Dict[str, Any]:
    """
    Tasks after the first one receive the previous task's envelope rather
    than the order itself. Accept both shapes.
    """
    if not isinstance(event, dict):
        raise InvalidRequestException("event must be a JSON object")
    body = event.get("body")
    if isinstance(body, dict):
        return body
    return event


def get_branch_body(results: List[Any], index: int) -> Dict[str, Any]:
    if index >= len(results) or not isinstance(results[index], dict):
        return {}
    body = results[index].get("body")
    return body if isinstance(body, dict) else {}


def process_order(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    if not isinstance(event, dict):
        raise InvalidRequestException("event must be a JSON object")
    logger.info(f"Process Order - Received event: {json.dumps(event, default=str)}")

    order = {
        "orderId": f"order-{current_time_ms()}",
        "customerName": "Unknown Customer",
        "items": [],
        "totalAmount": 0,
        "status": OrderStatus.PROCESSED,
        "timestamp": current_timestamp(),
        "processedBy": "order-processor-lambda",
        # fields present on the event always win
        **event,
    }

    return success(order)


def check_inventory(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    logger.info(f"Inventory Check - Received event: {json.dumps(event, default=str)}")
    order = get_order(event)

    items = order.get("items") or []
    if not isinstance(items, list):
        raise InvalidRequestException("order items must be a list")
    # bare skus such as "items": ["sku-1"]
    items = [item if isinstance(item, dict) else {"sku": item} for item in items]

    inventory = {
        "orderId": order.get("orderId") or "unknown",
        "items": items,
        "inventoryStatus": "checked",
        "availableStock": [
            {
                **item,
                "inStock": random.random() < IN_STOCK_PROBABILITY,
                "stockLevel": random.randint(MIN_STOCK_LEVEL, MAX_STOCK_LEVEL),
            }
            for item in items
        ],
        "checkedAt": current_timestamp(),
        "checkedBy": "inventory-check-lambda",
    }

    logger.info(f"Inventory Check - Result: {json.dumps(inventory, default=str)}")
    return success(inventory)


def process_payment(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    logger.info(f"Payment Process - Received event: {json.dumps(event, default=str)}")
    order = get_order(event)

    approved = random.random() < PAYMENT_APPROVAL_PROBABILITY
    payment = {
        "orderId": order.get("orderId") or "unknown",
        "totalAmount": order.get("totalAmount") or 0,
        "paymentStatus": PaymentStatus.APPROVED if approved else PaymentStatus.DECLINED,
        "transactionId": f"txn-{current_time_ms()}",
        "paymentMethod": "credit_card",
        "processedAt": current_timestamp(),
        "processedBy": "payment-process-lambda",
    }

    logger.info(f"Payment Process - Result: {json.dumps(payment, default=str)}")
    return success(payment)


def merge_results(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    logger.info(f"Merge Results - Received event: {json.dumps(event, default=str)}")
    if not isinstance(event, dict):
        raise InvalidRequestException("event must be a JSON object")

    order_processing = event.get("orderProcessing") or {}
    order_data = order_processing.get("body") or {}
    # branch order matches the Parallel state: inventory first, payment second
    parallel_results = event.get("parallelResults") or []
    inventory_data = get_branch_body(parallel_results, 0)
    payment_data = get_branch_body(parallel_results, 1)

    merged = {
        "orderId": order_data.get("orderId")
        or inventory_data.get("orderId")
        or payment_data.get("orderId"),
        "orderDetails": order_data,
        "inventoryCheck": inventory_data,
        "paymentProcessing": payment_data,
        "finalStatus": (
            OrderStatus.COMPLETED
            if payment_data.get("paymentStatus") == PaymentStatus.APPROVED
            else OrderStatus.FAILED
        ),
        "processedAt": current_timestamp(),
        "processedBy": "merge-results-lambda",
    }

    logger.info(f"Merge Results - Final result: {json.dumps(merged, default=str)}")
    return success(merged)


def store_order(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    logger.info(f"S3 Storage - Received event: {json.dumps(event, default=str)}")
    if not isinstance(event, dict) or not isinstance(event.get("body"), dict):
        raise InvalidRequestException("event has no order body to store")

    body: Dict[str, Any] = event["body"]
    bucket_name = os.environ[EnvKeys.S3_BUCKET_NAME]
    key = f"{ORDERS_PREFIX}{body.get('orderId')}.json"

    s3_client = boto3.client("s3")
    try:
        result = s3_client.put_object(
            Bucket=bucket_name,
            Key=key,
            Body=json.dumps(body, indent=2, default=str),
            ContentType="application/json",
        )
    except botocore.exceptions.ClientError:
        logger.exception(f"S3 Storage - Failed to store {key} in {bucket_name}")
        raise

    logger.info(f"S3 Storage - Object stored successfully: {key}")

    return success(
        {
            **body,
            "s3Location": f"s3://{bucket_name}/{key}",
            "etag": result.get("ETag"),
            "storedAt": current_timestamp(),
            "processedBy": "s3-storage-lambda",
        }
    )
