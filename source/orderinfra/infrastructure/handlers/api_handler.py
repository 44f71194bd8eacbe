#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""
Orders API
Backs the /orders resource of the REST API through the Lambda proxy
integration. POST starts an order workflow execution, GET returns the most
recently stored orders.
"""
import json
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import boto3
import botocore.exceptions

logger = logging.getLogger()
logger.setLevel(logging.INFO)

ORDERS_PREFIX = "orders/"
MAX_LISTED_ORDERS = 50
RECENT_ORDERS_LIMIT = 10
ALLOWED_METHODS = ["GET", "POST"]

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}
WORKFLOW_CORS_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class EnvKeys:
    STATE_MACHINE_ARN = "STATE_MACHINE_ARN"
    S3_BUCKET_NAME = "S3_BUCKET_NAME"


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


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def build_response(
    status_code: int,
    body: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(headers if headers is not None else CORS_HEADERS),
        "body": json.dumps(body, default=_json_default),
    }


def handle_api_request(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    logger.info(f"Received event: {json.dumps(event, default=str)}")

    try:
        http_method = event.get("httpMethod")
        if http_method == "GET":
            return handle_get_request(event)
        if http_method == "POST":
            return handle_post_request(event)
        return build_response(
            405,
            {"message": "Method not allowed", "allowedMethods": ALLOWED_METHODS},
        )
    except Exception as e:
        logger.exception("Error occurred while handling request")
        return build_response(
            500,
            {
                "message": "Internal server error",
                "error": str(e),
                "timestamp": current_timestamp(),
            },
        )


def read_order(
    s3_client: Any, bucket_name: str, order_file: Dict[str, Any]
) -> Optional[Dict[str, Any]]:
    key = order_file["Key"]
    try:
        result = s3_client.get_object(Bucket=bucket_name, Key=key)
        order = json.loads(result["Body"].read())
    except (
        botocore.exceptions.BotoCoreError,
        botocore.exceptions.ClientError,
        ValueError,
    ):
        logger.exception(f"Error reading order file {key}")
        return None
    if not isinstance(order, dict):
        logger.error(f"Order file {key} does not hold a JSON object")
        return None

    return {
        **order,
        "fileName": key,
        "lastModified": order_file.get("LastModified"),
        "size": order_file.get("Size"),
    }


def handle_get_request(_: Dict[str, Any]) -> Dict[str, Any]:
    logger.info("Handling GET request")
    bucket_name = os.environ[EnvKeys.S3_BUCKET_NAME]
    s3_client = boto3.client("s3")

    list_result = s3_client.list_objects_v2(
        Bucket=bucket_name, Prefix=ORDERS_PREFIX, MaxKeys=MAX_LISTED_ORDERS
    )
    contents: List[Dict[str, Any]] = list_result.get("Contents") or []

    if not contents:
        return build_response(
            200,
            {
                "message": "No orders found",
                "orders": [],
                "totalCount": 0,
                "retrievedAt": current_timestamp(),
            },
        )

    recent_orders = sorted(
        contents, key=lambda order_file: order_file["LastModified"], reverse=True
    )[:RECENT_ORDERS_LIMIT]

    orders = []
    for order_file in recent_orders:
        order = read_order(s3_client, bucket_name, order_file)
        if order is not None:
            orders.append(order)

    return build_response(
        200,
        {
            "message": "Orders retrieved successfully",
            "orders": orders,
            "totalCount": list_result.get("KeyCount", 0),
            "retrievedAt": current_timestamp(),
            "pagination": {
                "limit": RECENT_ORDERS_LIMIT,
                "hasMore": list_result.get("IsTruncated", False),
            },
        },
    )


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    raw_body = event.get("body")
    if not raw_body:
        return {}
    body = json.loads(raw_body)
    if not isinstance(body, dict):
        raise InvalidRequestException("request body must be a JSON object")
    return body


def handle_post_request(event: Dict[str, Any]) -> Dict[str, Any]:
    logger.info("Handling POST request")

    body = parse_body(event)
    logger.info(f"Parsed body: {json.dumps(body)}")

    if not body.get("orderId") and not body.get("customerName"):
        body["orderId"] = f"order-{current_time_ms()}"

    execution_name = f"execution-{current_time_ms()}"
    sfn_client = boto3.client("stepfunctions")
    result = sfn_client.start_execution(
        stateMachineArn=os.environ[EnvKeys.STATE_MACHINE_ARN],
        input=json.dumps(body),
        name=execution_name,
    )

    logger.info(f"Step Functions execution started: {result.get('executionArn')}")

    return build_response(
        200,
        {
            "message": "Order workflow started successfully",
            "executionArn": result.get("executionArn"),
            "executionName": execution_name,
            "startDate": result.get("startDate"),
            "inputData": body,
            "workflowStatus": "started",
        },
        headers=WORKFLOW_CORS_HEADERS,
    )
