#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0

from aws_cdk import aws_logs as logs
from aws_cdk import aws_lambda

ORDER_LAMBDA_RUNTIME = aws_lambda.Runtime.PYTHON_3_11
LAMBDA_LOG_RETENTION = logs.RetentionDays.ONE_WEEK
WAF_LOG_RETENTION = logs.RetentionDays.ONE_MONTH
WAF_LOG_GROUP_NAME_PREFIX = "aws-waf-logs-"
ORDERS_RESOURCE_PATH = "orders"
API_ALLOWED_HEADERS = [
    "Content-Type",
    "X-Amz-Date",
    "Authorization",
    "X-Api-Key",
    "X-Amz-Security-Token",
]
SHIELD_STANDARD_INFO = (
    "AWS Shield Standard is automatically enabled for all AWS resources"
)
