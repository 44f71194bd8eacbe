#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from typing import Dict
from unittest.mock import MagicMock

import boto3
import pytest

BUCKET_NAME = "practice-orders-bucket"
STATE_MACHINE_ARN = (
    "arn:aws:states:us-east-1:111111111111:stateMachine:practice-order-workflow"
)
FIXED_TIME = 1700000000.5


@pytest.fixture
def aws_clients(monkeypatch: pytest.MonkeyPatch) -> Dict[str, MagicMock]:
    """
    Replace boto3.client with a factory returning one mock per service.
    """
    clients: Dict[str, MagicMock] = {}

    def client(service_name: str, *args, **kwargs) -> MagicMock:
        return clients.setdefault(service_name, MagicMock(name=service_name))

    monkeypatch.setattr(boto3, "client", client)
    return clients


@pytest.fixture
def handler_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("S3_BUCKET_NAME", BUCKET_NAME)
    monkeypatch.setenv("STATE_MACHINE_ARN", STATE_MACHINE_ARN)
