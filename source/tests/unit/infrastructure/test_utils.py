#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from aws_cdk import aws_lambda

from orderinfra.infrastructure.handlers import api_handler, order_handlers
from orderinfra.infrastructure.utils import InfraUtils


def test_get_handler_and_code_for_function() -> None:
    params = InfraUtils.get_handler_and_code_for_function(
        order_handlers.process_order
    )

    assert params["handler"] == "order_handlers.process_order"
    assert isinstance(params["code"], aws_lambda.AssetCode)


def test_handlers_share_asset_folder() -> None:
    params = InfraUtils.get_handler_and_code_for_function(
        api_handler.handle_api_request
    )

    assert params["handler"] == "api_handler.handle_api_request"
    assert params["code"].path.endswith("handlers")
