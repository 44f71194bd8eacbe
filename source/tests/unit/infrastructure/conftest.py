#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from typing import Callable, Optional

import aws_cdk
import pytest
from aws_cdk import assertions
from aws_cdk.assertions import Template

from orderinfra.infrastructure.settings import OrderInfraSettings
from orderinfra.infrastructure.stacks.order_infra_stack import OrderInfraStack

ACCOUNT_ID = "111111111111"
REGION = "us-east-1"

StackFactory = Callable[[Optional[OrderInfraSettings]], OrderInfraStack]


@pytest.fixture(scope="module")
def stack_factory() -> StackFactory:
    def create_stack(settings: Optional[OrderInfraSettings] = None) -> OrderInfraStack:
        synthesizer = aws_cdk.DefaultStackSynthesizer(
            generate_bootstrap_version_rule=False
        )
        env = aws_cdk.Environment(account=ACCOUNT_ID, region=REGION)
        app = aws_cdk.App(analytics_reporting=False)
        return OrderInfraStack(
            app,
            "TestOrderInfraStack",
            settings=settings,
            env=env,
            synthesizer=synthesizer,
        )

    return create_stack


@pytest.fixture(scope="module")
def stack(stack_factory: StackFactory) -> OrderInfraStack:
    return stack_factory(None)


@pytest.fixture(scope="module")
def template(stack: OrderInfraStack) -> Template:
    return assertions.Template.from_stack(stack)
