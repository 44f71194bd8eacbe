#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from typing import Any, Callable, Dict, Optional

import aws_cdk as cdk
import constructs
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_logs as logs

from orderinfra.constants import TAG_COMPONENT
from orderinfra.infrastructure.constants import (
    LAMBDA_LOG_RETENTION,
    ORDER_LAMBDA_RUNTIME,
)
from orderinfra.infrastructure.settings import OrderInfraSettings
from orderinfra.infrastructure.utils import InfraUtils


class OrderInfraBaseConstruct(constructs.Construct):
    def __init__(
        self,
        scope: constructs.Construct,
        construct_id: str,
        settings: OrderInfraSettings,
    ) -> None:
        super().__init__(scope, construct_id)
        self.settings = settings
        self.log_groups: Dict[str, logs.LogGroup] = {}

        self.add_common_tags()

    @property
    def component_name(self) -> str:
        return self.node.id

    def build_resource_name(self, name: str) -> str:
        return self.settings.resource_name(name)

    def add_common_tags(
        self, construct: Optional[constructs.IConstruct] = None
    ) -> None:
        if construct is None:
            construct = self
        cdk.Tags.of(construct).add(TAG_COMPONENT, self.component_name)

    def create_log_group(
        self,
        construct_id: str,
        log_group_name: Optional[str] = None,
        retention: logs.RetentionDays = LAMBDA_LOG_RETENTION,
    ) -> logs.LogGroup:
        return logs.LogGroup(
            self,
            construct_id,
            log_group_name=log_group_name,
            retention=retention,
            removal_policy=cdk.RemovalPolicy.DESTROY,
        )

    def create_function(
        self,
        name: str,
        handler: Callable[[Dict[str, Any], Any], Any],
        description: str,
        environment: Optional[Dict[str, str]] = None,
    ) -> lambda_.Function:
        """
        Create a Lambda function named ``<prefix>-<name>-function`` that logs
        to its own ``/aws/lambda/...`` log group. The log group is kept in
        ``self.log_groups`` under ``name``.
        """
        function_name = self.build_resource_name(f"{name}-function")
        log_group = self.create_log_group(
            self.build_resource_name(f"{name}-log-group"),
            log_group_name=f"/aws/lambda/{function_name}",
        )
        self.log_groups[name] = log_group

        return lambda_.Function(
            self,
            f"{function_name}-id",
            function_name=function_name,
            runtime=ORDER_LAMBDA_RUNTIME,
            description=description,
            timeout=cdk.Duration.seconds(self.settings.lambda_timeout_seconds),
            environment=environment,
            log_group=log_group,
            **InfraUtils.get_handler_and_code_for_function(handler),
        )
