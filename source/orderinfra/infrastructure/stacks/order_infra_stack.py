#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import importlib.metadata
from typing import Any, Optional

from aws_cdk import CfnOutput, Tags
from constructs import Construct

import orderinfra
from orderinfra.constants import TAG_ENVIRONMENT_NAME
from orderinfra.infrastructure.constants import SHIELD_STANDARD_INFO
from orderinfra.infrastructure.constructs.api import OrderApi
from orderinfra.infrastructure.constructs.firewall import OrderFirewall
from orderinfra.infrastructure.constructs.monitoring import OrderMonitoring
from orderinfra.infrastructure.constructs.network import OrderNetwork
from orderinfra.infrastructure.constructs.storage import OrderStorage
from orderinfra.infrastructure.constructs.workflow import OrderWorkflow
from orderinfra.infrastructure.settings import OrderInfraSettings
from orderinfra.infrastructure.stacks.base_stack import OrderInfraBaseStack


class OrderInfraStack(OrderInfraBaseStack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        settings: Optional[OrderInfraSettings] = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault(
            "description",
            f"OrderInfra_{importlib.metadata.version(orderinfra.__package__)}",
        )
        super().__init__(scope, construct_id, **kwargs)

        self.settings = settings if settings is not None else OrderInfraSettings()
        Tags.of(self).add(TAG_ENVIRONMENT_NAME, self.settings.environment_name)

        self.network = OrderNetwork(self, "Network", self.settings)
        self.storage = OrderStorage(self, "Storage", self.settings)
        self.workflow = OrderWorkflow(
            self, "Workflow", self.settings, bucket=self.storage.bucket
        )
        self.api = OrderApi(
            self,
            "Api",
            self.settings,
            state_machine=self.workflow.state_machine,
            bucket=self.storage.bucket,
        )
        self.firewall = OrderFirewall(
            self, "Firewall", self.settings, rest_api=self.api.rest_api
        )
        self.monitoring = OrderMonitoring(
            self,
            "Monitoring",
            self.settings,
            state_machine=self.workflow.state_machine,
            rest_api=self.api.rest_api,
            web_acl_name=self.firewall.web_acl_name,
        )

        self.add_outputs()

    def add_outputs(self) -> None:
        outputs = {
            "ApiGatewayUrl": (
                self.api.rest_api.url,
                "API Gateway URL for Order Processing",
            ),
            "StateMachineArn": (
                self.workflow.state_machine.state_machine_arn,
                "Step Functions State Machine ARN",
            ),
            "S3BucketName": (
                self.storage.bucket.bucket_name,
                "S3 Bucket for storing processed orders",
            ),
            "OrderProcessorLogGroup": (
                self.workflow.log_groups["order-processor"].log_group_name,
                "CloudWatch Log Group for Order Processor Lambda",
            ),
            "S3StorageLogGroup": (
                self.workflow.log_groups["s3-storage"].log_group_name,
                "CloudWatch Log Group for S3 Storage Lambda",
            ),
            "ApiLambdaLogGroup": (
                self.api.log_groups["api-lambda"].log_group_name,
                "CloudWatch Log Group for API Lambda",
            ),
            "StepFunctionsLogGroup": (
                self.workflow.state_machine_log_group.log_group_name,
                "CloudWatch Log Group for Step Functions",
            ),
            "WAFWebACLArn": (
                self.firewall.web_acl.attr_arn,
                "WAF WebACL ARN for API Gateway protection",
            ),
            "WAFWebACLId": (
                self.firewall.web_acl.attr_id,
                "WAF WebACL ID for monitoring and management",
            ),
            "WAFLogGroup": (
                self.firewall.log_group.log_group_name,
                "CloudWatch Log Group for WAF security logs",
            ),
            "ShieldStandardInfo": (
                SHIELD_STANDARD_INFO,
                "Shield Standard provides basic DDoS protection at no additional cost",
            ),
        }
        for output_id, (value, description) in outputs.items():
            CfnOutput(self, output_id, value=value, description=description)
