#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import aws_cdk as cdk
import constructs
from aws_cdk import aws_apigateway as apigateway
from aws_cdk import aws_cloudwatch as cloudwatch
from aws_cdk import aws_stepfunctions as sfn

from orderinfra.infrastructure.constructs.base import OrderInfraBaseConstruct
from orderinfra.infrastructure.settings import OrderInfraSettings

WAF_METRICS_NAMESPACE = "AWS/WAFV2"


class OrderMonitoring(OrderInfraBaseConstruct):
    def __init__(
        self,
        scope: constructs.Construct,
        construct_id: str,
        settings: OrderInfraSettings,
        state_machine: sfn.StateMachine,
        rest_api: apigateway.RestApi,
        web_acl_name: str,
    ) -> None:
        super().__init__(scope, construct_id, settings)

        self.dashboard = cloudwatch.Dashboard(
            self,
            self.build_resource_name("order-dashboard-id"),
            dashboard_name=self.build_resource_name("order-monitoring-dashboard"),
        )

        self.dashboard.add_widgets(
            cloudwatch.GraphWidget(
                title="Step Functions Executions",
                left=[state_machine.metric_started()],
                right=[state_machine.metric_succeeded(), state_machine.metric_failed()],
            )
        )
        self.dashboard.add_widgets(
            cloudwatch.GraphWidget(
                title="API Gateway Requests",
                left=[rest_api.metric_count()],
                right=[rest_api.metric_latency()],
            )
        )
        self.dashboard.add_widgets(
            cloudwatch.GraphWidget(
                title="WAF Metrics",
                left=[self.waf_metric("AllowedRequests", web_acl_name)],
                right=[self.waf_metric("BlockedRequests", web_acl_name)],
            )
        )

    def waf_metric(self, metric_name: str, web_acl_name: str) -> cloudwatch.Metric:
        return cloudwatch.Metric(
            namespace=WAF_METRICS_NAMESPACE,
            metric_name=metric_name,
            dimensions_map={
                "WebACL": web_acl_name,
                "Region": cdk.Stack.of(self).region,
            },
        )
