#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import constructs
from aws_cdk import aws_apigateway as apigateway
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_stepfunctions as sfn

from orderinfra.infrastructure.constants import (
    API_ALLOWED_HEADERS,
    ORDERS_RESOURCE_PATH,
)
from orderinfra.infrastructure.constructs.base import OrderInfraBaseConstruct
from orderinfra.infrastructure.handlers import api_handler
from orderinfra.infrastructure.settings import OrderInfraSettings


class OrderApi(OrderInfraBaseConstruct):
    def __init__(
        self,
        scope: constructs.Construct,
        construct_id: str,
        settings: OrderInfraSettings,
        state_machine: sfn.IStateMachine,
        bucket: s3.IBucket,
    ) -> None:
        super().__init__(scope, construct_id, settings)

        self.api_function = self.create_function(
            "api-lambda",
            api_handler.handle_api_request,
            description="Starts order workflows and lists stored orders",
            environment={
                api_handler.EnvKeys.STATE_MACHINE_ARN: state_machine.state_machine_arn,
                api_handler.EnvKeys.S3_BUCKET_NAME: bucket.bucket_name,
            },
        )
        state_machine.grant_start_execution(self.api_function)
        # GET /orders only reads stored orders
        bucket.grant_read(self.api_function)

        self.rest_api = apigateway.RestApi(
            self,
            self.build_resource_name("api-gateway-id"),
            rest_api_name=self.build_resource_name("order-api"),
            description="API Gateway for Order Processing System",
            default_cors_preflight_options=apigateway.CorsOptions(
                allow_origins=apigateway.Cors.ALL_ORIGINS,
                allow_methods=apigateway.Cors.ALL_METHODS,
                allow_headers=API_ALLOWED_HEADERS,
            ),
        )

        integration = apigateway.LambdaIntegration(
            self.api_function,
            request_templates={"application/json": '{ "statusCode": "200" }'},
        )
        self.orders_resource = self.rest_api.root.add_resource(ORDERS_RESOURCE_PATH)
        for method in api_handler.ALLOWED_METHODS:
            self.orders_resource.add_method(method, integration)
