#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import aws_cdk as cdk
import constructs
from aws_cdk import aws_s3 as s3

from orderinfra.infrastructure.constructs.base import OrderInfraBaseConstruct
from orderinfra.infrastructure.settings import OrderInfraSettings


class OrderStorage(OrderInfraBaseConstruct):
    def __init__(
        self,
        scope: constructs.Construct,
        construct_id: str,
        settings: OrderInfraSettings,
    ) -> None:
        super().__init__(scope, construct_id, settings)

        # processed orders are written under orders/<orderId>.json
        self.bucket = s3.Bucket(
            self,
            self.build_resource_name("s3-bucket-id"),
            versioned=True,
            removal_policy=cdk.RemovalPolicy.DESTROY,
            auto_delete_objects=True,
        )
