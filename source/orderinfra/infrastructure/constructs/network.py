#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import constructs
from aws_cdk import aws_ec2 as ec2

from orderinfra.infrastructure.constructs.base import OrderInfraBaseConstruct
from orderinfra.infrastructure.settings import OrderInfraSettings


class OrderNetwork(OrderInfraBaseConstruct):
    """
    VPC with one public and one private-with-egress subnet per availability
    zone, and a t3.micro host in the public subnets.
    """

    def __init__(
        self,
        scope: constructs.Construct,
        construct_id: str,
        settings: OrderInfraSettings,
    ) -> None:
        super().__init__(scope, construct_id, settings)

        self.vpc = self.create_vpc()
        self.security_group = ec2.SecurityGroup(
            self,
            self.build_resource_name("security-group-id"),
            vpc=self.vpc,
            allow_all_outbound=True,
        )
        self.instance = self.create_instance()

    def create_vpc(self) -> ec2.Vpc:
        return ec2.Vpc(
            self,
            self.build_resource_name("vpc-id"),
            ip_addresses=ec2.IpAddresses.cidr(self.settings.vpc_cidr),
            max_azs=self.settings.max_azs,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name=self.build_resource_name("public-subnet"),
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=self.settings.subnet_cidr_mask,
                ),
                ec2.SubnetConfiguration(
                    name=self.build_resource_name("private-subnet"),
                    subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS,
                    cidr_mask=self.settings.subnet_cidr_mask,
                ),
            ],
        )

    def create_instance(self) -> ec2.Instance:
        return ec2.Instance(
            self,
            self.build_resource_name("ec2-id"),
            instance_type=ec2.InstanceType.of(
                ec2.InstanceClass.T3, ec2.InstanceSize.MICRO
            ),
            machine_image=ec2.MachineImage.latest_amazon_linux2023(),
            vpc=self.vpc,
            vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PUBLIC),
            security_group=self.security_group,
        )
