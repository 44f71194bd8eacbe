#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import aws_cdk as cdk
import constructs
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_stepfunctions as sfn
from aws_cdk import aws_stepfunctions_tasks as tasks

from orderinfra.infrastructure.constructs.base import OrderInfraBaseConstruct
from orderinfra.infrastructure.handlers import order_handlers
from orderinfra.infrastructure.settings import OrderInfraSettings

PAYLOAD_PATH = "$.Payload"
PARALLEL_INPUT_PATH = "$.inputForParallel"
PARALLEL_RESULTS_PATH = "$.parallelResults"
MERGED_RESULTS_PATH = "$.mergedResults"


class OrderWorkflow(OrderInfraBaseConstruct):
    """
    Lambda functions and the Step Functions state machine that process an
    order:

        process order -> prepare parallel input
          -> parallel(inventory check, payment) -> combine results
          -> merge results -> store in S3
    """

    def __init__(
        self,
        scope: constructs.Construct,
        construct_id: str,
        settings: OrderInfraSettings,
        bucket: s3.IBucket,
    ) -> None:
        super().__init__(scope, construct_id, settings)
        self.bucket = bucket

        self.order_processor_function = self.create_function(
            "order-processor",
            order_handlers.process_order,
            description="Processes incoming orders",
        )
        self.inventory_check_function = self.create_function(
            "inventory-check",
            order_handlers.check_inventory,
            description="Checks stock for the items of an order",
        )
        self.payment_process_function = self.create_function(
            "payment-process",
            order_handlers.process_payment,
            description="Charges the total amount of an order",
        )
        self.merge_results_function = self.create_function(
            "merge-results",
            order_handlers.merge_results,
            description="Merges order, inventory and payment results",
        )
        self.s3_storage_function = self.create_function(
            "s3-storage",
            order_handlers.store_order,
            description="Stores processed orders in S3",
            environment={
                order_handlers.EnvKeys.S3_BUCKET_NAME: bucket.bucket_name,
            },
        )

        for function in (
            self.order_processor_function,
            self.inventory_check_function,
            self.payment_process_function,
            self.merge_results_function,
            self.s3_storage_function,
        ):
            bucket.grant_read_write(function)

        self.state_machine_log_group = self.create_log_group(
            self.build_resource_name("stepfunctions-log-group")
        )
        self.state_machine = self.create_state_machine()

    def invoke(
        self, construct_id: str, function: lambda_.IFunction
    ) -> tasks.LambdaInvoke:
        return tasks.LambdaInvoke(
            self,
            self.build_resource_name(construct_id),
            lambda_function=function,
            output_path=PAYLOAD_PATH,
        )

    def create_parallel_processing(self) -> sfn.Parallel:
        parallel = sfn.Parallel(
            self,
            self.build_resource_name("parallel-processing"),
            comment="Process inventory check and payment in parallel",
            result_path=PARALLEL_RESULTS_PATH,
        )
        # branch order determines the index of each result in $.parallelResults
        parallel.branch(
            sfn.Pass(
                self, "extract-input-for-inventory", input_path=PARALLEL_INPUT_PATH
            ).next(
                self.invoke("inventory-check-task", self.inventory_check_function)
            )
        )
        parallel.branch(
            sfn.Pass(
                self, "extract-input-for-payment", input_path=PARALLEL_INPUT_PATH
            ).next(
                self.invoke("payment-process-task", self.payment_process_function)
            )
        )
        return parallel

    def create_definition(self) -> sfn.IChainable:
        merge_results_task = tasks.LambdaInvoke(
            self,
            self.build_resource_name("merge-results-task"),
            lambda_function=self.merge_results_function,
            input_path="$",
            result_path=MERGED_RESULTS_PATH,
            output_path=f"{MERGED_RESULTS_PATH}.Payload",
        )

        return (
            self.invoke("process-order-task", self.order_processor_function)
            .next(
                sfn.Pass(
                    self,
                    "prepare-parallel-input",
                    parameters={
                        "orderProcessing.$": "$",
                        "inputForParallel.$": "$",
                    },
                )
            )
            .next(self.create_parallel_processing())
            .next(
                sfn.Pass(
                    self,
                    "combine-results",
                    parameters={
                        "orderProcessing.$": "$.orderProcessing",
                        "parallelResults.$": PARALLEL_RESULTS_PATH,
                    },
                )
            )
            .next(merge_results_task)
            .next(self.invoke("store-order-s3-task", self.s3_storage_function))
        )

    def create_state_machine(self) -> sfn.StateMachine:
        return sfn.StateMachine(
            self,
            self.build_resource_name("order-state-machine-id"),
            state_machine_name=self.build_resource_name("order-workflow"),
            definition_body=sfn.DefinitionBody.from_chainable(
                self.create_definition()
            ),
            timeout=cdk.Duration.minutes(self.settings.state_machine_timeout_minutes),
            logs=sfn.LogOptions(
                destination=self.state_machine_log_group,
                level=sfn.LogLevel.ALL,
            ),
        )
