#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from typing import Optional

import aws_cdk as cdk

from orderinfra.config import DeploymentEnvironment, load_deployment_environment
from orderinfra.infrastructure.settings import OrderInfraSettings
from orderinfra.infrastructure.stacks.order_infra_stack import OrderInfraStack

logger = logging.getLogger(__name__)


def build_app(
    deployment: DeploymentEnvironment, app: Optional[cdk.App] = None
) -> cdk.App:
    if app is None:
        app = cdk.App()

    settings = OrderInfraSettings.from_context(
        app, environment_name=deployment.env_name
    )
    logger.info(
        f"Synthesizing {deployment.stack_id} for {deployment.account}/{deployment.region}"
    )
    OrderInfraStack(
        app,
        deployment.stack_id,
        settings=settings,
        env=deployment.to_cdk_environment(),
    )
    return app


def main() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s"
    )
    app = build_app(load_deployment_environment())
    app.synth()


if __name__ == "__main__":
    main()
