#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
import os
import pathlib
from dataclasses import dataclass
from typing import Optional

import aws_cdk
from dotenv import load_dotenv

from orderinfra.constants import (
    ACCOUNT_ID_VARIABLE,
    DEFAULT_ENV_FILE,
    ENV_FILE_VARIABLE,
    ENV_NAME_VARIABLE,
    REGION_VARIABLE,
    STACK_ID_PREFIX,
)
from orderinfra.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = (ENV_NAME_VARIABLE, ACCOUNT_ID_VARIABLE, REGION_VARIABLE)


@dataclass(frozen=True)
class DeploymentEnvironment:
    """
    Target of a deployment: the environment name used to suffix the stack id
    and the account/region pair the stack is pinned to.
    """

    env_name: str
    account: str
    region: str

    @property
    def stack_id(self) -> str:
        return f"{STACK_ID_PREFIX}-{self.env_name}"

    def to_cdk_environment(self) -> aws_cdk.Environment:
        return aws_cdk.Environment(account=self.account, region=self.region)


def resolve_env_file(env_file: Optional[str] = None) -> pathlib.Path:
    """
    Locate the dotenv file for a deployment. The file name comes from the
    argument, then the ENV variable, then falls back to .env.dev. Relative
    names are resolved against the working directory, which is the project
    root when the app runs through cdk.
    """
    if not env_file:
        env_file = os.environ.get(ENV_FILE_VARIABLE) or DEFAULT_ENV_FILE
    path = pathlib.Path(env_file)
    if not path.is_absolute():
        path = pathlib.Path.cwd() / path
    return path


def load_deployment_environment(
    env_file: Optional[str] = None,
) -> DeploymentEnvironment:
    path = resolve_env_file(env_file)
    # variables already present in the process environment take precedence
    if load_dotenv(path, override=False):
        logger.info(f"Loaded deployment environment from {path}")
    else:
        logger.info(f"No environment file at {path}, using process environment")

    values = {key: os.environ.get(key, "") for key in REQUIRED_VARIABLES}
    missing = [key for key, value in values.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Missing environment variables: {', '.join(missing)}"
        )

    return DeploymentEnvironment(
        env_name=values[ENV_NAME_VARIABLE],
        account=values[ACCOUNT_ID_VARIABLE],
        region=values[REGION_VARIABLE],
    )
