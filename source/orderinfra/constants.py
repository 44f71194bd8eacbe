#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0

# declare constants
STACK_ID_PREFIX = "OrderInfraStack"
DEFAULT_ENV_FILE = ".env.dev"
ENV_FILE_VARIABLE = "ENV"

ENV_NAME_VARIABLE = "ENV_NAME"
ACCOUNT_ID_VARIABLE = "ACCOUNT_ID"
REGION_VARIABLE = "REGION"

TAG_ENVIRONMENT_NAME = "orderinfra:EnvironmentName"
TAG_COMPONENT = "orderinfra:Component"

CONTEXT_KEY_PREFIX = "orderinfra"
