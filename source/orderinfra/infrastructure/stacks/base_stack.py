#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from typing import Any

from aws_cdk import Stack
from constructs import Construct


class OrderInfraBaseStack(Stack):
    """
    Deployable unit named by ``construct_id``. It declares no resources of its
    own: ``scope``, ``construct_id`` and every stack property (``env``,
    ``description``, ``synthesizer``, ``tags``, ...) are handed to
    :class:`aws_cdk.Stack` unchanged. Resources are declared by subclasses.
    """

    def __init__(self, scope: Construct, construct_id: str, **kwargs: Any) -> None:
        super().__init__(scope, construct_id, **kwargs)
