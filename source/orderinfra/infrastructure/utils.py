#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import inspect
import pathlib
from typing import Any, Callable, Dict, TypedDict

from aws_cdk import aws_lambda


class LambdaCodeParams(TypedDict):
    handler: str
    code: aws_lambda.Code


class InfraUtils:
    @staticmethod
    def get_handler_and_code_for_function(
        function: Callable[[Dict[str, Any], Any], Any]
    ) -> LambdaCodeParams:
        """
        Package the folder holding ``function`` as the Lambda asset and point
        the handler at ``<module>.<function>`` inside it. Handler modules are
        therefore loaded as top level modules and must only import the
        standard library and boto3.
        """
        module = inspect.getmodule(function)
        if module is None or module.__file__ is None:
            raise ValueError("module not found")
        module_name = module.__name__.rsplit(".", 1)[-1]
        folder = str(pathlib.Path(module.__file__).parent)

        return LambdaCodeParams(
            handler=f"{module_name}.{function.__name__}",
            code=aws_lambda.Code.from_asset(
                folder, exclude=["__pycache__", "*.pyc"]
            ),
        )
