#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import json
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Type, TypeVar

from constructs import Construct

from orderinfra.constants import CONTEXT_KEY_PREFIX
from orderinfra.exceptions import ConfigurationError

S = TypeVar("S", bound="OrderInfraSettings")


@dataclass(frozen=True)
class OrderInfraSettings:
    """
    Tunables of the order processing system. Defaults reproduce the
    reference deployment; any field can be overridden at synth time through
    the CDK context, e.g.

        cdk synth -c orderinfra:max_azs=2 -c 'orderinfra:name_prefix="demo"'

    Context values are json-encoded so that lists and numbers survive the
    trip through the command line.
    """

    _context_key_prefix: ClassVar[str] = CONTEXT_KEY_PREFIX

    name_prefix: str = "practice"
    environment_name: str = "dev"
    vpc_cidr: str = "10.0.0.0/16"
    max_azs: int = 3
    subnet_cidr_mask: int = 24
    lambda_timeout_seconds: int = 30
    state_machine_timeout_minutes: int = 5
    waf_rate_limit: int = 2000
    waf_blocked_countries: list[str] = field(default_factory=lambda: ["CN", "RU"])

    def __post_init__(self) -> None:
        for name in ("name_prefix", "environment_name", "vpc_cidr"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"{name} must be a non-empty string")

        for name in (
            "max_azs",
            "subnet_cidr_mask",
            "lambda_timeout_seconds",
            "state_machine_timeout_minutes",
            "waf_rate_limit",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(
                    f"{name} must be an integer, got {value!r}"
                )
            if value <= 0:
                raise ConfigurationError(f"{name} must be a positive number")

        countries = self.waf_blocked_countries
        # a single bare country code, e.g. -c orderinfra:waf_blocked_countries=CN
        if isinstance(countries, str):
            countries = [countries]
        if not isinstance(countries, list) or not all(
            isinstance(code, str) and code for code in countries
        ):
            raise ConfigurationError(
                f"waf_blocked_countries must be a list of country codes, got {countries!r}"
            )
        object.__setattr__(self, "waf_blocked_countries", list(countries))

    def resource_name(self, name: str) -> str:
        return f"{self.name_prefix}-{name}"

    @classmethod
    def context_key(cls, name: str) -> str:
        return f"{cls._context_key_prefix}:{name}"

    def to_context(self) -> dict[str, str]:
        """
        Map every setting to its context key and json-dumped value.
        """
        return {
            self.context_key(f.name): json.dumps(getattr(self, f.name))
            for f in fields(self)
        }

    @classmethod
    def from_context(cls: Type[S], scope: Construct, **defaults: Any) -> S:
        """
        Instantiate settings from the scope's context. Keyword arguments act
        as defaults that the context may still override.
        """
        params = dict(defaults)

        for f in fields(cls):
            value = scope.node.try_get_context(cls.context_key(f.name))
            if value is None or value == "":
                continue
            if isinstance(value, str):
                try:
                    decoded = json.loads(value)
                except json.JSONDecodeError:
                    # bare strings such as -c orderinfra:name_prefix=demo
                    decoded = value
                if f.type is str and not isinstance(decoded, str):
                    # -c orderinfra:environment_name=2024 stays a string
                    decoded = value
                value = decoded
            params[f.name] = value

        return cls(**params)
