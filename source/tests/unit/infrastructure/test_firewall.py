#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from typing import Any, Dict, List

import pytest
from aws_cdk.assertions import Match, Template

from orderinfra.infrastructure.settings import OrderInfraSettings
from orderinfra.infrastructure.stacks.order_infra_stack import OrderInfraStack
from tests.unit.infrastructure import util
from tests.unit.infrastructure.conftest import StackFactory

BODY_TRANSFORMATIONS = [
    {"Priority": 0, "Type": "URL_DECODE"},
    {"Priority": 1, "Type": "HTML_ENTITY_DECODE"},
]


@pytest.fixture(scope="module")
def rules(template: Template) -> List[Dict[str, Any]]:
    web_acl = util.get_single_resource(template, "AWS::WAFv2::WebACL")
    return list(web_acl["Properties"]["Rules"])


def test_web_acl_creation(stack: OrderInfraStack, template: Template) -> None:
    template.resource_count_is("AWS::WAFv2::WebACL", 1)
    util.assert_resource_name_has_correct_type_and_props(
        stack,
        template,
        resources=["Firewall", "practice-waf-webacl-id"],
        cfn_type="AWS::WAFv2::WebACL",
        props={
            "Properties": {
                "Name": "practice-order-api-waf",
                "Scope": "REGIONAL",
                "DefaultAction": {"Allow": {}},
                "VisibilityConfig": {
                    "SampledRequestsEnabled": True,
                    "CloudWatchMetricsEnabled": True,
                    "MetricName": "practice-order-api-waf",
                },
            }
        },
    )


def test_rules_are_ordered_by_priority(rules: List[Dict[str, Any]]) -> None:
    assert [(rule["Name"], rule["Priority"]) for rule in rules] == [
        ("RateLimitRule", 1),
        ("AWSManagedRulesCommonRuleSet", 2),
        ("AWSManagedRulesKnownBadInputsRuleSet", 3),
        ("AWSManagedRulesAmazonIpReputationList", 4),
        ("GeographicRestriction", 5),
        ("SQLiRule", 6),
        ("XSSRule", 7),
    ]


def test_every_rule_publishes_metrics(rules: List[Dict[str, Any]]) -> None:
    for rule in rules:
        assert rule["VisibilityConfig"]["SampledRequestsEnabled"] is True
        assert rule["VisibilityConfig"]["CloudWatchMetricsEnabled"] is True
        assert rule["VisibilityConfig"]["MetricName"]


def test_rate_limit_rule(template: Template) -> None:
    template.has_resource_properties(
        "AWS::WAFv2::WebACL",
        {
            "Rules": Match.array_with(
                [
                    Match.object_like(
                        {
                            "Name": "RateLimitRule",
                            "Priority": 1,
                            "Action": {"Block": {}},
                            "Statement": {
                                "RateBasedStatement": {
                                    "Limit": 2000,
                                    "AggregateKeyType": "IP",
                                }
                            },
                        }
                    )
                ]
            )
        },
    )


def test_common_rule_set_excludes_body_rules(template: Template) -> None:
    template.has_resource_properties(
        "AWS::WAFv2::WebACL",
        {
            "Rules": Match.array_with(
                [
                    Match.object_like(
                        {
                            "Name": "AWSManagedRulesCommonRuleSet",
                            "OverrideAction": {"None": {}},
                            "Statement": {
                                "ManagedRuleGroupStatement": {
                                    "VendorName": "AWS",
                                    "Name": "AWSManagedRulesCommonRuleSet",
                                    "ExcludedRules": [
                                        {"Name": "SizeRestrictions_BODY"},
                                        {"Name": "GenericRFI_BODY"},
                                    ],
                                }
                            },
                        }
                    )
                ]
            )
        },
    )


@pytest.mark.parametrize(
    "name",
    ["AWSManagedRulesKnownBadInputsRuleSet", "AWSManagedRulesAmazonIpReputationList"],
)
def test_managed_rule_groups(rules: List[Dict[str, Any]], name: str) -> None:
    rule = next(rule for rule in rules if rule["Name"] == name)
    assert rule["OverrideAction"] == {"None": {}}
    assert rule["Statement"] == {
        "ManagedRuleGroupStatement": {"VendorName": "AWS", "Name": name}
    }


def test_geographic_restriction(rules: List[Dict[str, Any]]) -> None:
    rule = next(rule for rule in rules if rule["Name"] == "GeographicRestriction")
    assert rule["Action"] == {"Block": {}}
    assert rule["Statement"] == {"GeoMatchStatement": {"CountryCodes": ["CN", "RU"]}}


@pytest.mark.parametrize(
    "name,statement_key",
    [("SQLiRule", "SqliMatchStatement"), ("XSSRule", "XssMatchStatement")],
)
def test_body_inspection_rules(
    rules: List[Dict[str, Any]], name: str, statement_key: str
) -> None:
    rule = next(rule for rule in rules if rule["Name"] == name)
    assert rule["Action"] == {"Block": {}}
    assert rule["Statement"] == {
        statement_key: {
            "FieldToMatch": {"Body": {}},
            "TextTransformations": BODY_TRANSFORMATIONS,
        }
    }


def test_web_acl_is_associated_with_api_stage(
    stack: OrderInfraStack, template: Template
) -> None:
    template.has_resource_properties(
        "AWS::WAFv2::WebACLAssociation",
        {
            "WebACLArn": {
                "Fn::GetAtt": [
                    util.get_logical_id(stack, ["Firewall", "practice-waf-webacl-id"]),
                    "Arn",
                ]
            },
            "ResourceArn": Match.any_value(),
        },
    )


def test_waf_log_group(stack: OrderInfraStack, template: Template) -> None:
    util.assert_resource_name_has_correct_type_and_props(
        stack,
        template,
        resources=["Firewall", "practice-waf-log-group"],
        cfn_type="AWS::Logs::LogGroup",
        props={
            "Properties": {
                "LogGroupName": "aws-waf-logs-practice-order-api",
                "RetentionInDays": 30,
            }
        },
    )


def test_logging_configuration_waits_for_log_group(
    stack: OrderInfraStack, template: Template
) -> None:
    template.has_resource(
        "AWS::WAFv2::LoggingConfiguration",
        {
            "Properties": {
                "ResourceArn": {
                    "Fn::GetAtt": [
                        util.get_logical_id(
                            stack, ["Firewall", "practice-waf-webacl-id"]
                        ),
                        "Arn",
                    ]
                },
                "LogDestinationConfigs": Match.any_value(),
            },
            "DependsOn": Match.array_with(
                [util.get_logical_id(stack, ["Firewall", "practice-waf-log-group"])]
            ),
        },
    )


def test_waf_settings_are_applied(stack_factory: StackFactory) -> None:
    stack = stack_factory(
        OrderInfraSettings(waf_rate_limit=500, waf_blocked_countries=["KP"])
    )
    template = Template.from_stack(stack)

    template.has_resource_properties(
        "AWS::WAFv2::WebACL",
        {
            "Rules": Match.array_with(
                [
                    Match.object_like(
                        {"Statement": {"RateBasedStatement": Match.object_like({"Limit": 500})}}
                    ),
                    Match.object_like(
                        {"Statement": {"GeoMatchStatement": {"CountryCodes": ["KP"]}}}
                    ),
                ]
            )
        },
    )
