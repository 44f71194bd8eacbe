#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from typing import List, Optional

import aws_cdk as cdk
import constructs
from aws_cdk import aws_apigateway as apigateway
from aws_cdk import aws_wafv2 as wafv2

from orderinfra.infrastructure.constants import (
    WAF_LOG_GROUP_NAME_PREFIX,
    WAF_LOG_RETENTION,
)
from orderinfra.infrastructure.constructs.base import OrderInfraBaseConstruct
from orderinfra.infrastructure.settings import OrderInfraSettings

WAF_SCOPE_REGIONAL = "REGIONAL"
AWS_MANAGED_RULES_VENDOR = "AWS"


class OrderFirewall(OrderInfraBaseConstruct):
    """
    Regional WAFv2 WebACL in front of the REST API deployment stage, with
    rate limiting, AWS managed rule groups, geo blocking and SQLi/XSS
    inspection of request bodies. Requests are logged to a dedicated log
    group whose name carries the mandatory ``aws-waf-logs-`` prefix.
    """

    def __init__(
        self,
        scope: constructs.Construct,
        construct_id: str,
        settings: OrderInfraSettings,
        rest_api: apigateway.RestApi,
    ) -> None:
        super().__init__(scope, construct_id, settings)

        self.web_acl_name = self.build_resource_name("order-api-waf")
        self.log_group = self.create_log_group(
            self.build_resource_name("waf-log-group"),
            log_group_name=f"{WAF_LOG_GROUP_NAME_PREFIX}{self.build_resource_name('order-api')}",
            retention=WAF_LOG_RETENTION,
        )

        self.web_acl = wafv2.CfnWebACL(
            self,
            self.build_resource_name("waf-webacl-id"),
            name=self.web_acl_name,
            scope=WAF_SCOPE_REGIONAL,
            default_action=wafv2.CfnWebACL.DefaultActionProperty(
                allow=wafv2.CfnWebACL.AllowActionProperty()
            ),
            description="WAF WebACL for Order Processing API with comprehensive security rules",
            rules=self.build_rules(),
            visibility_config=self.visibility_config(self.web_acl_name),
        )

        wafv2.CfnWebACLAssociation(
            self,
            self.build_resource_name("waf-association-id"),
            resource_arn=rest_api.deployment_stage.stage_arn,
            web_acl_arn=self.web_acl.attr_arn,
        )

        logging_configuration = wafv2.CfnLoggingConfiguration(
            self,
            "aws-waf-logs-id",
            resource_arn=self.web_acl.attr_arn,
            log_destination_configs=[
                f"arn:{cdk.Aws.PARTITION}:logs:{cdk.Aws.REGION}:{cdk.Aws.ACCOUNT_ID}:log-group:{self.log_group.log_group_name}"
            ],
        )
        # the destination is referenced by name only
        logging_configuration.node.add_dependency(self.log_group)

    @staticmethod
    def visibility_config(
        metric_name: str,
    ) -> wafv2.CfnWebACL.VisibilityConfigProperty:
        return wafv2.CfnWebACL.VisibilityConfigProperty(
            sampled_requests_enabled=True,
            cloud_watch_metrics_enabled=True,
            metric_name=metric_name,
        )

    @staticmethod
    def body_transformations() -> List[wafv2.CfnWebACL.TextTransformationProperty]:
        return [
            wafv2.CfnWebACL.TextTransformationProperty(priority=0, type="URL_DECODE"),
            wafv2.CfnWebACL.TextTransformationProperty(
                priority=1, type="HTML_ENTITY_DECODE"
            ),
        ]

    def block_rule(
        self,
        name: str,
        priority: int,
        statement: wafv2.CfnWebACL.StatementProperty,
        metric_name: str,
    ) -> wafv2.CfnWebACL.RuleProperty:
        return wafv2.CfnWebACL.RuleProperty(
            name=name,
            priority=priority,
            action=wafv2.CfnWebACL.RuleActionProperty(
                block=wafv2.CfnWebACL.BlockActionProperty()
            ),
            statement=statement,
            visibility_config=self.visibility_config(metric_name),
        )

    def managed_rule(
        self,
        name: str,
        priority: int,
        metric_name: str,
        excluded_rules: Optional[List[str]] = None,
    ) -> wafv2.CfnWebACL.RuleProperty:
        return wafv2.CfnWebACL.RuleProperty(
            name=name,
            priority=priority,
            override_action=wafv2.CfnWebACL.OverrideActionProperty(none={}),
            statement=wafv2.CfnWebACL.StatementProperty(
                managed_rule_group_statement=wafv2.CfnWebACL.ManagedRuleGroupStatementProperty(
                    vendor_name=AWS_MANAGED_RULES_VENDOR,
                    name=name,
                    excluded_rules=(
                        [
                            wafv2.CfnWebACL.ExcludedRuleProperty(name=rule)
                            for rule in excluded_rules
                        ]
                        if excluded_rules
                        else None
                    ),
                )
            ),
            visibility_config=self.visibility_config(metric_name),
        )

    def build_rules(self) -> List[wafv2.CfnWebACL.RuleProperty]:
        body = wafv2.CfnWebACL.FieldToMatchProperty(
            body=wafv2.CfnWebACL.BodyProperty()
        )

        return [
            # limit is evaluated per IP over a 5 minute window
            self.block_rule(
                "RateLimitRule",
                1,
                wafv2.CfnWebACL.StatementProperty(
                    rate_based_statement=wafv2.CfnWebACL.RateBasedStatementProperty(
                        limit=self.settings.waf_rate_limit,
                        aggregate_key_type="IP",
                    )
                ),
                "RateLimitRule",
            ),
            self.managed_rule(
                "AWSManagedRulesCommonRuleSet",
                2,
                "CommonRuleSetMetric",
                excluded_rules=["SizeRestrictions_BODY", "GenericRFI_BODY"],
            ),
            self.managed_rule(
                "AWSManagedRulesKnownBadInputsRuleSet", 3, "KnownBadInputsMetric"
            ),
            self.managed_rule(
                "AWSManagedRulesAmazonIpReputationList", 4, "IpReputationMetric"
            ),
            self.block_rule(
                "GeographicRestriction",
                5,
                wafv2.CfnWebACL.StatementProperty(
                    geo_match_statement=wafv2.CfnWebACL.GeoMatchStatementProperty(
                        country_codes=self.settings.waf_blocked_countries
                    )
                ),
                "GeographicRestrictionMetric",
            ),
            self.block_rule(
                "SQLiRule",
                6,
                wafv2.CfnWebACL.StatementProperty(
                    sqli_match_statement=wafv2.CfnWebACL.SqliMatchStatementProperty(
                        field_to_match=body,
                        text_transformations=self.body_transformations(),
                    )
                ),
                "SQLiRuleMetric",
            ),
            self.block_rule(
                "XSSRule",
                7,
                wafv2.CfnWebACL.StatementProperty(
                    xss_match_statement=wafv2.CfnWebACL.XssMatchStatementProperty(
                        field_to_match=body,
                        text_transformations=self.body_transformations(),
                    )
                ),
                "XSSRuleMetric",
            ),
        ]
