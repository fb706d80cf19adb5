# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

from typing import Any, Optional

import aws_cdk as cdk
import cdk_nag
from constructs import Construct

import constants
from cdk_app.core import Core
from cdk_app.ecs_app import EcsApp
from cdk_app.lambda_app import LambdaApp


class ImportTestStack(cdk.Stack):
    # pylint: disable=R0913
    def __init__(
        self,
        scope: Construct,
        id_: str,
        include_core: bool = True,
        include_ecs: bool = True,
        **kwargs: Any,
    ) -> None:
        if include_ecs and not include_core:
            raise ValueError(
                "The ECS application needs the core network and load balancer, "
                f"set '{constants.ImportTest.INCLUDE_CORE_CONTEXT_KEY}' "
                f"or disable '{constants.ImportTest.INCLUDE_ECS_CONTEXT_KEY}'"
            )

        super().__init__(scope, id_, **kwargs)

        self._core: Optional[Core] = None
        self._ecs_app: Optional[EcsApp] = None
        self._url: Optional[cdk.CfnOutput] = None

        if include_core:
            self._core = Core(self, constants.ImportTest.CORE_ID)

        self._lambda_app = LambdaApp(
            self,
            constants.ImportTest.LAMBDA_APP_ID,
            alb=self._core.alb if self._core else None,
        )

        if include_ecs and self._core is not None:
            self._ecs_app = EcsApp(
                self,
                constants.ImportTest.ECS_APP_ID,
                vpc=self._core.vpc,
                alb=self._core.alb,
            )

        if self._core is not None:
            self._url = cdk.CfnOutput(
                self,
                constants.ImportTest.URL_OUTPUT_ID,
                value=self._core.alb.load_balancer_dns_name,
            )
        else:
            cdk.Annotations.of(self).add_info(
                "No load balancer declared: the function is deployed without "
                f"a listener and the '{constants.ImportTest.URL_OUTPUT_ID}' "
                "output is omitted"
            )

        cdk.Aspects.of(self).add(cdk_nag.AwsSolutionsChecks())
        self._add_cdk_nag_suppressions()

    @property
    def core(self) -> Optional[Core]:
        return self._core

    @property
    def lambda_app(self) -> LambdaApp:
        return self._lambda_app

    @property
    def ecs_app(self) -> Optional[EcsApp]:
        return self._ecs_app

    @property
    def url(self) -> Optional[cdk.CfnOutput]:
        return self._url

    def _add_cdk_nag_suppressions(self) -> None:
        # --- Core ---
        if self._core is not None:
            vpc_flow_logs_suppression = cdk_nag.NagPackSuppression(
                id="AwsSolutions-VPC7",
                reason="Short-lived test deployment, VPC flow logs are not needed",
            )
            cdk_nag.NagSuppressions.add_resource_suppressions(
                self._core.vpc, [vpc_flow_logs_suppression]
            )

            elb_access_logs_suppression = cdk_nag.NagPackSuppression(
                id="AwsSolutions-ELB2",
                reason="Short-lived test deployment, ELB access logs are not needed",
            )
            elb_security_group_suppression = cdk_nag.NagPackSuppression(
                id="AwsSolutions-EC23",
                reason="Both listeners are reachable from 0.0.0.0/0 so the test can call them",
            )
            # `apply_to_children=True` because the listeners own the ingress rules
            cdk_nag.NagSuppressions.add_resource_suppressions(
                self._core.alb,
                [elb_access_logs_suppression, elb_security_group_suppression],
                apply_to_children=True,
            )

        # --- Lambda function role ---
        aws_managed_policy_suppression = cdk_nag.NagPackSuppression(
            id="AwsSolutions-IAM4",
            reason="The function role uses the AWS managed basic execution policy",
        )
        lambda_runtime_suppression = cdk_nag.NagPackSuppression(
            id="AwsSolutions-L1",
            reason="The function runtime is pinned so deployments stay reproducible",
        )
        cdk_nag.NagSuppressions.add_resource_suppressions(
            self._lambda_app,
            [aws_managed_policy_suppression, lambda_runtime_suppression],
            apply_to_children=True,
        )

        # --- ECS task execution role ---
        if self._ecs_app is not None:
            wildcard_permissions_suppression = cdk_nag.NagPackSuppression(
                id="AwsSolutions-IAM5",
                reason="ecr:GetAuthorizationToken generated by CDK requires a wildcard resource",
            )
            cdk_nag.NagSuppressions.add_resource_suppressions(
                self._ecs_app,
                [wildcard_permissions_suppression],
                apply_to_children=True,
            )
