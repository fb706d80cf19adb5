# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

from typing import Optional

import aws_cdk.aws_elasticloadbalancingv2 as elbv2
import aws_cdk.aws_elasticloadbalancingv2_targets as elbv2_targets
import aws_cdk.aws_lambda as lambda_
from constructs import Construct

import constants


class LambdaApp(Construct):
    def __init__(
        self,
        scope: Construct,
        id_: str,
        alb: Optional[elbv2.IApplicationLoadBalancer] = None,
    ) -> None:
        super().__init__(scope, id_)

        self._handler = self._create_function()

        # Without a load balancer only the function itself is deployed
        self._listener: Optional[elbv2.ApplicationListener] = None
        if alb is not None:
            self._listener = self._add_load_balancer_target(alb, self._handler)

    def _create_function(self) -> lambda_.Function:
        handler = lambda_.Function(
            self,
            "handler",
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler=constants.LambdaFunction.HANDLER,
            code=lambda_.Code.from_asset(constants.LambdaFunction.DIRECTORY),
        )
        return handler

    @staticmethod
    def _add_load_balancer_target(
        alb: elbv2.IApplicationLoadBalancer,
        handler: lambda_.IFunction,
    ) -> elbv2.ApplicationListener:
        listener = alb.add_listener(
            "lambda-listener",
            open=True,
            port=constants.LambdaFunction.LISTENER_PORT,
        )
        listener.add_targets(
            "lambda-target",
            targets=[elbv2_targets.LambdaTarget(handler)],
        )
        return listener

    @property
    def handler(self) -> lambda_.Function:
        return self._handler

    @property
    def listener(self) -> Optional[elbv2.ApplicationListener]:
        return self._listener
