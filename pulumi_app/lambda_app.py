# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import json
from typing import Optional

import pulumi
import pulumi_aws as aws

import constants
from pulumi_app.core import Core

LAMBDA_ASSUME_ROLE_POLICY = json.dumps(
    {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Service": "lambda.amazonaws.com"},
                "Action": "sts:AssumeRole",
            }
        ],
    }
)


class LambdaApp(pulumi.ComponentResource):
    def __init__(
        self,
        name: str,
        core: Optional[Core] = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ) -> None:
        super().__init__("import-test:index:LambdaApp", name, None, opts)
        child_opts = pulumi.ResourceOptions(parent=self)

        role = aws.iam.Role(
            f"{name}-role",
            assume_role_policy=LAMBDA_ASSUME_ROLE_POLICY,
            opts=child_opts,
        )
        aws.iam.RolePolicyAttachment(
            f"{name}-basic-execution",
            role=role.name,
            policy_arn=f"arn:aws:iam::aws:policy/{constants.LambdaFunction.BASIC_EXECUTION_POLICY}",
            opts=child_opts,
        )

        self.handler = aws.lambda_.Function(
            f"{name}-handler",
            runtime=constants.LambdaFunction.PULUMI_RUNTIME,
            handler=constants.LambdaFunction.HANDLER,
            role=role.arn,
            code=pulumi.FileArchive(constants.LambdaFunction.DIRECTORY),
            opts=child_opts,
        )

        # Without a load balancer only the function itself is deployed
        self.listener: Optional[aws.lb.Listener] = None
        if core is not None:
            self.listener = self._add_load_balancer_target(name, core)

        self.register_outputs({"functionArn": self.handler.arn})

    def _add_load_balancer_target(self, name: str, core: Core) -> aws.lb.Listener:
        child_opts = pulumi.ResourceOptions(parent=self)

        target_group = aws.lb.TargetGroup(
            f"{name}-target",
            target_type="lambda",
            opts=child_opts,
        )
        permission = aws.lambda_.Permission(
            f"{name}-alb-invoke",
            action="lambda:InvokeFunction",
            function=self.handler.name,
            principal="elasticloadbalancing.amazonaws.com",
            source_arn=target_group.arn,
            opts=child_opts,
        )
        aws.lb.TargetGroupAttachment(
            f"{name}-target-attachment",
            target_group_arn=target_group.arn,
            target_id=self.handler.arn,
            opts=pulumi.ResourceOptions(parent=self, depends_on=[permission]),
        )

        core.open_port(
            constants.LambdaFunction.LISTENER_PORT,
            opts=child_opts,
        )
        listener = aws.lb.Listener(
            f"{name}-listener",
            load_balancer_arn=core.alb.arn,
            port=constants.LambdaFunction.LISTENER_PORT,
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="forward",
                    target_group_arn=target_group.arn,
                )
            ],
            opts=child_opts,
        )
        return listener
