# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import aws_cdk.aws_ec2 as ec2
import aws_cdk.aws_elasticloadbalancingv2 as elbv2
from constructs import Construct

import constants


class Core(Construct):
    """Network and the load balancer shared by every application construct."""

    def __init__(self, scope: Construct, id_: str) -> None:
        super().__init__(scope, id_)

        self._vpc = self._create_vpc()
        self._alb = self._create_alb(self._vpc)

    def _create_vpc(self) -> ec2.Vpc:
        vpc = ec2.Vpc(
            self,
            "Vpc",
            nat_gateways=constants.Network.NAT_GATEWAYS,
        )
        return vpc

    def _create_alb(self, vpc: ec2.IVpc) -> elbv2.ApplicationLoadBalancer:
        alb = elbv2.ApplicationLoadBalancer(
            self,
            "Alb",
            vpc=vpc,
            internet_facing=True,
        )
        return alb

    @property
    def vpc(self) -> ec2.IVpc:
        return self._vpc

    @property
    def alb(self) -> elbv2.IApplicationLoadBalancer:
        return self._alb
