# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

from typing import List, Optional

import pulumi
import pulumi_aws as aws
import pulumi_awsx as awsx

import constants


class Core(pulumi.ComponentResource):
    """Network and the load balancer shared by every application component."""

    def __init__(
        self, name: str, opts: Optional[pulumi.ResourceOptions] = None
    ) -> None:
        super().__init__("import-test:index:Core", name, None, opts)
        self._name = name
        child_opts = pulumi.ResourceOptions(parent=self)
        self.ingress_rules: List[aws.ec2.SecurityGroupRule] = []

        self.vpc = awsx.ec2.Vpc(
            f"{name}-vpc",
            nat_gateways=awsx.ec2.NatGatewayConfigurationArgs(
                strategy=awsx.ec2.NatGatewayStrategy.SINGLE,
            ),
            opts=child_opts,
        )

        self.alb_security_group = aws.ec2.SecurityGroup(
            f"{name}-alb-sg",
            description="Load balancer security group",
            vpc_id=self.vpc.vpc_id,
            egress=[
                aws.ec2.SecurityGroupEgressArgs(
                    protocol="-1",
                    from_port=0,
                    to_port=0,
                    cidr_blocks=[constants.Network.ANY_IPV4],
                )
            ],
            opts=child_opts,
        )

        self.alb = aws.lb.LoadBalancer(
            f"{name}-alb",
            load_balancer_type="application",
            internal=False,
            subnets=self.vpc.public_subnet_ids,
            security_groups=[self.alb_security_group.id],
            opts=child_opts,
        )

        self.register_outputs(
            {
                "vpcId": self.vpc.vpc_id,
                "dnsName": self.alb.dns_name,
            }
        )

    def open_port(
        self, port: int, opts: Optional[pulumi.ResourceOptions] = None
    ) -> aws.ec2.SecurityGroupRule:
        """Allow inbound traffic from anywhere to a listener port."""
        rule = aws.ec2.SecurityGroupRule(
            f"{self._name}-alb-ingress-{port}",
            type="ingress",
            protocol="tcp",
            from_port=port,
            to_port=port,
            cidr_blocks=[constants.Network.ANY_IPV4],
            security_group_id=self.alb_security_group.id,
            opts=opts or pulumi.ResourceOptions(parent=self),
        )
        self.ingress_rules.append(rule)
        return rule
