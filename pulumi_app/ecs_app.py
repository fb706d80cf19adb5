# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import json
from typing import Optional

import pulumi
import pulumi_aws as aws
import pulumi_awsx as awsx

import constants
from pulumi_app.core import Core

ECS_TASKS_ASSUME_ROLE_POLICY = json.dumps(
    {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Service": "ecs-tasks.amazonaws.com"},
                "Action": "sts:AssumeRole",
            }
        ],
    }
)


class EcsApp(pulumi.ComponentResource):
    def __init__(
        self,
        name: str,
        core: Core,
        opts: Optional[pulumi.ResourceOptions] = None,
    ) -> None:
        super().__init__("import-test:index:EcsApp", name, None, opts)
        self._name = name
        container_parameters = constants.Container.PARAMETERS

        # --- ECS Cluster ---
        self.cluster = aws.ecs.Cluster(
            f"{name}-cluster",
            settings=[
                aws.ecs.ClusterSettingArgs(name="containerInsights", value="enabled")
            ],
            opts=self._child_opts(),
        )

        # --- ECS Task Definition ---
        image = self._build_container_image(container_parameters)
        self.task_definition = self._create_task_definition(
            container_parameters, image
        )

        # --- Load Balancer ---
        self.target_group = self._create_target_group(
            core, constants.Container.HEALTH_CHECK_PARAMETERS
        )
        core.open_port(constants.Container.LISTENER_PORT, opts=self._child_opts())
        self.listener = aws.lb.Listener(
            f"{name}-listener",
            load_balancer_arn=core.alb.arn,
            port=constants.Container.LISTENER_PORT,
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="forward",
                    target_group_arn=self.target_group.arn,
                )
            ],
            opts=self._child_opts(),
        )

        # --- ECS Service ---
        self.service = self._create_fargate_service(core, container_parameters)

        self.register_outputs({"serviceName": self.service.name})

    def _child_opts(self, **kwargs) -> pulumi.ResourceOptions:
        return pulumi.ResourceOptions(parent=self, **kwargs)

    def _build_container_image(
        self, container_parameters: constants.ContainerParameters
    ) -> awsx.ecr.Image:
        repository = aws.ecr.Repository(
            f"{self._name}-{container_parameters.asset_name}",
            force_delete=True,
            opts=self._child_opts(),
        )
        image = awsx.ecr.Image(
            f"{self._name}-image",
            repository_url=repository.repository_url,
            context=container_parameters.directory,
            platform=constants.Container.PLATFORM,
            opts=self._child_opts(),
        )
        return image

    def _create_task_definition(
        self,
        container_parameters: constants.ContainerParameters,
        image: awsx.ecr.Image,
    ) -> aws.ecs.TaskDefinition:
        execution_role = aws.iam.Role(
            f"{self._name}-execution-role",
            assume_role_policy=ECS_TASKS_ASSUME_ROLE_POLICY,
            opts=self._child_opts(),
        )
        aws.iam.RolePolicyAttachment(
            f"{self._name}-execution-policy",
            role=execution_role.name,
            policy_arn=f"arn:aws:iam::aws:policy/{constants.Container.EXECUTION_POLICY}",
            opts=self._child_opts(),
        )
        log_group = aws.cloudwatch.LogGroup(
            f"{self._name}-logs",
            retention_in_days=constants.Container.LOG_RETENTION_DAYS,
            opts=self._child_opts(),
        )

        container_definitions = pulumi.Output.json_dumps(
            [
                {
                    "name": container_parameters.name,
                    "image": image.image_uri,
                    "essential": True,
                    "portMappings": [
                        {
                            "containerPort": container_parameters.port,
                            "protocol": "tcp",
                        }
                    ],
                    "logConfiguration": {
                        "logDriver": "awslogs",
                        "options": {
                            "awslogs-group": log_group.name,
                            "awslogs-region": aws.get_region_output().name,
                            "awslogs-stream-prefix": constants.Container.LOG_STREAM_PREFIX,
                        },
                    },
                }
            ]
        )

        task_definition = aws.ecs.TaskDefinition(
            f"{self._name}-task",
            family=f"{self._name}-task",
            cpu=str(container_parameters.cpu),
            memory=str(container_parameters.memory),
            network_mode="awsvpc",
            requires_compatibilities=["FARGATE"],
            execution_role_arn=execution_role.arn,
            container_definitions=container_definitions,
            opts=self._child_opts(),
        )
        return task_definition

    def _create_target_group(
        self, core: Core, health_check_parameters: constants.HealthCheckParameters
    ) -> aws.lb.TargetGroup:
        target_group = aws.lb.TargetGroup(
            f"{self._name}-target",
            port=constants.Container.LISTENER_PORT,
            protocol="HTTP",
            target_type="ip",
            vpc_id=core.vpc.vpc_id,
            health_check=aws.lb.TargetGroupHealthCheckArgs(
                path=constants.Container.HEALTH_CHECK_PATH,
                interval=health_check_parameters.interval_seconds,
                timeout=health_check_parameters.timeout_seconds,
                healthy_threshold=health_check_parameters.healthy_threshold_count,
            ),
            opts=self._child_opts(),
        )
        return target_group

    def _create_fargate_service(
        self, core: Core, container_parameters: constants.ContainerParameters
    ) -> aws.ecs.Service:
        service_security_group = aws.ec2.SecurityGroup(
            f"{self._name}-service-sg",
            description="Fargate service security group",
            vpc_id=core.vpc.vpc_id,
            ingress=[
                aws.ec2.SecurityGroupIngressArgs(
                    protocol="tcp",
                    from_port=container_parameters.port,
                    to_port=container_parameters.port,
                    security_groups=[core.alb_security_group.id],
                )
            ],
            egress=[
                aws.ec2.SecurityGroupEgressArgs(
                    protocol="-1",
                    from_port=0,
                    to_port=0,
                    cidr_blocks=[constants.Network.ANY_IPV4],
                )
            ],
            opts=self._child_opts(),
        )

        # The target group must be attached to a listener before the service registers in it
        service = aws.ecs.Service(
            f"{self._name}-service",
            cluster=self.cluster.arn,
            task_definition=self.task_definition.arn,
            launch_type="FARGATE",
            desired_count=1,
            deployment_circuit_breaker=aws.ecs.ServiceDeploymentCircuitBreakerArgs(
                enable=True,
                rollback=False,
            ),
            network_configuration=aws.ecs.ServiceNetworkConfigurationArgs(
                subnets=core.vpc.private_subnet_ids,
                security_groups=[service_security_group.id],
                assign_public_ip=False,
            ),
            load_balancers=[
                aws.ecs.ServiceLoadBalancerArgs(
                    target_group_arn=self.target_group.arn,
                    container_name=container_parameters.name,
                    container_port=container_parameters.port,
                )
            ],
            opts=self._child_opts(depends_on=[self.listener]),
        )
        return service
