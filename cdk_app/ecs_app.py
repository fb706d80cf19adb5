# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import aws_cdk as cdk
import aws_cdk.aws_ec2 as ec2
import aws_cdk.aws_ecr_assets as ecr_assets
import aws_cdk.aws_ecs as ecs
import aws_cdk.aws_elasticloadbalancingv2 as elbv2
import aws_cdk.aws_logs as logs
from constructs import Construct

import constants


class EcsApp(Construct):
    def __init__(
        self,
        scope: Construct,
        id_: str,
        vpc: ec2.IVpc,
        alb: elbv2.IApplicationLoadBalancer,
    ) -> None:
        super().__init__(scope, id_)

        # --- ECS Cluster ---
        cluster = self._create_ecs_cluster(vpc)

        # --- ECS Task Definition ---
        self._task_definition = self._create_task_definition(
            container_parameters=constants.Container.PARAMETERS,
        )

        # --- ECS Service ---
        self._service = self._create_fargate_service(
            cluster=cluster,
            task_definition=self._task_definition,
        )

        # --- Load Balancer ---
        self._listener = self._add_load_balancer_target(
            alb=alb,
            service=self._service,
            health_check_parameters=constants.Container.HEALTH_CHECK_PARAMETERS,
        )

    def _create_ecs_cluster(self, vpc: ec2.IVpc) -> ecs.Cluster:
        cluster = ecs.Cluster(
            self,
            "Cluster",
            vpc=vpc,
            container_insights_v2=ecs.ContainerInsights.ENABLED,
        )
        return cluster

    def _create_task_definition(
        self, container_parameters: constants.ContainerParameters
    ) -> ecs.FargateTaskDefinition:
        task_definition = ecs.FargateTaskDefinition(
            self,
            "TaskDefinition",
            memory_limit_mib=container_parameters.memory,
            cpu=container_parameters.cpu,
        )

        log_group = logs.LogGroup(
            self,
            "LogGroup",
            retention=logs.RetentionDays.ONE_DAY,
            removal_policy=cdk.RemovalPolicy.DESTROY,
        )
        self._add_container_to_task_definition(
            task_definition=task_definition,
            container_parameters=container_parameters,
            log_group=log_group,
        )
        return task_definition

    def _create_fargate_service(
        self,
        cluster: ecs.ICluster,
        task_definition: ecs.TaskDefinition,
    ) -> ecs.FargateService:
        fargate_service = ecs.FargateService(
            self,
            "Service",
            task_definition=task_definition,
            cluster=cluster,
            circuit_breaker=ecs.DeploymentCircuitBreaker(enable=True),
        )
        return fargate_service

    @staticmethod
    def _add_container_to_task_definition(
        task_definition: ecs.FargateTaskDefinition,
        container_parameters: constants.ContainerParameters,
        log_group: logs.ILogGroup,
    ) -> ecs.ContainerDefinition:
        container_image = ecs.ContainerImage.from_asset(
            directory=container_parameters.directory,
            asset_name=container_parameters.asset_name,
            platform=ecr_assets.Platform.LINUX_AMD64,
        )

        container = task_definition.add_container(
            container_parameters.name,
            image=container_image,
            port_mappings=[
                ecs.PortMapping(container_port=container_parameters.port)
            ],
            logging=ecs.LogDriver.aws_logs(
                stream_prefix=constants.Container.LOG_STREAM_PREFIX,
                log_group=log_group,
            ),
        )
        return container

    @staticmethod
    def _add_load_balancer_target(
        alb: elbv2.IApplicationLoadBalancer,
        service: ecs.FargateService,
        health_check_parameters: constants.HealthCheckParameters,
    ) -> elbv2.ApplicationListener:
        listener = alb.add_listener(
            "ecs-listener",
            port=constants.Container.LISTENER_PORT,
            protocol=elbv2.ApplicationProtocol.HTTP,
        )

        listener.add_targets(
            "ecs-target",
            port=constants.Container.LISTENER_PORT,
            health_check=elbv2.HealthCheck(
                interval=cdk.Duration.seconds(health_check_parameters.interval_seconds),
                timeout=cdk.Duration.seconds(health_check_parameters.timeout_seconds),
                healthy_threshold_count=health_check_parameters.healthy_threshold_count,
            ),
            targets=[service],
        )
        return listener

    @property
    def task_definition(self) -> ecs.FargateTaskDefinition:
        return self._task_definition

    @property
    def service(self) -> ecs.FargateService:
        return self._service

    @property
    def listener(self) -> elbv2.ApplicationListener:
        return self._listener
