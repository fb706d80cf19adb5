# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import os
import pathlib
from dataclasses import dataclass
from typing import Optional

APP_ID_SUFFIX_ENV_VAR = "CDK_APP_ID_SUFFIX"

RUNTIME_DIRECTORY = pathlib.Path(__file__).parent.joinpath("runtime").resolve()


@dataclass
class HealthCheckParameters:
    interval_seconds: int
    timeout_seconds: int
    healthy_threshold_count: int


@dataclass
class ContainerParameters:
    name: str
    asset_name: str
    directory: str
    cpu: int
    memory: int
    port: int


# pylint: disable=R0903
class ImportTest:
    STACK_NAME = "import-test"
    APP_ID = "import-app"

    URL_OUTPUT_ID = "Url"

    CORE_ID = "core"
    LAMBDA_APP_ID = "lambda"
    ECS_APP_ID = "ecs"

    INCLUDE_CORE_CONTEXT_KEY = "include_core"
    INCLUDE_ECS_CONTEXT_KEY = "include_ecs"
    INCLUDE_CORE_CONFIG_KEY = "includeCore"
    INCLUDE_ECS_CONFIG_KEY = "includeEcs"


# pylint: disable=R0903
class Network:
    NAT_GATEWAYS = 1
    ANY_IPV4 = "0.0.0.0/0"


# pylint: disable=R0903
class LambdaFunction:
    LISTENER_PORT = 80
    HANDLER = "index.handler"
    PULUMI_RUNTIME = "python3.12"
    DIRECTORY = str(RUNTIME_DIRECTORY.joinpath("lambda_handler"))
    BASIC_EXECUTION_POLICY = "service-role/AWSLambdaBasicExecutionRole"


# pylint: disable=R0903
class Container:
    LISTENER_PORT = 8080
    LOG_STREAM_PREFIX = "ecs-app"
    LOG_RETENTION_DAYS = 1
    PLATFORM = "linux/amd64"
    HEALTH_CHECK_PATH = "/"
    EXECUTION_POLICY = "service-role/AmazonECSTaskExecutionRolePolicy"

    PARAMETERS = ContainerParameters(
        name="app",
        asset_name="ecs-app",
        directory=str(RUNTIME_DIRECTORY.joinpath("web_app")),
        cpu=256,
        memory=512,
        port=LISTENER_PORT,
    )

    # Shortened so that test deployments report healthy quickly
    HEALTH_CHECK_PARAMETERS = HealthCheckParameters(
        interval_seconds=5,
        timeout_seconds=2,
        healthy_threshold_count=2,
    )


def get_app_id_suffix(value: Optional[str] = None) -> str:
    """Return the `-<suffix>` appended to deployed names, or an empty string.

    The suffix comes from `CDK_APP_ID_SUFFIX` unless `value` is given, and
    lets parallel test deployments coexist in one account.
    """
    if value is None:
        value = os.environ.get(APP_ID_SUFFIX_ENV_VAR)
    return f"-{value}" if value else ""


def get_stack_name(suffix: Optional[str] = None) -> str:
    return f"{ImportTest.STACK_NAME}{get_app_id_suffix(suffix)}"


def get_app_id(suffix: Optional[str] = None) -> str:
    return f"{ImportTest.APP_ID}{get_app_id_suffix(suffix)}"
