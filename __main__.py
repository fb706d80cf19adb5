# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import pulumi

import constants
from pulumi_app.import_test_stack import ImportTestStack

config = pulumi.Config()

stack = ImportTestStack(
    constants.get_stack_name(),
    include_core=config.get_bool(constants.ImportTest.INCLUDE_CORE_CONFIG_KEY, True),
    include_ecs=config.get_bool(constants.ImportTest.INCLUDE_ECS_CONFIG_KEY, True),
)

if stack.url is not None:
    pulumi.export("url", stack.url)
