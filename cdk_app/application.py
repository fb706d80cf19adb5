# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

from typing import Any, Dict, Optional

import aws_cdk as cdk
import aws_cdk.aws_s3 as s3
from aws_cdk.app_staging_synthesizer_alpha import AppStagingSynthesizer

import constants
from cdk_app.import_test_stack import ImportTestStack

TRUE_VALUES = ("true", "yes", "1")
FALSE_VALUES = ("false", "no", "0")


def create_app(
    suffix: Optional[str] = None, context: Optional[Dict[str, Any]] = None
) -> cdk.App:
    """Build the CDK app holding the import test stack.

    `suffix` defaults to the `CDK_APP_ID_SUFFIX` environment variable and is
    applied to both the stack name and the staging app id.
    """
    app = cdk.App(
        context=context,
        default_stack_synthesizer=AppStagingSynthesizer.default_resources(
            app_id=constants.get_app_id(suffix),
            staging_bucket_encryption=s3.BucketEncryption.S3_MANAGED,
        ),
    )

    ImportTestStack(
        app,
        constants.get_stack_name(suffix),
        include_core=get_context_flag(
            app, constants.ImportTest.INCLUDE_CORE_CONTEXT_KEY
        ),
        include_ecs=get_context_flag(app, constants.ImportTest.INCLUDE_ECS_CONTEXT_KEY),
    )
    return app


def get_context_flag(app: cdk.App, key: str, default: bool = True) -> bool:
    """Read a boolean toggle from CDK context.

    Values given on the command line (`-c key=false`) arrive as strings,
    values from `cdk.json` may already be booleans.
    """
    value = app.node.try_get_context(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value

    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(
        f"Context value '{key}' must be one of "
        f"{TRUE_VALUES + FALSE_VALUES}, got '{value}'"
    )
