# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from cdk_app.import_test_stack import ImportTestStack


@pytest.fixture(scope="module")
def full_stack() -> ImportTestStack:
    return ImportTestStack(cdk.App(), "import-test")


@pytest.fixture(scope="module")
def full_template(full_stack: ImportTestStack) -> Template:
    return Template.from_stack(full_stack)


@pytest.fixture(scope="module")
def lambda_only_template() -> Template:
    stack = ImportTestStack(cdk.App(), "import-test", include_ecs=False)
    return Template.from_stack(stack)


@pytest.fixture(scope="module")
def function_only_stack() -> ImportTestStack:
    return ImportTestStack(
        cdk.App(), "import-test", include_core=False, include_ecs=False
    )


@pytest.fixture(autouse=True)
def _clear_app_id_suffix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CDK_APP_ID_SUFFIX", raising=False)
