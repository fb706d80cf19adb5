# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from cdk_app.application import create_app, get_context_flag


def test_default_stack_name() -> None:
    app = create_app()

    assert app.node.try_find_child("import-test") is not None


def test_explicit_suffix_is_appended() -> None:
    app = create_app(suffix="a1234")

    assert app.node.try_find_child("import-test-a1234") is not None
    assert app.node.try_find_child("import-test") is None


def test_suffix_is_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CDK_APP_ID_SUFFIX", "a42")

    app = create_app()

    assert app.node.try_find_child("import-test-a42") is not None


def test_context_disables_ecs() -> None:
    app = create_app(context={"include_ecs": "false"})

    stack = app.node.find_child("import-test")
    template = Template.from_stack(stack)
    template.resource_count_is("AWS::ECS::Service", 0)
    template.resource_count_is("AWS::ElasticLoadBalancingV2::Listener", 1)


def test_context_disabling_core_alone_is_rejected() -> None:
    with pytest.raises(ValueError):
        create_app(context={"include_core": "false"})


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        (False, False),
        ("true", True),
        ("Yes", True),
        ("1", True),
        ("false", False),
        (" NO ", False),
        ("0", False),
    ],
)
def test_get_context_flag(value: object, expected: bool) -> None:
    app = cdk.App(context={"flag": value})

    assert get_context_flag(app, "flag") is expected


def test_get_context_flag_defaults_when_missing() -> None:
    app = cdk.App()

    assert get_context_flag(app, "flag") is True
    assert get_context_flag(app, "flag", default=False) is False


def test_get_context_flag_rejects_unknown_values() -> None:
    app = cdk.App(context={"flag": "maybe"})

    with pytest.raises(ValueError, match="flag"):
        get_context_flag(app, "flag")
