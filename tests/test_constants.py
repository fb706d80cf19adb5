# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import pathlib

import pytest

import constants


def test_default_names_without_suffix() -> None:
    assert constants.get_app_id_suffix() == ""
    assert constants.get_stack_name() == "import-test"
    assert constants.get_app_id() == "import-app"


def test_empty_suffix_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CDK_APP_ID_SUFFIX", "")

    assert constants.get_stack_name() == "import-test"


def test_suffix_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CDK_APP_ID_SUFFIX", "a1b2c")

    assert constants.get_stack_name() == "import-test-a1b2c"
    assert constants.get_app_id() == "import-app-a1b2c"


def test_explicit_suffix_wins_over_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CDK_APP_ID_SUFFIX", "env")

    assert constants.get_stack_name("arg") == "import-test-arg"


def test_runtime_directories_exist() -> None:
    assert pathlib.Path(constants.LambdaFunction.DIRECTORY, "index.py").is_file()
    assert pathlib.Path(constants.Container.PARAMETERS.directory, "Dockerfile").is_file()
