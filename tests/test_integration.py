# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Deploys the CDK app to a real account, checks both listeners answer, then
destroys it. Runs only when AWS_REGION is set, e.g.

    AWS_REGION=us-east-1 pytest -m integration
"""

import json
import os
import pathlib
import random
import subprocess
import time
from typing import Dict, Iterator, List

import pytest
import requests

import constants

PROJECT_ROOT = pathlib.Path(__file__).parent.parent
READY_TIMEOUT_SECONDS = 300
READY_POLL_SECONDS = 10

pytestmark = pytest.mark.integration


def generate_suffix() -> str:
    """Build a deployment suffix from the commit being tested, or a random one."""
    prefix = os.environ.get("GITHUB_SHA") or str(random.randint(0, 9999))
    # Stack names have to start with a letter
    return f"a{prefix[:5]}"


def run_cdk(args: List[str], env: Dict[str, str]) -> None:
    completed = subprocess.run(
        ["npx", "cdk", *args],
        cwd=PROJECT_ROOT,
        env=env,
        check=False,
    )
    if completed.returncode != 0:
        raise RuntimeError(f"'cdk {' '.join(args)}' exited with {completed.returncode}")


@pytest.fixture(scope="module")
def deployment_url(tmp_path_factory: pytest.TempPathFactory) -> Iterator[str]:
    if not os.environ.get("AWS_REGION"):
        pytest.skip("Skipping test due to missing AWS_REGION environment variable")

    suffix = generate_suffix()
    stack_name = constants.get_stack_name(suffix)
    outputs_file = tmp_path_factory.mktemp("cdk") / "outputs.json"
    env = {**os.environ, constants.APP_ID_SUFFIX_ENV_VAR: suffix}

    try:
        run_cdk(
            [
                "deploy",
                "--require-approval",
                "never",
                "--all",
                "--outputs-file",
                str(outputs_file),
            ],
            env,
        )
        outputs = json.loads(outputs_file.read_text())
        yield outputs[stack_name][constants.ImportTest.URL_OUTPUT_ID]
    finally:
        run_cdk(["destroy", "--all", "--force"], env)


def wait_for_ok(url: str) -> requests.Response:
    deadline = time.monotonic() + READY_TIMEOUT_SECONDS
    while True:
        try:
            response = requests.get(url, timeout=5)
            if response.status_code == 200 or time.monotonic() > deadline:
                return response
        except requests.exceptions.ConnectionError:
            if time.monotonic() > deadline:
                raise
        time.sleep(READY_POLL_SECONDS)


def test_function_answers_on_port_80(deployment_url: str) -> None:
    response = wait_for_ok(f"http://{deployment_url}:{constants.LambdaFunction.LISTENER_PORT}/")

    assert response.status_code == 200
    assert response.json()["source"] == "lambda"


def test_container_answers_on_port_8080(deployment_url: str) -> None:
    response = wait_for_ok(f"http://{deployment_url}:{constants.Container.LISTENER_PORT}/")

    assert response.status_code == 200
    assert response.json()["source"] == "ecs"


def test_generate_suffix_uses_commit_sha(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_SHA", "0123456789abcdef")

    assert generate_suffix() == "a01234"
