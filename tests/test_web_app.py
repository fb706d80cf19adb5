# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import json

import pytest
from flask.testing import FlaskClient

from web_app.app import HEALTH_OK, PORT, app


@pytest.fixture
def client() -> FlaskClient:
    app.config.update(TESTING=True)
    return app.test_client()


def test_health_route(client: FlaskClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert json.loads(response.data) == {"status": HEALTH_OK, "source": "ecs"}


def test_unknown_route_is_not_found(client: FlaskClient) -> None:
    assert client.get("/missing").status_code == 404


def test_serves_on_listener_port() -> None:
    assert PORT == 8080
