# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Lambda handler registered as the target of the port-80 load balancer listener.

The load balancer expects a response carrying `statusCode`,
`statusDescription`, `headers`, `isBase64Encoded` and a string `body`.
"""

import json
import logging

logger = logging.getLogger()
logger.setLevel(logging.INFO)

HEALTH_OK = "OK"


def handler(event: dict, context) -> dict:
    """Answer every request with a small JSON status document."""
    method = event.get("httpMethod", "GET")
    path = event.get("path", "/")
    logger.info("Received %s %s", method, path)

    body = {"status": HEALTH_OK, "source": "lambda", "path": path}
    return {
        "statusCode": 200,
        "statusDescription": "200 OK",
        "isBase64Encoded": False,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }
