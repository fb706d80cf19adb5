# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

import json
import logging

from flask import Flask

HEALTH_OK = "OK"
PORT = 8080

logger = logging.getLogger(__name__)

app = Flask(__name__)


@app.route("/")
def get_health() -> str:
    logger.info("Health check")
    return json.dumps({"status": HEALTH_OK, "source": "ecs"})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(host="0.0.0.0", port=PORT)
