# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

from typing import Optional

import pulumi

import constants
from pulumi_app.core import Core
from pulumi_app.ecs_app import EcsApp
from pulumi_app.lambda_app import LambdaApp


class ImportTestStack(pulumi.ComponentResource):
    """Pulumi counterpart of the CDK import test stack."""

    def __init__(
        self,
        name: str,
        include_core: bool = True,
        include_ecs: bool = True,
        opts: Optional[pulumi.ResourceOptions] = None,
    ) -> None:
        if include_ecs and not include_core:
            raise ValueError(
                "The ECS application needs the core network and load balancer, "
                f"set '{constants.ImportTest.INCLUDE_CORE_CONFIG_KEY}' "
                f"or disable '{constants.ImportTest.INCLUDE_ECS_CONFIG_KEY}'"
            )

        super().__init__("import-test:index:ImportTestStack", name, None, opts)
        child_opts = pulumi.ResourceOptions(parent=self)

        self.core: Optional[Core] = None
        self.ecs_app: Optional[EcsApp] = None
        self.url: Optional[pulumi.Output[str]] = None

        if include_core:
            self.core = Core(f"{name}-{constants.ImportTest.CORE_ID}", opts=child_opts)

        self.lambda_app = LambdaApp(
            f"{name}-{constants.ImportTest.LAMBDA_APP_ID}",
            core=self.core,
            opts=child_opts,
        )

        if include_ecs and self.core is not None:
            self.ecs_app = EcsApp(
                f"{name}-{constants.ImportTest.ECS_APP_ID}",
                core=self.core,
                opts=child_opts,
            )

        if self.core is not None:
            self.url = self.core.alb.dns_name
            self.register_outputs({constants.ImportTest.URL_OUTPUT_ID: self.url})
        else:
            pulumi.log.info(
                "No load balancer declared: the function is deployed without "
                f"a listener and the '{constants.ImportTest.URL_OUTPUT_ID}' "
                "output is omitted",
                resource=self,
            )
            self.register_outputs({})
