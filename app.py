#!/usr/bin/env python3
import logging
import os
import sys

import aws_cdk as cdk
from config import contextualize, config, LOG_LEVEL
from topology.ecs_stack import add_stack
from topology.graph import DeploymentTarget, TopologyError, build_graph

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = cdk.App(outdir=os.getenv("CDK_OUTDIR"))

    try:
        graph = build_graph(
            DeploymentTarget(
                region=config.aws.region,
                account=config.aws.account,
            ),
            config,
        )
    except TopologyError as e:
        logger.error("Cannot build resource graph: %s", e)
        sys.exit(1)

    add_stack(
        app,
        contextualize("CdkAppStack"),
        graph,
        tags=config.aws.tags.to_dict(),
    )

    return app.synth()


if __name__ == "__main__":
    main()
