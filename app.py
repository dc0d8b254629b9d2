#!/usr/bin/env python3

import logging
import os
from aws_cdk import App, Environment
from claude_agent_cdk.stacks.agent_stack import ClaudeAgentStack
from claude_agent_cdk.common.config import load_config
from claude_agent_cdk.common.logger import get_logger
from claude_agent_cdk.common.resource_manager import ResourceManager

logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = get_logger("claude-agent-cdk")

app = App()

config = load_config()
try:
    resource_manager = ResourceManager(config)
except ValueError as e:
    logger.error(f"Configuration error: {str(e)}")
    raise

stack = ClaudeAgentStack(
    app,
    os.getenv('STACK_NAME', f"{resource_manager.env_name}-claude-agent"),
    resource_manager=resource_manager,
    env=Environment(
        account=resource_manager.config.account or None,
        region=resource_manager.config.region or None
    )
)

app.synth()
