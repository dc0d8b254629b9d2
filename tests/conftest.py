"""Shared fixtures for the Claude agent CDK test suite."""

import pytest
from aws_cdk import App
from aws_cdk.assertions import Template

from claude_agent_cdk.stacks.agent_stack import ClaudeAgentStack

TEST_IMAGE_URI = "123456789012.dkr.ecr.us-east-1.amazonaws.com/my-agent:latest"

CONFIG_ENV_VARS = (
    "imageUri",
    "namePrefix",
    "memorySize",
    "timeout",
    "autoDeleteObjects",
    "ENV",
    "CDK_DEFAULT_ACCOUNT",
    "CDK_DEFAULT_REGION",
)


@pytest.fixture
def agent_env(monkeypatch, tmp_path):
    """Clean environment with only the required image URI set."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("imageUri", TEST_IMAGE_URI)
    # Keep config/config.<env>.json files out of reach
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def build_stack(agent_env):
    """Factory building a stack named TestStack from the current environment."""

    def _build(**env):
        for name, value in env.items():
            agent_env.setenv(name, value)
        return ClaudeAgentStack(App(), "TestStack")

    return _build


@pytest.fixture
def synth(build_stack):
    """Factory returning the synthesized template for the current environment."""

    def _synth(**env):
        return Template.from_stack(build_stack(**env))

    return _synth
