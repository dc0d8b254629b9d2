"""Tests for claude_agent_cdk/common/config.py."""

import json

from claude_agent_cdk.common.config import load_config


class TestLoadConfig:

    def test_reads_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config({
            "imageUri": "registry/repo:tag",
            "memorySize": "2048",
            "timeout": "60",
            "namePrefix": "myapp",
            "autoDeleteObjects": "true",
            "CDK_DEFAULT_ACCOUNT": "123456789012",
            "CDK_DEFAULT_REGION": "eu-west-1",
        })
        assert config == {
            "env_name": "dev",
            "account": "123456789012",
            "region": "eu-west-1",
            "image_uri": "registry/repo:tag",
            "memory_size": "2048",
            "timeout": "60",
            "name_prefix": "myapp",
            "auto_delete_objects": "true",
        }

    def test_unset_values_absent(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config({})
        assert "image_uri" not in config
        assert "timeout" not in config
        assert config["env_name"] == "dev"

    def test_config_file_overrides_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.staging.json").write_text(json.dumps({
            "name_prefix": "staging-agent",
            "memory_size": 4096,
        }))
        config = load_config({"ENV": "staging", "namePrefix": "ignored", "imageUri": "registry/repo"})
        assert config["env_name"] == "staging"
        assert config["name_prefix"] == "staging-agent"
        assert config["memory_size"] == 4096
        assert config["image_uri"] == "registry/repo"

    def test_defaults_to_process_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("imageUri", "registry/from-env")
        assert load_config()["image_uri"] == "registry/from-env"
