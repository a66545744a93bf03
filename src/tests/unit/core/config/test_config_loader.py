# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

from dataclasses import dataclass

import pytest

from gitdrop.core.config.config_loader import ConfigLoader
from gitdrop.core.exceptions import ConfigurationError


@dataclass
class SampleConfig:
    name: str = "default"
    count: int = 1
    enabled: bool = False


@pytest.fixture
def paths(tmp_path):
    local = tmp_path / "local.toml"
    global_ = tmp_path / "global.toml"
    return local, global_


def load(paths, input_args=None, custom=None):
    local, global_ = paths
    return ConfigLoader.get_full_config(
        SampleConfig,
        input_args or {},
        local_config_path=local,
        env_app_prefix="SAMPLETEST_",
        global_config_path=global_,
        custom_config_path=custom,
    )


def test_defaults_when_nothing_is_set(paths):
    config, sources, used_defaults = load(paths)

    assert config == SampleConfig()
    assert sources == []
    assert used_defaults


def test_priority_order(paths, tmp_path, monkeypatch):
    local, global_ = paths
    global_.write_text('name = "global"\ncount = 5\nenabled = true\n')
    monkeypatch.setenv("SAMPLETEST_COUNT", "7")
    local.write_text('name = "local"\n')

    config, sources, used_defaults = load(paths)

    assert config == SampleConfig(name="local", count=7, enabled=True)
    assert sources == ["Local Config", "Environment Variables", "Global Config"]
    assert not used_defaults


def test_input_args_beat_everything(paths, monkeypatch):
    local, _ = paths
    local.write_text('name = "local"\n')
    monkeypatch.setenv("SAMPLETEST_NAME", "env")

    config, sources, _ = load(paths, {"name": "cli"})

    assert config.name == "cli"
    assert sources == ["Input Args"]


def test_custom_config_sits_below_input_args(paths, tmp_path):
    local, _ = paths
    local.write_text('name = "local"\ncount = 2\n')
    custom = tmp_path / "custom.toml"
    custom.write_text('name = "custom"\n')

    config, sources, _ = load(paths, {}, custom)

    assert config.name == "custom"
    assert config.count == 2
    assert sources == ["Custom Config", "Local Config"]


def test_missing_custom_config(paths, tmp_path):
    with pytest.raises(ConfigurationError):
        load(paths, {}, tmp_path / "nope.toml")


def test_env_keys_are_lowercased(monkeypatch):
    monkeypatch.setenv("SAMPLETEST_ENABLED", "true")

    assert ConfigLoader.load_env("SAMPLETEST_") == {"enabled": "true"}


def test_env_strings_are_coerced(paths, monkeypatch):
    monkeypatch.setenv("SAMPLETEST_ENABLED", "true")
    monkeypatch.setenv("SAMPLETEST_COUNT", "3")

    config, _, _ = load(paths)

    assert config.enabled is True
    assert config.count == 3


def test_invalid_toml(paths):
    local, _ = paths
    local.write_text("name = \n")

    with pytest.raises(ConfigurationError):
        load(paths)


def test_validation_failure_lists_issues(paths):
    with pytest.raises(ConfigurationError) as exc:
        load(paths, {"count": "many"})

    assert "count" in exc.value.details


def test_unknown_keys_are_ignored(paths):
    local, _ = paths
    local.write_text('name = "x"\nsomething_else = 1\n')

    config, _, _ = load(paths)

    assert config.name == "x"
