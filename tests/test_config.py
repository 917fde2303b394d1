# tests/test_config.py
"""
Tests for YAML configuration loading, saving and lookup.
"""

import logging

from actionfinder.config import (
    ActionFinderConfig, find_config_file, get_default_config, load_config, render_options_markdown,
    save_config,
)


def test_defaults():
    config = get_default_config()

    assert config.modules == ["huddles-app"]
    assert config.node_module_paths == ["node_modules"]
    assert config.file_globs == ["**/*Actions.js"]
    assert config.local_source_dir == "src"
    assert config.trigger == "dispatch"
    assert config.use_introspection is True


def test_load_overrides_defaults(tmp_path):
    path = tmp_path / ".actionfinder.yml"
    path.write_text("modules:\n  - my-app\n  - shared\nuse_introspection: false\n", encoding="utf-8")

    config = load_config(str(path))

    assert config.modules == ["my-app", "shared"]
    assert config.use_introspection is False
    assert config.local_source_dir == "src"


def test_invalid_config_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / ".actionfinder.yml"
    path.write_text("modules: my-app\nunknown_option: 1\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="actionfinder.config"):
        config = load_config(str(path))

    assert config == ActionFinderConfig()
    assert "Failed to load config" in caplog.text


def test_malformed_yaml_falls_back_to_defaults(tmp_path):
    path = tmp_path / ".actionfinder.yml"
    path.write_text("modules: [unclosed\n", encoding="utf-8")

    assert load_config(str(path)) == ActionFinderConfig()


def test_missing_file_uses_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.yml")) == ActionFinderConfig()


def test_save_then_load(tmp_path):
    config = ActionFinderConfig(modules=["my-app"], introspection_timeout=2.5)
    path = tmp_path / "conf" / "actionfinder.yml"

    save_config(config, str(path))

    assert load_config(str(path)) == config


def test_find_config_file_walks_up(tmp_path):
    (tmp_path / "actionfinder.yaml").write_text("trigger: store.dispatch\n", encoding="utf-8")
    nested = tmp_path / "src" / "components"
    nested.mkdir(parents=True)

    assert find_config_file(str(nested)) == str(tmp_path / "actionfinder.yaml")


def test_hidden_config_file_is_preferred(tmp_path):
    (tmp_path / "actionfinder.yml").write_text("{}\n", encoding="utf-8")
    (tmp_path / ".actionfinder.yml").write_text("{}\n", encoding="utf-8")

    assert find_config_file(str(tmp_path)) == str(tmp_path / ".actionfinder.yml")


def test_options_markdown():
    markdown = render_options_markdown()

    assert markdown.startswith("## Configuration options\n")
    assert '`modules`: array (defaults to ["huddles-app"]) - ' in markdown
    assert "`use_introspection`: boolean (defaults to true)" in markdown
