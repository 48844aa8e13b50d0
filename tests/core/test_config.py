from __future__ import annotations

import pytest

from trivia_quiz.core import config as core_config


def test_load_toml_reads_tables(tmp_path):
    path = tmp_path / "trivia.toml"
    path.write_text("[session]\nduration_seconds = 60\n", encoding="utf-8")

    data = core_config.load_toml(path)

    assert data == {"session": {"duration_seconds": 60}}


def test_load_toml_missing_file(tmp_path):
    with pytest.raises(core_config.TomlConfigError, match="not found"):
        core_config.load_toml(tmp_path / "missing.toml")


def test_load_toml_invalid_syntax(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[session\n", encoding="utf-8")

    with pytest.raises(core_config.TomlConfigError, match="parse"):
        core_config.load_toml(path)


def test_merge_defaults_overrides_nested_values():
    base = {"session": {"duration_seconds": 1800, "shuffle_seed": None}}

    core_config.merge_defaults(base, {"session": {"shuffle_seed": 3}})

    assert base == {"session": {"duration_seconds": 1800, "shuffle_seed": 3}}


def test_merge_defaults_rejects_unknown_keys():
    base = {"session": {"duration_seconds": 1800}}

    with pytest.raises(core_config.TomlConfigError, match="session.bogus"):
        core_config.merge_defaults(base, {"session": {"bogus": 1}})


def test_merge_defaults_rejects_scalar_for_table():
    base = {"session": {"duration_seconds": 1800}}

    with pytest.raises(core_config.TomlConfigError, match="Expected table"):
        core_config.merge_defaults(base, {"session": 5})


def test_write_toml_template_refuses_overwrite(tmp_path):
    target = tmp_path / "nested" / "trivia.toml"

    written = core_config.write_toml_template(target, template="a = 1\n")
    assert written.read_text(encoding="utf-8") == "a = 1\n"

    with pytest.raises(core_config.TomlConfigError, match="already exists"):
        core_config.write_toml_template(target, template="a = 2\n")

    core_config.write_toml_template(target, template="a = 2\n", overwrite=True)
    assert target.read_text(encoding="utf-8") == "a = 2\n"
