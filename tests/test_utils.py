# tests/test_utils.py
"""Unit tests for configuration helpers in the `emagit.utils` module."""

from emagit.utils import utils


def test_deep_merge() -> None:
    """Verify that `deep_merge` correctly merges nested dictionaries.

    This test ensures:
    - Existing values are preserved if not overridden.
    - Nested dictionaries are merged recursively.
    - Conflicting keys are overridden by values from the second dictionary.
    """
    base = {"a": 1, "b": {"x": 10, "y": 20}}
    override = {"b": {"y": 99, "z": 100}, "c": 3}
    result = utils.deep_merge(base, override)
    expected = {"a": 1, "b": {"x": 10, "y": 99, "z": 100}, "c": 3}
    assert result == expected
    assert base == {"a": 1, "b": {"x": 10, "y": 20}}


def test_load_config_merges_user_file(tmp_path) -> None:
    user_config = tmp_path / "config.toml"
    user_config.write_text(
        '[commit]\nshow_staged_changes = false\n\n[git]\neditor_command = "vim"\n',
        encoding="utf-8",
    )

    config = utils.load_config(user_config)

    assert config["commit"]["show_staged_changes"] is False
    assert config["commit"]["post_commit_delay"] == 0.1
    assert config["git"]["editor_command"] == "vim"
    assert config["status"]["display_timeout"] == 10


def test_load_config_ignores_broken_file(tmp_path) -> None:
    """An unparsable user file leaves the defaults in place."""
    user_config = tmp_path / "config.toml"
    user_config.write_text("[commit\nnot toml", encoding="utf-8")

    assert utils.load_config(user_config) == utils.DEFAULT_CONFIG


def test_load_config_does_not_share_default_sections(tmp_path) -> None:
    config = utils.load_config(tmp_path / "missing.toml")
    config["commit"]["show_staged_changes"] = False

    assert utils.DEFAULT_CONFIG["commit"]["show_staged_changes"] is True


def test_ensure_user_config_exists(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(utils, "get_config_dir", lambda: tmp_path / "emagit")

    utils.ensure_user_config_exists()

    env_file = tmp_path / "emagit" / ".env"
    assert env_file.read_text(encoding="utf-8") == utils.ENV_TEMPLATE
