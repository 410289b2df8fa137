"""Tests for application config loading."""

import pytest
import yaml

from tweakpack.configuration import MAX_COMMAND_LENGTH, MAX_SLOTS_PER_TYPE
from tweakpack.foundation.config import (
    TweakpackConfig,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)
from tweakpack.foundation.errors import ErrorCode, TweakpackError


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults(self) -> None:
        cfg = load_config()

        assert cfg == TweakpackConfig()
        assert cfg.limits.max_command_length == MAX_COMMAND_LENGTH
        assert cfg.limits.max_slots_per_type == MAX_SLOTS_PER_TYPE
        assert cfg.paths.bundle is None

    def test_explicit_file(self, tmp_path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("limits:\n  max_command_length: 2000\npaths:\n  bundle: build/bundle.json\n")

        cfg = load_config(path)

        assert cfg.limits.max_command_length == 2000
        assert cfg.limits.max_slots_per_type == MAX_SLOTS_PER_TYPE
        assert cfg.paths.bundle == "build/bundle.json"

    def test_project_file(self, tmp_path) -> None:
        project = tmp_path / ".tweakpack"
        project.mkdir()
        (project / "config.yaml").write_text("debug: true\n")

        assert load_config().debug is True

    def test_env_overrides_file(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("limits:\n  max_slots_per_type: 3\n")
        monkeypatch.setenv("TWEAKPACK_LIMITS_MAX_SLOTS_PER_TYPE", "5")
        monkeypatch.setenv("TWEAKPACK_PATHS_MAPPING", "my-mapping.yaml")

        cfg = load_config(path)

        assert cfg.limits.max_slots_per_type == 5
        assert cfg.paths.mapping == "my-mapping.yaml"

    def test_unreadable_file_skipped(self, tmp_path, caplog) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("limits: [oops\n")

        with caplog.at_level("WARNING"):
            cfg = load_config(path)

        assert cfg == TweakpackConfig()
        assert "broken.yaml" in caplog.text

    def test_non_integer_limit_from_env_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("TWEAKPACK_LIMITS_MAX_COMMAND_LENGTH", "50k")

        with pytest.raises(TweakpackError) as exc_info:
            load_config()

        assert exc_info.value.code == ErrorCode.SETTINGS_INVALID
        assert exc_info.value.context["key"] == "limits.max_command_length"

    @pytest.mark.parametrize(
        "content",
        [
            "limits:\n  max_slots_per_type: 0\n",
            "limits:\n  max_command_length: 1.5\n",
            "limits:\n  max_slot: 3\n",
            "limits: 5\n",
        ],
    )
    def test_invalid_limits_in_file_rejected(self, tmp_path, content) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text(content)

        with pytest.raises(TweakpackError) as exc_info:
            load_config(path)

        assert exc_info.value.code == ErrorCode.SETTINGS_INVALID


class TestGetConfig:
    def test_cached_until_reset(self) -> None:
        first = get_config()

        assert get_config() is first
        reset_config()
        assert get_config() is not first


class TestSaveDefaultConfig:
    def test_round_trip(self, tmp_path) -> None:
        path = save_default_config(tmp_path / ".tweakpack" / "config.yaml")

        data = yaml.safe_load(path.read_text())

        assert data["limits"]["max_command_length"] == MAX_COMMAND_LENGTH
        assert data["paths"] == {"bundle": None, "mapping": None}
        assert load_config(path) == TweakpackConfig()
