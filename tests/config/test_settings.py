"""Tests for unified settings resolution."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from fieldrules.config.settings import FieldRulesSettings


class TestFromCli:
    def test_discovers_rules_file(self, project_dir: Path) -> None:
        settings = FieldRulesSettings.from_cli(project_root=project_dir)
        assert settings.config_path is not None
        assert settings.config_path.name == "fieldrules.toml"
        assert "Email" in settings.fields
        assert settings.plugins.enabled is False

    def test_root_from_config_parent(self, project_dir: Path) -> None:
        settings = FieldRulesSettings.from_cli(config_path=str(project_dir / "fieldrules.toml"))
        assert settings.project_root == project_dir

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            FieldRulesSettings.from_cli(config_path=str(tmp_path / "missing.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "fieldrules.toml"
        path.write_text("[fields\n", encoding="utf-8")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            FieldRulesSettings.from_cli(config_path=str(path))

    def test_unknown_section_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "fieldrules.toml"
        path.write_text("[feilds.Email]\nrequired = true\n", encoding="utf-8")
        with pytest.raises(click.ClickException, match="Invalid configuration"):
            FieldRulesSettings.from_cli(config_path=str(path))

    def test_unknown_rule_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "fieldrules.toml"
        path.write_text('[fields.Email]\nrules = [{ rule = "email", msg = "x" }]\n', encoding="utf-8")
        with pytest.raises(click.ClickException, match="Invalid configuration"):
            FieldRulesSettings.from_cli(config_path=str(path))

    def test_no_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("fieldrules.config.settings.find_config", lambda start=None: None)
        settings = FieldRulesSettings.from_cli(project_root=tmp_path)
        assert settings.config_path is None
        assert settings.fields == {}


class TestPriority:
    def test_env_overrides_defaults(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIELDRULES_JSON_OUTPUT", "true")
        settings = FieldRulesSettings.from_cli(project_root=project_dir)
        assert settings.json_output is True

    def test_cli_flag_overrides_env(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIELDRULES_QUIET", "false")
        settings = FieldRulesSettings.from_cli(project_root=project_dir, quiet=True)
        assert settings.quiet is True

    def test_env_overrides_toml(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIELDRULES_PLUGINS__ENABLED", "true")
        settings = FieldRulesSettings.from_cli(project_root=project_dir)
        assert settings.plugins.enabled is True


class TestPluginsDir:
    def test_relative_to_project_root(self, project_dir: Path) -> None:
        settings = FieldRulesSettings.from_cli(project_root=project_dir)
        assert settings.plugins_dir == project_dir / ".fieldrules" / "plugins"

    def test_absolute_kept(self, project_dir: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
        elsewhere = tmp_path_factory.mktemp("plugins")
        (project_dir / "fieldrules.toml").write_text(
            f'[plugins]\nlocal_dir = "{elsewhere.as_posix()}"\n', encoding="utf-8"
        )
        settings = FieldRulesSettings.from_cli(project_root=project_dir)
        assert settings.plugins_dir == elsewhere

    def test_frozen(self, project_dir: Path) -> None:
        settings = FieldRulesSettings.from_cli(project_root=project_dir)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]
