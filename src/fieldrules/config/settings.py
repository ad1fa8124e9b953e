"""CLI settings: flags, ``FIELDRULES_*`` env vars and ``fieldrules.toml``.

Sources, strongest first: keyword arguments (the CLI flags), environment
variables, the discovered rules file, then model defaults. The rules file
is read by :class:`TomlSettingsSource`; :meth:`FieldRulesSettings.from_cli`
decides which file that is before the model is built.
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from fieldrules.config.discovery import find_config, read_toml
from fieldrules.config.models import FieldConfig, PluginsConfig

# The rules file chosen by from_cli(), visible to the TOML source while the
# settings model is being built.
_active_toml: ContextVar[Path | None] = ContextVar("fieldrules_active_toml", default=None)


@contextmanager
def _using_toml(path: Path | None) -> Iterator[None]:
    token = _active_toml.set(path)
    try:
        yield
    finally:
        _active_toml.reset(token)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``fieldrules.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._path = toml_path
        self._data: dict[str, Any] = {}
        if toml_path is not None and toml_path.is_file():
            try:
                self._data = read_toml(toml_path)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class FieldRulesSettings(BaseSettings):
    """Everything a command needs to know about the invocation.

    Attributes:
        project_root: Directory of the loaded ``fieldrules.toml``, or the
            working directory when none was found. The local plugin
            directory resolves against it.
        config_path: The rules file that was loaded, if any.
        fields: ``[fields.<name>]`` tables, keyed by field name (dotted
            names address nested record fields).
        plugins: The ``[plugins]`` table.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FIELDRULES_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_plugins: bool = False

    fields: dict[str, FieldConfig] = Field(default_factory=dict)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> FieldRulesSettings:
        """Resolve the rules file and build settings for one invocation.

        An explicit *config_path* must exist. Otherwise the file is
        discovered by walking up from *project_root* (or the working
        directory). CLI flags override every other source.

        Raises:
            click.ClickException: the explicit file is missing, is not
                TOML, or does not match the settings schema.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        with _using_toml(toml_path):
            try:
                return cls(project_root=project_root, config_path=toml_path, **cli_flags)
            except ValidationError as exc:
                msg = f"Invalid configuration in {toml_path or 'environment'}:\n{exc}"
                raise click.ClickException(msg) from exc

    @property
    def plugins_dir(self) -> Path:
        """``[plugins].local_dir`` resolved against :attr:`project_root`."""
        local = Path(self.plugins.local_dir)
        return local if local.is_absolute() else self.project_root / local
