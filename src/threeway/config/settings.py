"""Settings for the threeway CLI and services.

A value is taken from the first of these that provides it:

1. keyword arguments, i.e. the global CLI flags
2. ``THREEWAY_*`` environment variables (``THREEWAY_BENCH__DEPTH=8``)
3. the ``threeway.toml`` chosen for this run
4. defaults on the section models in :mod:`threeway.config.models`

The config file is chosen by ``--config``, else ``THREEWAY_CONFIG``, else
the nearest ``threeway.toml`` in the working directory or its parents.
"""

from __future__ import annotations

import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from threeway.config.models import BenchConfig, LawsConfig

CONFIG_FILENAME = "threeway.toml"
CONFIG_ENV_VAR = "THREEWAY_CONFIG"

# The file picked by from_cli(), read by settings_customise_sources().
_chosen_file: ContextVar[Path | None] = ContextVar("_chosen_file", default=None)


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``threeway.toml`` governing a run started in *start*.

    ``THREEWAY_CONFIG`` wins when set; if it names a missing file there is
    no config at all.  Otherwise the nearest ``threeway.toml`` in *start*
    (default: cwd) or one of its parents is used.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        named = Path(override)
        return named if named.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _read_sections(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """The ``[bench]`` and ``[laws]`` tables of a ``threeway.toml``.

    Tables with no matching settings field are ignored.
    """

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        sections = _read_sections(path) if path else {}
        self._sections = {
            name: table for name, table in sections.items() if name in settings_cls.model_fields
        }

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._sections.get(field_name), field_name, field_name in self._sections

    def __call__(self) -> dict[str, Any]:
        return dict(self._sections)


class ThreewaySettings(BaseSettings):
    """Everything a command needs: output flags plus the config sections.

    Attributes:
        config_path: The ``threeway.toml`` that was read, or None.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="THREEWAY_",
        env_nested_delimiter="__",
    )

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    bench: BenchConfig = Field(default_factory=BenchConfig)
    laws: LawsConfig = Field(default_factory=LawsConfig)

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
            TomlSettingsSource(settings_cls, _chosen_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> ThreewaySettings:
        """Build settings for one CLI invocation.

        *config_path* (``--config``) names the file outright; a path that
        does not exist means no file.  Without it the file is discovered
        from *start*.

        Raises:
            click.ClickException: if the file is not valid TOML, or a value
                from any source fails validation.
        """
        if config_path:
            named = Path(config_path)
            chosen = named if named.is_file() else None
        else:
            chosen = find_config(start)

        token = _chosen_file.set(chosen)
        try:
            return cls(config_path=chosen, **cli_flags)
        except ValidationError as exc:
            where = f" (config file {chosen})" if chosen else ""
            msg = f"Invalid configuration{where}:\n{exc}"
            raise click.ClickException(msg) from exc
        finally:
            _chosen_file.reset(token)
