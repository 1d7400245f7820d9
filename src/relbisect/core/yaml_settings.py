"""YAML configuration loading with include: directive support."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic_settings import BaseSettings, YamlConfigSettingsSource

from relbisect.core.log import logger

CONFIG_FILENAME = "relbisect.yaml"

DEFAULTS_FILE = Path(__file__).parent.parent / "defaults" / "default.yaml"


class YamlWithIncludesSettingsSource(YamlConfigSettingsSource):
    """YAML settings source layering several config files.

    Files are deep-merged in increasing priority:
        package defaults < user config < project config < yaml_file

    Any file may name others under a top-level include: key; those
    are loaded first and then overridden by the including file.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: str | os.PathLike | None = None,
        search_default_locations: bool = True,
    ):
        self.search_default_locations = search_default_locations
        super().__init__(settings_cls, yaml_file)

    def _default_locations(self) -> list[Path]:
        if not self.search_default_locations:
            return []
        return [
            DEFAULTS_FILE,
            Path(user_config_dir("relbisect", appauthor=False))
            / CONFIG_FILENAME,
            Path(CONFIG_FILENAME),
        ]

    def _read_files(self, files, **kwargs):  # noqa: ARG002
        files_to_load = self._default_locations()
        if files:
            if isinstance(files, (str, os.PathLike)):
                files = [files]
            files_to_load.extend(Path(f).expanduser() for f in files)

        result = {}
        seen = set()
        for file_path in files_to_load:
            resolved = file_path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            if not file_path.is_file():
                logger.debug(
                    "Configuration file not found (skipping)",
                    file=str(file_path),
                )
                continue
            data = self._load_file_recursive(resolved, set())
            result = deep_merge(result, data)
        return result

    def _load_file_recursive(
        self, filepath: Path, visited: set[Path]
    ) -> dict:
        """Load filepath, resolving include: entries depth first.

        Raises:
            ValueError: On a circular include
        """
        if filepath in visited:
            raise ValueError(f"Circular include: {filepath}")
        visited.add(filepath)

        with open(filepath) as f:
            data = yaml.safe_load(f) or {}

        includes = data.pop("include", None) or []
        if isinstance(includes, str):
            includes = [includes]

        merged = {}
        for inc in includes:
            inc_path = Path(inc).expanduser()
            if not inc_path.is_absolute():
                inc_path = (filepath.parent / inc_path).resolve()
            merged = deep_merge(
                merged, self._load_file_recursive(inc_path, visited.copy())
            )
        return deep_merge(merged, data)


def deep_merge(base: dict, override: dict) -> dict:
    """Return base updated recursively with override (override wins)."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
