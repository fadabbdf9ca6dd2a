# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration loading for buildreport.

Configuration lives in ``buildreport.toml`` or ``.buildreport.toml``, either at
the top level or nested under ``[tool.buildreport]``. Relative paths are
resolved against the directory containing the configuration file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from buildreport.compat import tomllib
from buildreport.core.model_types import LogComponent
from buildreport.logging import structured_extra

from .constants import CONFIG_FILENAMES, TOOL_SECTION
from .models import (
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    ReportConfig,
    ReportConfigModel,
    model_to_dataclass,
)

logger: logging.Logger = logging.getLogger("buildreport.config")


def _resolved_path(base_dir: Path, value: Path | None) -> Path | None:
    if value is None:
        return None
    return value if value.is_absolute() else (base_dir / value).resolve()


def resolve_path_fields(base_dir: Path, config: ReportConfig) -> None:
    """Resolve relative ``output`` and ``working_dir`` entries against ``base_dir`` in place."""
    config.output = _resolved_path(base_dir, config.output)
    config.working_dir = _resolved_path(base_dir, config.working_dir)


def _read_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(path, exc) from exc


def _select_section(raw_map: dict[str, object]) -> dict[str, object]:
    tool_obj = raw_map.get("tool")
    if isinstance(tool_obj, dict):
        section = cast("dict[str, object]", tool_obj).get(TOOL_SECTION)
        if isinstance(section, dict):
            return cast("dict[str, object]", section)
    return raw_map


def _field_error(exc: ValidationError) -> ConfigValidationError | None:
    for err in exc.errors():
        inner = err.get("ctx", {}).get("error")
        if isinstance(inner, ConfigValidationError):
            return inner
    return None


def load_config(explicit_path: Path | None = None, *, search_dir: Path | None = None) -> ReportConfig:
    """Load buildreport configuration from a TOML file or fall back to defaults.

    Args:
        explicit_path: Configuration file to load. When given, no other
            location is searched and the file must exist.
        search_dir: Directory searched for the default file names; defaults to
            the current directory.

    Returns:
        The loaded configuration with relative paths resolved, or a default
        ``ReportConfig`` when no file was found.

    Raises:
        ConfigReadError: If the file cannot be read or is not valid TOML.
        ConfigFieldTypeError: If a field holds a value of the wrong type.
        ConfigFieldChoiceError: If a field holds an unsupported value.
        UnsupportedConfigVersionError: If ``config_version`` is not supported.
        InvalidConfigFileError: If the file contents fail any other validation.
    """
    if explicit_path is not None:
        search_order = [explicit_path]
    else:
        base = search_dir or Path()
        search_order = [base / name for name in CONFIG_FILENAMES]

    for candidate in search_order:
        if not candidate.exists():
            if explicit_path is not None:
                raise ConfigReadError(candidate, FileNotFoundError("file does not exist"))
            continue
        raw_map = _select_section(_read_toml(candidate))
        try:
            model = ReportConfigModel.model_validate(raw_map)
        except ValidationError as exc:
            field_error = _field_error(exc)
            if field_error is not None:
                logger.debug(
                    "Rejected configuration from %s",
                    candidate,
                    extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
                )
                raise field_error from exc
            raise InvalidConfigFileError(candidate, exc) from exc
        config = model_to_dataclass(model, source=candidate)
        resolve_path_fields(candidate.parent.resolve(), config)
        logger.debug(
            "Loaded configuration from %s",
            candidate,
            extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
        )
        return config
    return ReportConfig()


__all__ = ["load_config", "resolve_path_fields"]
