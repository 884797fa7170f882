import json
import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from assetslicer.exceptions import ConfigurationError
from assetslicer.splitting.targeting import OptimizationDimension

DEFAULT_FILENAMES = ['slicer.yaml', 'slicer.yml']

ENV_SOURCE = 'SLICER_SOURCE'
ENV_OUTPUT = 'SLICER_OUTPUT'
ENV_DIMENSIONS = 'SLICER_DIMENSIONS'

_ENV_VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::-([^}]*))?\}')


class SplitConfig(BaseModel):
    """Which optimization dimensions the build splits asset modules on."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    optimization_dimensions: list[OptimizationDimension] = Field(
        default_factory=list,
        description='Dimensions to produce separate splits for. Empty means '
        'every module yields a single master split.',
    )

    @field_validator('optimization_dimensions', mode='before')
    @classmethod
    def _normalize_dimensions(cls, value: Any) -> list[OptimizationDimension]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [part for part in value.split(',') if part.strip()]

        result: list[OptimizationDimension] = []
        for item in value:
            dimension = OptimizationDimension.parse(item)
            if dimension not in result:
                result.append(dimension)
        return result

    @property
    def enabled_dimensions(self) -> frozenset[OptimizationDimension]:
        return frozenset(self.optimization_dimensions)


class ModuleConfig(BaseModel):
    """Represents a single module description to be split."""

    model_config = ConfigDict(extra='forbid')

    source: str = Field(..., description='Path or URL to the module description.')

    output: str = Field(..., description='Output directory for the split plan.')

    name: str | None = Field(
        None, description='Optional override for the module name in the description.'
    )

    @field_validator('source', 'output')
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError('must not be empty')
        return value


class SlicerConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='SLICER_')

    modules: list[ModuleConfig] = Field(
        ..., min_length=1, description='List of module descriptions to process.'
    )

    split: SplitConfig = Field(
        default_factory=SplitConfig, description='Split dimension settings.'
    )

    emit_plan: bool = Field(
        True, description='Whether to write a split plan file for every module.'
    )


def _expand_env_vars(value: str) -> str:
    """Expand ``${VAR}`` and ``${VAR:-default}`` references in a string."""

    def replace(match: re.Match) -> str:
        name, default = match.group(1), match.group(2)
        return os.environ.get(name) or (default if default is not None else '')

    return _ENV_VAR_PATTERN.sub(replace, value)


def _expand_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return _expand_env_vars(data)
    if isinstance(data, dict):
        return {k: _expand_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars_recursive(v) for v in data]
    return data


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text()) or {}


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text())


def _load_file(path: str | Path) -> dict:
    if str(path).endswith('.json'):
        return load_json(path)
    return load_yaml(path)


def _config_from_env() -> SlicerConfig | None:
    source = os.environ.get(ENV_SOURCE)
    output = os.environ.get(ENV_OUTPUT)
    if not source or not output:
        return None

    try:
        return SlicerConfig(
            modules=[ModuleConfig(source=source, output=output)],
            split=SplitConfig(
                optimization_dimensions=os.environ.get(ENV_DIMENSIONS) or []
            ),
        )
    except ValidationError as e:
        first = e.errors()[0]
        if 'optimization_dimensions' in first['loc']:
            variable = ENV_DIMENSIONS
        elif 'output' in first['loc']:
            variable = ENV_OUTPUT
        else:
            variable = ENV_SOURCE
        raise ConfigurationError(
            f'Invalid configuration from environment: {first["msg"]}',
            field=variable,
        ) from e


def _validate(data: Any, config_path: str | Path) -> SlicerConfig:
    try:
        return SlicerConfig.model_validate(_expand_env_vars_recursive(data))
    except ValidationError as e:
        first = e.errors()[0]
        raise ConfigurationError(
            f'Invalid configuration: {first["msg"]}',
            config_path=str(config_path),
            field='.'.join(str(p) for p in first['loc']) or None,
        ) from e


def get_config(path: str | None = None) -> SlicerConfig:
    """Load configuration from a file or from the environment.

    Lookup order: the explicit path, ``slicer.yaml``/``slicer.yml`` in the
    current directory, ``[tool.assetslicer]`` in ``pyproject.toml``, then
    the ``SLICER_SOURCE``/``SLICER_OUTPUT`` environment variables.

    Raises:
        FileNotFoundError: If no configuration can be found.
        ConfigurationError: If the configuration found is invalid.
    """
    if path:
        if not Path(path).exists():
            raise FileNotFoundError(f'config not found: {path}')
        return _validate(_load_file(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        path = Path(cwd) / filename
        if path.exists():
            return _validate(load_yaml(path), path)

    path = Path(cwd) / 'pyproject.toml'

    if path.exists():
        import tomllib

        pyproject = tomllib.loads(path.read_text())
        tools = pyproject.get('tool', {})

        if 'assetslicer' in tools:
            return _validate(tools['assetslicer'], path)

    config = _config_from_env()
    if config is not None:
        return config

    raise FileNotFoundError('config not found')


def create_default_config() -> dict:
    """Return a starter configuration as a plain dict."""
    return {
        'modules': [
            {
                'source': './assets_module.yaml',
                'output': './splits',
            }
        ],
        'split': {
            'optimization_dimensions': ['language', 'texture_compression_format'],
        },
        'emit_plan': True,
    }
