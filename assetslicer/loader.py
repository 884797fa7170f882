"""Module description loading.

This module provides the ModuleLoader class that reads an asset module
description from a URL or a local YAML/JSON file and turns it into an
``AssetModule``. A description lists the module's files and the targeting
of any targeted directory:

    name: assets
    files:
      - assets/images/image.jpg
      - assets/images#lang_en/image.jpg
    directories:
      assets/images#lang_en:
        language: en
"""

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from assetslicer.exceptions import AssetSlicerError, ModuleLoadError, ModuleValidationError
from assetslicer.model import AssetModule
from assetslicer.splitting.targeting import DirectoryTargeting

logger = logging.getLogger(__name__)

_YAML_BOOL_TAG = 'tag:yaml.org,2002:bool'


class _DescriptionLoader(yaml.SafeLoader):
    """SafeLoader that keeps YAML 1.1 booleans (``no``, ``on``, ...) as strings.

    Descriptions have no boolean fields, while ``no`` is the Norwegian
    language tag.
    """


_DescriptionLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class ModuleDescription(BaseModel):
    """Validated shape of a module description document."""

    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., min_length=1)
    files: list[str] = Field(default_factory=list)
    directories: dict[str, dict[str, Any] | None] = Field(default_factory=dict)

    @field_validator('directories')
    @classmethod
    def _no_boolean_values(
        cls, value: dict[str, dict[str, Any] | None]
    ) -> dict[str, dict[str, Any] | None]:
        for path, targeting in value.items():
            for dimension, item in (targeting or {}).items():
                if isinstance(item, bool):
                    raise ValueError(
                        f"boolean {dimension} value {item!r} for '{path}'; "
                        'quote the value'
                    )
        return value


class ModuleLoader:
    """Loads asset module descriptions from URLs or file paths.

    Example:
        >>> loader = ModuleLoader()
        >>> module = loader.load('./assets_module.yaml')
        >>> # or
        >>> module = loader.load('https://example.com/modules/assets.json')
    """

    def __init__(self, http_client: httpx.Client | None = None):
        """Initialize the module loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
                        If not provided, a default client will be created.
        """
        self._http_client = http_client

    def load(self, source: str, name: str | None = None) -> AssetModule:
        """Load an asset module from a URL or file path.

        Args:
            source: URL or file path to the module description.
            name: Optional module name overriding the one in the description.

        Returns:
            The AssetModule described by the source.

        Raises:
            ModuleLoadError: If the description cannot be read or parsed.
            ModuleValidationError: If the description has the wrong shape.
            MalformedTargetingError: If a directory names an unknown dimension.
        """
        try:
            if self._is_url(source):
                content = self._load_from_url(source)
            else:
                content = self._load_from_file(source)

            return self.build(content, source, name)

        except AssetSlicerError:
            raise
        except Exception as e:
            raise ModuleLoadError(source, cause=e)

    def build(
        self, content: Any, source: str = '<memory>', name: str | None = None
    ) -> AssetModule:
        """Build an AssetModule from an already parsed description."""
        if not isinstance(content, dict):
            raise ModuleValidationError(source, ['description must be a mapping'])

        try:
            description = ModuleDescription.model_validate(content)
        except ValidationError as e:
            raise ModuleValidationError(
                source,
                [f'{".".join(str(p) for p in err["loc"])}: {err["msg"]}' for err in e.errors()],
            )

        targeting = {
            path.strip('/'): DirectoryTargeting.from_mapping(values)
            for path, values in description.directories.items()
        }
        module = AssetModule.from_files(
            name or description.name, description.files, targeting
        )

        unused = set(targeting) - {d.path for d in module.directories}
        for path in sorted(unused):
            logger.warning(
                "Targeted directory '%s' of module '%s' has no files", path, module.name
            )

        return module

    def _is_url(self, text: str) -> bool:
        """Check if a string is a URL."""
        try:
            result = urlparse(text)
            return result.scheme in ('http', 'https') and bool(result.netloc)
        except ValueError:
            return False

    def _load_from_url(self, url: str) -> Any:
        if self._http_client is not None:
            response = self._http_client.get(url)
        else:
            with httpx.Client() as client:
                response = client.get(url)
        response.raise_for_status()
        return self._parse_content(response.text, url)

    def _load_from_file(self, file_path: str) -> Any:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f'File not found: {file_path}')
        return self._parse_content(path.read_text(encoding='utf-8'), file_path)

    def _parse_content(self, text: str, source: str) -> Any:
        """Parse JSON or YAML content, choosing by extension first."""
        if source.endswith('.json'):
            return json.loads(text)
        if source.endswith(('.yaml', '.yml')):
            return yaml.load(text, Loader=_DescriptionLoader)
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return yaml.load(text, Loader=_DescriptionLoader)


def load_module(source: str, name: str | None = None) -> AssetModule:
    """Convenience function to load a module description."""
    return ModuleLoader().load(source, name)
