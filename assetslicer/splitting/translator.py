"""Translation of directory targeting into split targeting.

This module provides the TargetingTranslator class that turns an effective
targeting key into the ``ApkTargeting`` attached to a split. Each dimension
has its own converter; the per-dimension results are folded together with
``combine``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from functools import reduce
from typing import Any

from assetslicer.exceptions import MalformedTargetingError
from assetslicer.splitting.targeting import (
    ApkTargeting,
    DeviceTierTargeting,
    DirectoryTargeting,
    GraphicsApi,
    GraphicsApiTargeting,
    LanguageTargeting,
    OptimizationDimension,
    TextureCompressionFormat,
    TextureCompressionFormatTargeting,
    combine,
)

_LANGUAGE_PATTERN = re.compile(r'^[A-Za-z]{2,3}(?:-[A-Za-z0-9]{2,8})*$')
_GRAPHICS_API_PATTERN = re.compile(
    r'^(?P<api>[a-z]+)[_ ]?(?P<major>\d+)(?:\.(?P<minor>\d+))?$', re.IGNORECASE
)
_PACKED_GL_VERSION_PATTERN = re.compile(r'^0x[0-9a-f]+$', re.IGNORECASE)


def language_targeting(value: Any) -> ApkTargeting:
    """Convert a language tag such as ``en`` or ``pt-BR``."""
    if not isinstance(value, str) or not _LANGUAGE_PATTERN.match(value.strip()):
        raise ValueError(value)
    return ApkTargeting(language=LanguageTargeting(frozenset({value.strip()})))


def texture_compression_format_targeting(value: Any) -> ApkTargeting:
    """Convert a texture format token such as ``etc2`` or ``ASTC``."""
    if not isinstance(value, str):
        raise ValueError(value)
    fmt = TextureCompressionFormat.from_token(value)
    return ApkTargeting(
        texture_compression_format=TextureCompressionFormatTargeting(frozenset({fmt}))
    )


def parse_graphics_api(value: Any) -> GraphicsApi:
    """Parse a minimum graphics API version.

    Accepted forms are ``opengl_3.0``, ``vulkan_1.1`` and the packed OpenGL ES
    version (``0x30000`` or its integer value) where the major version sits
    in the high 16 bits and the minor version in the low 16 bits.

    Raises:
        ValueError: If the value matches none of the forms.
    """
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, int):
        return _unpack_gl_version(value)
    if not isinstance(value, str):
        raise ValueError(value)

    text = value.strip()
    if _PACKED_GL_VERSION_PATTERN.match(text):
        return _unpack_gl_version(int(text, 16))

    match = _GRAPHICS_API_PATTERN.match(text)
    if not match:
        raise ValueError(value)
    api = match.group('api').lower()
    if api not in GraphicsApi.SUPPORTED_APIS:
        raise ValueError(value)
    return GraphicsApi(api, int(match.group('major')), int(match.group('minor') or 0))


def _unpack_gl_version(packed: int) -> GraphicsApi:
    major, minor = packed >> 16, packed & 0xFFFF
    if major <= 0:
        raise ValueError(packed)
    return GraphicsApi('opengl', major, minor)


def graphics_api_targeting(value: Any) -> ApkTargeting:
    """Convert a minimum graphics API version."""
    return ApkTargeting(
        graphics_api=GraphicsApiTargeting(frozenset({parse_graphics_api(value)}))
    )


def device_tier_targeting(value: Any) -> ApkTargeting:
    """Convert a non-negative device tier given as int or digit string."""
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or value < 0:
        raise ValueError(value)
    return ApkTargeting(device_tier=DeviceTierTargeting(frozenset({value})))


CONVERTERS: dict[OptimizationDimension, Callable[[Any], ApkTargeting]] = {
    OptimizationDimension.LANGUAGE: language_targeting,
    OptimizationDimension.TEXTURE_COMPRESSION_FORMAT: texture_compression_format_targeting,
    OptimizationDimension.GRAPHICS_API: graphics_api_targeting,
    OptimizationDimension.DEVICE_TIER: device_tier_targeting,
}


class TargetingTranslator:
    """Translates directory targeting into split targeting.

    Every value reachable from a directory either converts or raises
    ``MalformedTargetingError``; nothing is dropped silently.

    Example:
        >>> translator = TargetingTranslator()
        >>> translator.translate(DirectoryTargeting(language='es'))
        ApkTargeting(language=LanguageTargeting(values=frozenset({'es'})), ...)
    """

    def __init__(
        self,
        converters: dict[OptimizationDimension, Callable[[Any], ApkTargeting]]
        | None = None,
    ):
        """Initialize the translator.

        Args:
            converters: Per-dimension converters. Defaults to ``CONVERTERS``.
        """
        self.converters = dict(CONVERTERS if converters is None else converters)

    def translate(
        self, key: DirectoryTargeting, directory: str | None = None
    ) -> ApkTargeting:
        """Translate an effective targeting key.

        Args:
            key: The (projected) directory targeting.
            directory: Directory path used in error messages.

        Returns:
            The combined ApkTargeting; the default instance for an empty key.

        Raises:
            MalformedTargetingError: If a value is outside its dimension's domain.
            ConflictingTargetingError: If two converters assign clashing values.
        """
        parts = [
            self._convert(dimension, value, directory)
            for dimension, value in key.items()
        ]
        return reduce(combine, parts, ApkTargeting())

    def validate(self, targeting: DirectoryTargeting, directory: str | None = None):
        """Check every declared value, whether or not its dimension is enabled.

        Raises:
            MalformedTargetingError: If a value is outside its dimension's domain.
        """
        self.translate(targeting, directory)

    def _convert(
        self, dimension: OptimizationDimension, value: Any, directory: str | None
    ) -> ApkTargeting:
        converter = self.converters.get(dimension)
        if converter is None:
            raise MalformedTargetingError(dimension.value, value, directory)
        try:
            return converter(value)
        except ValueError:
            raise MalformedTargetingError(dimension.value, value, directory) from None


def translate_targeting(key: DirectoryTargeting) -> ApkTargeting:
    """Convenience function to translate one key with the default converters."""
    return TargetingTranslator().translate(key)
