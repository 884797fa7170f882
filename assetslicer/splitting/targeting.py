"""Targeting value types for asset directories and produced splits.

Two record types live here. ``DirectoryTargeting`` is what a module declares
for one of its asset directories: one optional raw value per optimization
dimension, exactly as it arrived from upstream. ``ApkTargeting`` is the
output schema attached to a split: one optional, typed sub-targeting per
dimension. Both are frozen and compare structurally, so they can be used as
dictionary keys.

``combine`` is the only way two ``ApkTargeting`` values are merged.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar

from assetslicer.exceptions import ConflictingTargetingError, MalformedTargetingError


class OptimizationDimension(str, Enum):
    """Device characteristics a build may split asset directories on."""

    LANGUAGE = 'language'
    TEXTURE_COMPRESSION_FORMAT = 'texture_compression_format'
    GRAPHICS_API = 'graphics_api'
    DEVICE_TIER = 'device_tier'

    @classmethod
    def parse(cls, value: str | OptimizationDimension) -> OptimizationDimension:
        """Parse a dimension from a name, enum member name or short alias.

        Args:
            value: e.g. ``"language"``, ``"LANGUAGE"``, ``"tcf"``, ``"device-tier"``.

        Returns:
            The matching OptimizationDimension.

        Raises:
            ValueError: If the value names no known dimension.
        """
        if isinstance(value, OptimizationDimension):
            return value
        normalized = str(value).strip().lower().replace('-', '_').replace(' ', '_')
        normalized = _DIMENSION_ALIASES.get(normalized, normalized)
        return cls(normalized)


_DIMENSION_ALIASES = {
    'lang': 'language',
    'tcf': 'texture_compression_format',
    'texture_format': 'texture_compression_format',
    'graphics': 'graphics_api',
    'opengl': 'graphics_api',
    'tier': 'device_tier',
}


class TextureCompressionFormat(Enum):
    """Texture compression formats, valued by their directory token."""

    ETC1_RGB8 = 'etc1'
    PALETTED = 'paletted'
    THREE_DC = '3dc'
    ATC = 'atc'
    LATC = 'latc'
    DXT1 = 'dxt1'
    S3TC = 's3tc'
    PVRTC = 'pvrtc'
    ASTC = 'astc'
    ETC2 = 'etc2'

    @property
    def token(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: str) -> TextureCompressionFormat:
        """Look up a format by directory token or member name, ignoring case.

        Raises:
            ValueError: If the token is not a known format.
        """
        text = str(token).strip()
        try:
            return cls(text.lower())
        except ValueError:
            pass
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f'unknown texture compression format: {token!r}') from None


@dataclass(frozen=True, order=True)
class GraphicsApi:
    """A minimum graphics API version, e.g. OpenGL ES 3.0 or Vulkan 1.1."""

    api: str
    major: int
    minor: int = 0

    SUPPORTED_APIS: ClassVar[tuple[str, ...]] = ('opengl', 'vulkan')

    def __str__(self) -> str:
        return f'{self.api}_{self.major}.{self.minor}'


@dataclass(frozen=True)
class DirectoryTargeting:
    """Raw targeting declared by one asset directory.

    Field names match ``OptimizationDimension`` values. A missing field means
    the directory applies to every value of that dimension. Values are kept
    as declared; ``TargetingTranslator`` checks them against each dimension's
    domain.
    """

    language: str | None = None
    texture_compression_format: str | None = None
    graphics_api: str | None = None
    device_tier: int | str | None = None

    @classmethod
    def from_mapping(cls, mapping: dict[str, Any] | None) -> DirectoryTargeting:
        """Build a targeting from a ``{dimension: value}`` mapping.

        Keys may be any spelling accepted by ``OptimizationDimension.parse``.
        ``None`` values are treated as absent.

        Raises:
            MalformedTargetingError: If a key names no known dimension.
            ConflictingTargetingError: If two keys alias one dimension with
                different values.
        """
        if not mapping:
            return cls()

        values: dict[str, Any] = {}
        for key, value in mapping.items():
            try:
                dimension = OptimizationDimension.parse(key)
            except ValueError:
                raise MalformedTargetingError('dimension', key) from None
            if value is None:
                continue
            previous = values.get(dimension.value)
            if previous is not None and previous != value:
                raise ConflictingTargetingError(dimension.value, previous, value)
            values[dimension.value] = value
        return cls(**values)

    def get(self, dimension: OptimizationDimension) -> Any:
        return getattr(self, dimension.value)

    def dimensions(self) -> list[OptimizationDimension]:
        """Dimensions this directory assigns a value to, in enum order."""
        return [d for d in OptimizationDimension if self.get(d) is not None]

    def items(self) -> list[tuple[OptimizationDimension, Any]]:
        return [(d, self.get(d)) for d in self.dimensions()]

    @property
    def is_default(self) -> bool:
        return not self.dimensions()

    def __str__(self) -> str:
        if self.is_default:
            return '<default>'
        return ','.join(f'{d.value}={v}' for d, v in self.items())


@dataclass(frozen=True)
class _ValueTargeting:
    """Shared behaviour of the per-dimension output sub-targetings."""

    values: frozenset = frozenset()

    def sorted_values(self) -> list:
        return sorted(self.values, key=self._sort_key)

    def to_list(self) -> list:
        return [self._serialize(v) for v in self.sorted_values()]

    def suffix(self) -> str:
        return '_'.join(self._suffix_token(v) for v in self.sorted_values())

    @staticmethod
    def _sort_key(value):
        return str(value)

    @staticmethod
    def _serialize(value):
        return value

    @staticmethod
    def _suffix_token(value) -> str:
        return str(value)


@dataclass(frozen=True)
class LanguageTargeting(_ValueTargeting):
    values: frozenset[str] = frozenset()


@dataclass(frozen=True)
class TextureCompressionFormatTargeting(_ValueTargeting):
    values: frozenset[TextureCompressionFormat] = frozenset()

    @staticmethod
    def _sort_key(value):
        return value.token

    @staticmethod
    def _serialize(value):
        return value.token

    @staticmethod
    def _suffix_token(value) -> str:
        return value.token


@dataclass(frozen=True)
class GraphicsApiTargeting(_ValueTargeting):
    values: frozenset[GraphicsApi] = frozenset()

    @staticmethod
    def _sort_key(value):
        return value

    @staticmethod
    def _serialize(value):
        return str(value)


@dataclass(frozen=True)
class DeviceTierTargeting(_ValueTargeting):
    values: frozenset[int] = frozenset()

    @staticmethod
    def _sort_key(value):
        return value

    @staticmethod
    def _suffix_token(value) -> str:
        return f'tier_{value}'


def _dimension_field(dimension: OptimizationDimension):
    return field(default=None, metadata={'dimension': dimension})


@dataclass(frozen=True)
class ApkTargeting:
    """Targeting attached to a produced split.

    The default instance, with every sub-targeting absent, is the targeting
    of the master split.
    """

    language: LanguageTargeting | None = _dimension_field(
        OptimizationDimension.LANGUAGE
    )
    texture_compression_format: TextureCompressionFormatTargeting | None = (
        _dimension_field(OptimizationDimension.TEXTURE_COMPRESSION_FORMAT)
    )
    graphics_api: GraphicsApiTargeting | None = _dimension_field(
        OptimizationDimension.GRAPHICS_API
    )
    device_tier: DeviceTierTargeting | None = _dimension_field(
        OptimizationDimension.DEVICE_TIER
    )

    def get(self, dimension: OptimizationDimension) -> _ValueTargeting | None:
        return getattr(self, dimension.value)

    def dimensions(self) -> list[OptimizationDimension]:
        return [d for d in OptimizationDimension if self.get(d) is not None]

    @property
    def is_default(self) -> bool:
        return not self.dimensions()

    @property
    def suffix(self) -> str:
        """Name qualifier for a split carrying this targeting.

        Empty for the default targeting; otherwise the per-dimension suffixes
        joined with underscores in dimension order, e.g. ``es_etc2``.
        """
        return '_'.join(self.get(d).suffix() for d in self.dimensions())

    def to_dict(self) -> dict[str, list]:
        """JSON-friendly view keyed by dimension name, present dimensions only."""
        return {d.value: self.get(d).to_list() for d in self.dimensions()}

    def __str__(self) -> str:
        if self.is_default:
            return '<default>'
        return ', '.join(
            f'{dimension}={"|".join(str(v) for v in values)}'
            for dimension, values in self.to_dict().items()
        )


def combine(left: ApkTargeting, right: ApkTargeting) -> ApkTargeting:
    """Merge two output targetings dimension by dimension.

    An absent sub-targeting yields to a present one and equal sub-targetings
    merge to themselves.

    Args:
        left: First targeting.
        right: Second targeting.

    Returns:
        The union of both targetings.

    Raises:
        ConflictingTargetingError: If both sides assign different values to
            the same dimension.
    """
    merged: dict[str, Any] = {}
    for f in fields(ApkTargeting):
        left_value = getattr(left, f.name)
        right_value = getattr(right, f.name)
        if left_value is None:
            merged[f.name] = right_value
        elif right_value is None or left_value == right_value:
            merged[f.name] = left_value
        else:
            raise ConflictingTargetingError(
                f.metadata['dimension'].value,
                left_value.to_list(),
                right_value.to_list(),
            )
    return ApkTargeting(**merged)
