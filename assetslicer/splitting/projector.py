"""Projection of directory targeting onto the enabled optimization dimensions.

This module provides the DimensionProjector class that reduces a directory's
declared targeting to its effective targeting key: the targeting restricted
to the dimensions the build actually optimizes for.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from assetslicer.splitting.targeting import DirectoryTargeting, OptimizationDimension


class DimensionProjector:
    """Strips disabled dimensions from directory targeting.

    Assignments on disabled dimensions are dropped, so directories that only
    differ on such a dimension end up with the same key. An enabled dimension
    the directory does not assign stays absent.

    Example:
        >>> projector = DimensionProjector({OptimizationDimension.LANGUAGE})
        >>> key = projector.project(
        ...     DirectoryTargeting(language='en', texture_compression_format='etc2')
        ... )
        >>> key
        DirectoryTargeting(language='en', texture_compression_format=None, graphics_api=None, device_tier=None)
    """

    def __init__(self, enabled_dimensions: Iterable[OptimizationDimension | str]):
        """Initialize the projector.

        Args:
            enabled_dimensions: Dimensions to keep. Strings are parsed with
                ``OptimizationDimension.parse``.
        """
        self.enabled_dimensions = frozenset(
            OptimizationDimension.parse(d) for d in enabled_dimensions
        )
        self._disabled = [
            d for d in OptimizationDimension if d not in self.enabled_dimensions
        ]

    def project(self, targeting: DirectoryTargeting) -> DirectoryTargeting:
        """Return the effective targeting key for a directory targeting."""
        cleared = {
            d.value: None for d in self._disabled if targeting.get(d) is not None
        }
        if not cleared:
            return targeting
        return dataclasses.replace(targeting, **cleared)

    def is_enabled(self, dimension: OptimizationDimension) -> bool:
        return dimension in self.enabled_dimensions


def project_targeting(
    targeting: DirectoryTargeting,
    enabled_dimensions: Iterable[OptimizationDimension | str],
) -> DirectoryTargeting:
    """Convenience function to project a single targeting.

    Args:
        targeting: The directory's declared targeting.
        enabled_dimensions: Dimensions to keep.

    Returns:
        The effective targeting key.
    """
    return DimensionProjector(enabled_dimensions).project(targeting)
