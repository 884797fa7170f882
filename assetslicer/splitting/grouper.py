"""Grouping of asset directories by effective targeting key.

This module provides the SplitGroup dataclass and the DirectoryGrouper class
that partition a module's directories into groups sharing the same effective
targeting key, merging their files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from assetslicer.splitting.projector import DimensionProjector
from assetslicer.splitting.targeting import DirectoryTargeting

if TYPE_CHECKING:
    from assetslicer.model import AssetModule, TargetedDirectory

logger = logging.getLogger(__name__)


@dataclass
class SplitGroup:
    """Files of every directory that shares one effective targeting key.

    Attributes:
        key: The effective targeting key shared by all member directories.
        files: Concatenated files of the member directories, in order.
        directories: Paths of the member directories, in listing order.
    """

    key: DirectoryTargeting
    files: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)

    @property
    def is_default(self) -> bool:
        return self.key.is_default

    def add_directory(self, directory: TargetedDirectory) -> None:
        self.directories.append(directory.path)
        self.files.extend(directory.files)


class DirectoryGrouper:
    """Partitions a module's directories by effective targeting key.

    Groups are returned in first-seen key order, so the same module always
    yields the same group order.

    Example:
        >>> grouper = DirectoryGrouper(DimensionProjector({'language'}))
        >>> groups = grouper.group(module)
        >>> [str(key) for key in groups]
        ['<default>', 'language=es', 'language=en']
    """

    def __init__(self, projector: DimensionProjector):
        """Initialize the grouper.

        Args:
            projector: Projector used to compute each directory's key.
        """
        self.projector = projector

    def group(self, module: AssetModule) -> dict[DirectoryTargeting, SplitGroup]:
        """Group the module's directories.

        Args:
            module: The module to partition.

        Returns:
            Insertion-ordered mapping of effective key to SplitGroup.
        """
        groups: dict[DirectoryTargeting, SplitGroup] = {}

        for directory in module.directories:
            key = self.projector.project(directory.targeting)

            group = groups.get(key)
            if group is None:
                group = groups[key] = SplitGroup(key=key)
            else:
                logger.debug(
                    "Directory '%s' joins group %s of module '%s'",
                    directory.path,
                    key,
                    module.name,
                )
            group.add_directory(directory)

        return groups


def group_directories(
    module: AssetModule,
    projector: DimensionProjector,
) -> dict[DirectoryTargeting, SplitGroup]:
    """Convenience function to group a module's directories."""
    return DirectoryGrouper(projector).group(module)
