"""Dimension-based splitting of an asset module.

This module provides the AssetModuleSplitter class, the entry point that runs
the whole pipeline for one module: validate directory targeting, project it
onto the enabled dimensions, group directories, translate each group's key
and assemble the splits.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from assetslicer.splitting.assembler import ModuleSplit, SplitAssembler
from assetslicer.splitting.grouper import DirectoryGrouper
from assetslicer.splitting.projector import DimensionProjector
from assetslicer.splitting.targeting import OptimizationDimension
from assetslicer.splitting.translator import TargetingTranslator

if TYPE_CHECKING:
    from assetslicer.config import SplitConfig
    from assetslicer.model import AssetModule

logger = logging.getLogger(__name__)


class AssetModuleSplitter:
    """Splits one asset module by its enabled optimization dimensions.

    The splitter holds no state between calls and never modifies the module;
    the same module and dimensions always produce the same split list.

    Example:
        >>> from assetslicer.config import SplitConfig
        >>> config = SplitConfig(optimization_dimensions=['language'])
        >>> splits = AssetModuleSplitter(module, config).split_module()
        >>> [s.split_id for s in splits]
        ['assets', 'assets.config.es', 'assets.config.en']
    """

    def __init__(
        self,
        module: AssetModule,
        config: SplitConfig | Iterable[OptimizationDimension | str] | None = None,
    ):
        """Initialize the splitter.

        Args:
            module: The module to split.
            config: A SplitConfig, or the enabled dimensions directly. None
                enables no dimension.
        """
        self.module = module
        if config is None:
            enabled: Iterable[OptimizationDimension | str] = ()
        elif hasattr(config, 'enabled_dimensions'):
            enabled = config.enabled_dimensions
        else:
            enabled = config

        self.projector = DimensionProjector(enabled)
        self.translator = TargetingTranslator()
        self.grouper = DirectoryGrouper(self.projector)
        self.assembler = SplitAssembler(self.translator)

    @property
    def enabled_dimensions(self) -> frozenset[OptimizationDimension]:
        return self.projector.enabled_dimensions

    def split_module(self) -> list[ModuleSplit]:
        """Compute the module's splits.

        Returns:
            The splits, master first, remaining splits in first-seen order.

        Raises:
            MalformedTargetingError: If any directory declares a value outside
                its dimension's domain.
            ConflictingTargetingError: If a key cannot be translated without
                clashing values.
            SplitInvariantError: If the result breaks a split invariant.
        """
        for directory in self.module.directories:
            self.translator.validate(directory.targeting, directory.path)

        groups = self.grouper.group(self.module)
        splits = self.assembler.assemble(self.module.name, groups.values())

        logger.info(
            "Split module '%s' (%d directories, dimensions: %s) into %d splits",
            self.module.name,
            len(self.module.directories),
            ', '.join(sorted(d.value for d in self.enabled_dimensions)) or 'none',
            len(splits),
        )
        return splits


def split_module(
    module: AssetModule,
    enabled_dimensions: SplitConfig | Iterable[OptimizationDimension | str] = (),
) -> list[ModuleSplit]:
    """Convenience function to split a module.

    Args:
        module: The module to split.
        enabled_dimensions: Dimensions to split on, or a SplitConfig.

    Returns:
        The splits, master first.
    """
    return AssetModuleSplitter(module, enabled_dimensions).split_module()
