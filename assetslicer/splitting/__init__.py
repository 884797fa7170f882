"""Dimension-based asset splitting for assetslicer.

This package provides the pipeline that partitions an asset module's
directories into device-targeted splits.

Classes:
    DimensionProjector: Restricts directory targeting to enabled dimensions.
    DirectoryGrouper: Groups directories by effective targeting key.
    TargetingTranslator: Converts a key into split targeting.
    SplitAssembler: Builds the ordered split list with the master first.
    AssetModuleSplitter: Runs the whole pipeline for one module.
"""

from assetslicer.splitting.assembler import ModuleSplit, SplitAssembler, SplitType
from assetslicer.splitting.grouper import DirectoryGrouper, SplitGroup, group_directories
from assetslicer.splitting.projector import DimensionProjector, project_targeting
from assetslicer.splitting.splitter import AssetModuleSplitter, split_module
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
from assetslicer.splitting.translator import TargetingTranslator, translate_targeting

__all__ = [
    'ApkTargeting',
    'AssetModuleSplitter',
    'DeviceTierTargeting',
    'DimensionProjector',
    'DirectoryGrouper',
    'DirectoryTargeting',
    'GraphicsApi',
    'GraphicsApiTargeting',
    'LanguageTargeting',
    'ModuleSplit',
    'OptimizationDimension',
    'SplitAssembler',
    'SplitGroup',
    'SplitType',
    'TargetingTranslator',
    'TextureCompressionFormat',
    'TextureCompressionFormatTargeting',
    'combine',
    'group_directories',
    'project_targeting',
    'split_module',
    'translate_targeting',
]
