"""assetslicer - Split asset modules into device-targeted delivery units.

assetslicer takes an asset module whose directories carry device targeting
(language, texture compression format, graphics API, device tier) and
partitions its files into splits for the optimization dimensions a build
enables. Every file lands in exactly one split, and exactly one split, the
master, is untargeted and comes first.

Quick Start:
    >>> from assetslicer import AssetModule, DirectoryTargeting, split_module
    >>>
    >>> module = AssetModule.from_files(
    ...     'assets',
    ...     ['assets/images/a.jpg', 'assets/images#lang_en/a.jpg'],
    ...     {'assets/images#lang_en': DirectoryTargeting(language='en')},
    ... )
    >>> [s.split_id for s in split_module(module, ['language'])]
    ['assets', 'assets.config.en']

CLI Usage:
    $ assetslicer split --config slicer.yaml
    $ assetslicer show ./assets_module.yaml -d language
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _package_version

from assetslicer.config import ModuleConfig, SlicerConfig, SplitConfig, get_config
from assetslicer.emitter import EmittedPlan, SplitPlanEmitter
from assetslicer.exceptions import (
    AssetSlicerError,
    ConfigurationError,
    ConflictingTargetingError,
    MalformedTargetingError,
    ModuleError,
    ModuleLoadError,
    ModuleValidationError,
    OutputError,
    SplitInvariantError,
    TargetingError,
)
from assetslicer.loader import ModuleLoader, load_module
from assetslicer.model import AssetModule, TargetedDirectory
from assetslicer.splitting import (
    ApkTargeting,
    AssetModuleSplitter,
    DirectoryTargeting,
    ModuleSplit,
    OptimizationDimension,
    TextureCompressionFormat,
    combine,
    split_module,
)

__all__ = [
    # Main classes
    'AssetModule',
    'TargetedDirectory',
    'AssetModuleSplitter',
    'ModuleSplit',
    'ModuleLoader',
    'SplitPlanEmitter',
    'EmittedPlan',
    'split_module',
    'load_module',
    # Targeting
    'ApkTargeting',
    'DirectoryTargeting',
    'OptimizationDimension',
    'TextureCompressionFormat',
    'combine',
    # Configuration
    'SlicerConfig',
    'SplitConfig',
    'ModuleConfig',
    'get_config',
    # Exceptions
    'AssetSlicerError',
    'TargetingError',
    'MalformedTargetingError',
    'ConflictingTargetingError',
    'SplitInvariantError',
    'ModuleError',
    'ModuleLoadError',
    'ModuleValidationError',
    'ConfigurationError',
    'OutputError',
]

try:
    __version__ = _package_version('assetslicer')
except PackageNotFoundError:
    __version__ = 'unknown'
