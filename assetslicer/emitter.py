"""Split plan emitter.

This module provides the SplitPlanEmitter class that writes the ordered split
list of a module to a JSON plan file. The plan is what the archive serializer
consumes: the first entry is the master split, every other entry carries the
targeting and suffix its archive is named by.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from upath import UPath

from assetslicer.exceptions import OutputError

if TYPE_CHECKING:
    from assetslicer.model import AssetModule
    from assetslicer.splitting.assembler import ModuleSplit

logger = logging.getLogger(__name__)

PLAN_VERSION = 1


@dataclass
class EmittedPlan:
    """Information about a written split plan.

    Attributes:
        path: The file path where the plan was written.
        module_name: The module the plan describes.
        split_ids: Ids of the splits in the plan, master first.
    """

    path: Path | UPath
    module_name: str
    split_ids: list[str] = field(default_factory=list)


class SplitPlanEmitter:
    """Writes ``<module>.splits.json`` plan files into an output directory.

    Example:
        >>> emitter = SplitPlanEmitter('./splits')
        >>> plan = emitter.emit(module, splits)
        >>> plan.path
        PosixUPath('splits/assets.splits.json')
    """

    def __init__(self, output_dir: str | Path | UPath, indent: int | None = 2):
        """Initialize the emitter.

        Args:
            output_dir: Directory (local path or fsspec URL) to write plans to.
            indent: JSON indentation; None writes compact JSON.
        """
        self.output_dir = UPath(output_dir)
        self.indent = indent

    def plan_path(self, module_name: str) -> UPath:
        return self.output_dir / f'{module_name}.splits.json'

    def render(self, module: AssetModule, splits: list[ModuleSplit]) -> dict:
        """Build the plan document without writing it."""
        return {
            'version': PLAN_VERSION,
            'module': module.name,
            'file_count': sum(len(split.files) for split in splits),
            'splits': [split.to_dict() for split in splits],
        }

    def emit(self, module: AssetModule, splits: list[ModuleSplit]) -> EmittedPlan:
        """Write the plan for one module.

        Args:
            module: The module that was split.
            splits: Its splits, master first.

        Returns:
            An EmittedPlan describing what was written.

        Raises:
            OutputError: If the plan cannot be written.
        """
        path = self.plan_path(module.name)
        content = json.dumps(self.render(module, splits), indent=self.indent)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content + '\n', encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e)

        logger.info("Wrote split plan for module '%s' to %s", module.name, path)
        return EmittedPlan(
            path=path,
            module_name=module.name,
            split_ids=[split.split_id for split in splits],
        )
