"""Assembly of grouped directories into splits.

This module provides the ModuleSplit dataclass and the SplitAssembler class
that turns each group of directories into one split, places the master split
first and checks the result before handing it on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from assetslicer.exceptions import SplitInvariantError
from assetslicer.splitting.targeting import ApkTargeting
from assetslicer.splitting.translator import TargetingTranslator

if TYPE_CHECKING:
    from assetslicer.splitting.grouper import SplitGroup

logger = logging.getLogger(__name__)


class SplitType(str, Enum):
    """Kind of delivery unit produced."""

    ASSET_SLICE = 'asset_slice'


@dataclass(frozen=True)
class ModuleSplit:
    """One delivery unit of a module.

    Attributes:
        module_name: Name of the module the split belongs to.
        apk_targeting: Device targeting of the split.
        master: Whether this is the split every device receives.
        files: Files carried by the split, in order.
        directories: Source directories the files came from.
        split_type: Kind of split.
    """

    module_name: str
    apk_targeting: ApkTargeting
    master: bool
    files: tuple[str, ...] = ()
    directories: tuple[str, ...] = ()
    split_type: SplitType = SplitType.ASSET_SLICE

    @property
    def suffix(self) -> str:
        """Name qualifier derived from the targeting; empty for the master."""
        return self.apk_targeting.suffix

    @property
    def split_id(self) -> str:
        """Split name, e.g. ``assets`` for the master or ``assets.config.es``."""
        if self.master:
            return self.module_name
        return f'{self.module_name}.config.{self.suffix}'

    def to_dict(self) -> dict:
        return {
            'split_id': self.split_id,
            'split_type': self.split_type.value,
            'master': self.master,
            'suffix': self.suffix,
            'targeting': self.apk_targeting.to_dict(),
            'directories': list(self.directories),
            'files': list(self.files),
        }


class SplitAssembler:
    """Builds the final, ordered split list from directory groups.

    The split whose targeting is the default becomes the master and is placed
    at index 0; the rest keep group order. Groups whose keys translate to the
    same targeting are merged into a single split.

    Example:
        >>> assembler = SplitAssembler()
        >>> splits = assembler.assemble('assets', groups.values())
        >>> splits[0].master
        True
    """

    def __init__(self, translator: TargetingTranslator | None = None):
        """Initialize the assembler.

        Args:
            translator: Translator for group keys. Defaults to a new
                TargetingTranslator.
        """
        self.translator = translator or TargetingTranslator()

    def assemble(
        self, module_name: str, groups: Iterable[SplitGroup]
    ) -> list[ModuleSplit]:
        """Create one split per distinct targeting.

        Args:
            module_name: Name of the module being split.
            groups: Directory groups in grouper order.

        Returns:
            The splits, master first.

        Raises:
            MalformedTargetingError: If a group key cannot be translated.
            SplitInvariantError: If the result breaks a split invariant.
        """
        files_by_targeting: dict[ApkTargeting, list[str]] = {}
        directories_by_targeting: dict[ApkTargeting, list[str]] = {}

        for group in groups:
            directory = group.directories[0] if group.directories else None
            targeting = self.translator.translate(group.key, directory)

            if targeting in files_by_targeting:
                logger.debug(
                    "Group %s of module '%s' shares targeting %s with an "
                    'earlier group; merging',
                    group.key,
                    module_name,
                    targeting,
                )
            files_by_targeting.setdefault(targeting, []).extend(group.files)
            directories_by_targeting.setdefault(targeting, []).extend(
                group.directories
            )

        master_targeting = ApkTargeting()
        if master_targeting not in files_by_targeting:
            logger.warning(
                "Module '%s' has no untargeted assets; adding an empty master split",
                module_name,
            )

        master = ModuleSplit(
            module_name=module_name,
            apk_targeting=master_targeting,
            master=True,
            files=tuple(files_by_targeting.pop(master_targeting, [])),
            directories=tuple(directories_by_targeting.pop(master_targeting, [])),
        )
        splits = [master] + [
            ModuleSplit(
                module_name=module_name,
                apk_targeting=targeting,
                master=False,
                files=tuple(files),
                directories=tuple(directories_by_targeting[targeting]),
            )
            for targeting, files in files_by_targeting.items()
        ]

        self._check_invariants(module_name, splits)
        return splits

    def _check_invariants(self, module_name: str, splits: list[ModuleSplit]) -> None:
        """Verify the single-master, unique-targeting and unique-name properties.

        Raises:
            SplitInvariantError: If a property does not hold.
        """
        masters = [i for i, split in enumerate(splits) if split.master]
        if masters != [0]:
            raise SplitInvariantError(
                f'Expected exactly one master split at index 0, found {masters}',
                module_name,
            )

        seen: set[ApkTargeting] = set()
        for split in splits:
            if split.apk_targeting in seen:
                raise SplitInvariantError(
                    f'Duplicate split targeting {split.apk_targeting}', module_name
                )
            seen.add(split.apk_targeting)

        # Split ids name the archives downstream and must be unique.
        seen_ids: set[str] = set()
        for split in splits:
            if split.split_id in seen_ids:
                raise SplitInvariantError(
                    f"Duplicate split id '{split.split_id}'", module_name
                )
            seen_ids.add(split.split_id)
