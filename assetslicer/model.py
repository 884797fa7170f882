"""Asset module input model.

An ``AssetModule`` is the already-parsed view of a packaged module that the
splitter works on: an ordered listing of asset directories, each with its
declared targeting and its ordered files.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from assetslicer.splitting.targeting import DirectoryTargeting


@dataclass(frozen=True)
class TargetedDirectory:
    """An asset directory together with its targeting and files.

    Attributes:
        path: Directory path inside the module, e.g. ``assets/images#lang_en``.
        targeting: Targeting declared for the directory.
        files: Full paths of the files directly in the directory, in order.
    """

    path: str
    targeting: DirectoryTargeting = field(default_factory=DirectoryTargeting)
    files: tuple[str, ...] = ()

    @property
    def is_untargeted(self) -> bool:
        return self.targeting.is_default


@dataclass(frozen=True)
class AssetModule:
    """A module's asset directories in listing order."""

    name: str
    directories: tuple[TargetedDirectory, ...] = ()

    @property
    def files(self) -> list[str]:
        """Every file of the module, directory by directory."""
        return [f for directory in self.directories for f in directory.files]

    def get_directory(self, path: str) -> TargetedDirectory | None:
        for directory in self.directories:
            if directory.path == path:
                return directory
        return None

    def __iter__(self) -> Iterator[TargetedDirectory]:
        return iter(self.directories)

    def __len__(self) -> int:
        return len(self.directories)

    @classmethod
    def from_files(
        cls,
        name: str,
        files: Iterable[str],
        targeting: Mapping[str, DirectoryTargeting] | None = None,
    ) -> AssetModule:
        """Build a module from a flat file listing.

        Every file is placed in its parent directory. Directories appear in
        the order their first file is listed and keep their files in listing
        order. Directories not mentioned in ``targeting`` are untargeted.

        Args:
            name: Module name.
            files: Full file paths, e.g. ``assets/images#lang_en/a.png``.
            targeting: Targeting per directory path.

        Returns:
            The assembled AssetModule.
        """
        targeting = dict(targeting or {})
        by_directory: dict[str, list[str]] = {}
        for path in files:
            directory = posixpath.dirname(path.strip('/'))
            by_directory.setdefault(directory, []).append(path)

        directories = tuple(
            TargetedDirectory(
                path=directory,
                targeting=targeting.get(directory, DirectoryTargeting()),
                files=tuple(entries),
            )
            for directory, entries in by_directory.items()
        )
        return cls(name=name, directories=directories)
