"""
Discovery of action modules.

Dependency modules are searched at every `{node_module_path}/{module}/{glob}`
combination; local files under `{local_source_dir}/{glob}`. Each discovered
file becomes an `ImportNameRecord` carrying its exported names.
"""

import glob
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from .cross_product import cross_product3
from .exports import ExportStrategy, enumerate_exported_names
from .import_name import ImportNameRecord, create_import_name_record
from .types import (
    CrossProductFailure, DerivationMode, ExportEnumerationError, FileListing,
)

logger = logging.getLogger(__name__)

Notify = Callable[[str], None]


class FileFinder(Protocol):
    def find_files(self, pattern: str, exclude: Optional[str] = None) -> List[str]: ...


class GlobFileFinder:
    """Finds files under a workspace root with recursive glob patterns."""

    def __init__(self, root: str = "."):
        self.root = os.path.abspath(root)

    def find_files(self, pattern: str, exclude: Optional[str] = None) -> List[str]:
        matches = glob.glob(os.path.join(self.root, pattern), recursive=True)

        files = []
        for path in matches:
            if not os.path.isfile(path):
                continue
            # Only directories below the root count towards exclusion
            relative_dir = os.path.dirname(os.path.relpath(path, self.root))
            if exclude and exclude in Path(relative_dir).parts:
                continue
            files.append(os.path.abspath(path))
        return sorted(files)


def _log_warning(message: str) -> None:
    logger.warning(message)


def _log_error(message: str) -> None:
    logger.error(message)


def generate_listings(module_names: Sequence[str], node_module_paths: Sequence[str],
                      file_globs: Sequence[str], finder: FileFinder,
                      on_error: Notify = _log_error) -> List[FileListing]:
    targets = cross_product3(node_module_paths, module_names, file_globs)
    if isinstance(targets, CrossProductFailure):
        on_error("Could not parse files to lookup available actions.")
        return []

    return [
        FileListing(module_name, tuple(finder.find_files(f"{module_path}/{module_name}/{file_glob}")))
        for module_path, module_name, file_glob in targets.result
    ]


def generate_local_listings(local_file_globs: Sequence[str], local_source_dir: str,
                            finder: FileFinder) -> List[FileListing]:
    return [
        FileListing(local_source_dir,
                    tuple(finder.find_files(f"{local_source_dir}/{file_glob}", exclude="node_modules")))
        for file_glob in local_file_globs
    ]


def collect_action_sources(mode: DerivationMode, listings: Iterable[FileListing],
                           strategies: Sequence[ExportStrategy],
                           on_warning: Notify = _log_warning) -> List[ImportNameRecord]:
    """Records for every file of every listing.

    A listing with any file whose exports cannot be enumerated is skipped
    whole, with a warning, so one bad module never aborts the batch.
    """
    records: List[ImportNameRecord] = []
    for listing in listings:
        try:
            listing_records = [
                create_import_name_record(
                    mode, file_path, enumerate_exported_names(file_path, strategies), listing.module_name
                )
                for file_path in listing.files
            ]
            records.extend(listing_records)
        except ExportEnumerationError as e:
            logger.debug("Skipping %s: %s", listing.module_name, e)
            on_warning(f"Could not get actions for {listing.module_name}, skipping it.")
    return records


def get_actions(config, finder: FileFinder, strategies: Sequence[ExportStrategy],
                on_warning: Notify = _log_warning,
                on_error: Notify = _log_error) -> List[ImportNameRecord]:
    """Dependency actions followed by local actions."""
    listings = generate_listings(
        config.modules, config.node_module_paths, config.file_globs, finder, on_error
    )
    local_listings = generate_local_listings(config.local_file_globs, config.local_source_dir, finder)

    records = collect_action_sources("dependency", listings, strategies, on_warning)
    records += collect_action_sources("local", local_listings, strategies, on_warning)
    logger.info("Found %d action modules", len(records))
    return records
