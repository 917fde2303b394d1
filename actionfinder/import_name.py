"""
Derivation of the string a consumer types to import a discovered file.

Dependency files are named relative to the package they live in, e.g.
"/app/node_modules/my-app/src/actions/MyActions.js" in module "my-app"
becomes "my-app/actions/MyActions". Local files are named relative to the
document doing the importing, e.g. "./../actions/MyActions".
"""

import os
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .types import DerivationMode


def basename(file_path: str) -> str:
    """File name without directory or extension."""
    return os.path.splitext(os.path.basename(file_path))[0]


def derive_dependency_import_name(file_path: str, module_name: str) -> str:
    directory = os.path.dirname(file_path)
    match = re.search(f"{re.escape(module_name)}.*", directory)
    if match is None:
        return file_path

    # Published packages are usually rooted at their source directory
    package_path = match.group(0).replace("src/", "", 1)
    return f"{package_path}{os.sep}{basename(file_path)}"


def derive_local_import_name(file_path: str, anchor_file_path: str) -> str:
    # Relative to the anchor *file*, so even a sibling starts with "../"
    relative = os.path.relpath(file_path, anchor_file_path)
    relative = re.sub(r"^\.\.", ".", relative)
    return os.path.splitext(relative)[0]


def derive_import_name(file_path: str, module_name: str, mode: DerivationMode,
                       anchor_file_path: Optional[str] = None) -> str:
    """Return what a user would type to import `file_path`.

    Args:
        file_path: Full path of the file to import
        module_name: Package (dependency mode) or source directory (local
            mode) the file was discovered in
        mode: "dependency" or "local"
        anchor_file_path: The importing document; required in local mode
    """
    if mode == "local":
        if anchor_file_path is None:
            raise ValueError("local import names need the importing document's path")
        return derive_local_import_name(file_path, anchor_file_path)
    return derive_dependency_import_name(file_path, module_name)


@dataclass(frozen=True)
class ImportNameRecord:
    """A discovered source file and the actions it exports.

    Attributes:
        file_path: Full path, e.g. "/path/to/my-app/src/actions/MyActions.js"
        file_name: Base name without extension, e.g. "MyActions"
        module_name: Package or local source directory, e.g. "my-app"
        mode: How the import name is derived
        actions: Exported names; everything exported is assumed to be an action
    """
    file_path: str
    file_name: str
    module_name: str
    mode: DerivationMode
    actions: Tuple[str, ...] = ()

    def import_name_for(self, document_path: Optional[str] = None) -> str:
        return derive_import_name(self.file_path, self.module_name, self.mode, document_path)


def create_import_name_record(mode: DerivationMode, file_path: str,
                              actions: Iterable[str], module_name: str) -> ImportNameRecord:
    return ImportNameRecord(
        file_path=file_path,
        file_name=basename(file_path),
        module_name=module_name,
        mode=mode,
        actions=tuple(actions),
    )
