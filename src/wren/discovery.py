"""Filesystem template discovery.

Walks a template root and classifies every file ending in the configured
extension by its top-level folder:

- ``pages/``: one entry point per page
- ``includes/``: shared fragments attached to every page
- ``layouts/``: page shells selected with a ``{# use name #}`` directive

A file's logical name is its path below the category folder with the
extension removed and separators normalized to ``/``, so
``includes/sidebar/active_users.html`` is addressed as
``sidebar/active_users``.

Hidden files and directories (leading ``.``) are skipped.  Files outside
the three category folders are ignored, or rejected in strict mode.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from wren.errors import ConfigurationError, LoadError

logger = logging.getLogger("wren.loader")


class Category(Enum):
    """Role of a template file, named after its top-level folder."""

    PAGE = "pages"
    INCLUDE = "includes"
    LAYOUT = "layouts"


_BY_FOLDER = {category.value: category for category in Category}


@dataclass(frozen=True, slots=True)
class TemplateFile:
    """A discovered template file.

    Attributes:
        logical_name: Slash-separated path below the category folder,
            without extension (e.g. ``sidebar/active_users``).
        category: The folder-derived role.
        path: Absolute filesystem path.
    """

    logical_name: str
    category: Category
    path: Path

    @property
    def template_key(self) -> str:
        """Name of this fragment inside a compiled unit.

        Includes keep their bare logical name so pages can write
        ``{% include "sidebar/active_users" %}``; pages and layouts are
        qualified with their folder.
        """
        if self.category is Category.INCLUDE:
            return self.logical_name
        return f"{self.category.value}/{self.logical_name}"

    def read(self, encoding: str = "utf-8") -> str:
        """Read the file's source text, wrapping I/O failures in ``LoadError``."""
        try:
            return self.path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(f"Cannot read template {self.path}: {exc}", path=self.path) from exc


@dataclass(frozen=True, slots=True)
class TemplateGroups:
    """Discovered files grouped by category, keyed by logical name."""

    pages: dict[str, TemplateFile] = field(default_factory=dict)
    includes: dict[str, TemplateFile] = field(default_factory=dict)
    layouts: dict[str, TemplateFile] = field(default_factory=dict)

    def for_category(self, category: Category) -> dict[str, TemplateFile]:
        if category is Category.PAGE:
            return self.pages
        if category is Category.INCLUDE:
            return self.includes
        return self.layouts


def logical_name(relative: Path, extension: str) -> str:
    """Derive a logical name from a path relative to its category folder.

    >>> logical_name(Path("sidebar/active_users.html"), ".html")
    'sidebar/active_users'
    """
    name = relative.as_posix()[: -len(extension)]
    # Literal backslashes in POSIX filenames must not produce a second spelling
    return name.replace("\\", "/")


def classify_templates(
    root: str | Path,
    extension: str = ".html",
    *,
    strict: bool = False,
) -> list[TemplateFile]:
    """Walk *root* and classify every file ending in *extension*.

    Args:
        root: Template root containing ``pages/``, ``includes/``, ``layouts/``.
        extension: Filename suffix matched literally (e.g. ``.html``).
        strict: Raise ``LoadError`` for matching files outside the category
            folders instead of ignoring them.

    Returns:
        Discovered files sorted by category folder, then logical name.

    Raises:
        ConfigurationError: *extension* is empty.
        LoadError: *root* is missing, not a directory, or unreadable.
    """
    if not extension:
        raise ConfigurationError("extension must be a non-empty filename suffix")

    root_path = Path(root)
    if not root_path.exists():
        raise LoadError(f"Template directory not found: {root_path}", path=root_path)
    if not root_path.is_dir():
        raise LoadError(f"Template path is not a directory: {root_path}", path=root_path)
    root_path = root_path.resolve()

    files: list[TemplateFile] = []
    for path in _walk(root_path):
        if not path.name.endswith(extension) or path.name == extension:
            continue
        relative = path.relative_to(root_path)
        category = _BY_FOLDER.get(relative.parts[0]) if len(relative.parts) > 1 else None
        if category is None:
            if strict:
                raise LoadError(
                    f"Template {relative.as_posix()} is outside pages/, includes/ and layouts/",
                    path=path,
                )
            logger.debug("Ignoring uncategorized template %s", relative.as_posix())
            continue
        files.append(
            TemplateFile(
                logical_name=logical_name(Path(*relative.parts[1:]), extension),
                category=category,
                path=path,
            )
        )

    files.sort(key=lambda f: (f.category.value, f.logical_name))
    return files


def group_templates(files: Iterable[TemplateFile]) -> TemplateGroups:
    """Group files by category, rejecting duplicate logical names.

    Raises:
        LoadError: Two files in one category share a logical name.
    """
    groups = TemplateGroups()
    for file in files:
        bucket = groups.for_category(file.category)
        existing = bucket.get(file.logical_name)
        if existing is not None:
            raise LoadError(
                f"Duplicate {file.category.value} template {file.logical_name!r}: "
                f"{existing.path} and {file.path}",
                path=file.path,
            )
        bucket[file.logical_name] = file
    return groups


def _walk(directory: Path) -> list[Path]:
    """Recursively list non-hidden files below *directory*, depth-first and sorted."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise LoadError(f"Cannot read template directory {directory}: {exc}", path=directory) from exc

    found: list[Path] = []
    for item in entries:
        if item.name.startswith("."):
            continue
        if item.is_dir():
            found.extend(_walk(item))
        elif item.is_file():
            found.append(item)
    return found
