"""Conversion between relative and root-qualified paths."""

import re

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:[\\/]")


def is_absolute(name: str) -> bool:
    """Return True for POSIX-absolute names and Windows drive-letter names."""
    return name.startswith(("/", "\\")) or bool(_DRIVE_PREFIX.match(name))


class PathResolver:
    """Resolves names against a single configured lookup root."""

    def __init__(self, root: str | None = None) -> None:
        self._root = ""
        if root:
            self.lookup_path(root)

    def lookup_path(self, new_root: str | None = None) -> str:
        """Get the lookup root, or set it when ``new_root`` is given.

        Passing an empty string clears the root.
        """
        if new_root is not None:
            if new_root and not new_root.endswith("/"):
                new_root += "/"
            self._root = new_root
        return self._root

    def resolve_path(self, name: str) -> str:
        root = self._root
        if root and not is_absolute(name) and not name.startswith(root):
            return root + name
        return name

    def make_relative(self, name: str) -> str:
        root = self._root
        if root and name.startswith(root):
            return name[len(root) :]
        return name
