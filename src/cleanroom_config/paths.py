"""Two-level path resolution for cleanroom-config."""

import os


class PathResolver:
    """Joins an absolute base directory with a relative subpath.

    Both segments can be read and replaced independently. Entities that
    store a filesystem location keep their own clone, and the filesystem
    queue temporarily rewrites the relative segment of its private clone
    while a task runs.

    Args:
        base: Absolute path to an existing directory
        relative: Subpath below the base (default: the base itself)

    Raises:
        ValueError: If base is not an absolute path to an existing directory
    """

    def __init__(self, base: str | os.PathLike, relative: str = ""):
        self._base = self._check_base(base)
        self._relative = os.fspath(relative)

    def get_path(self, use_absolute: bool) -> str:
        """Get the joined absolute path, or only the relative segment.

        Args:
            use_absolute: True for the absolute path, False for the subpath

        Returns:
            The requested path as a string
        """
        if not use_absolute:
            return self._relative
        return os.path.normpath(os.path.join(self._base, self._relative))

    def set_path(self, use_absolute: bool, value: str | os.PathLike) -> None:
        """Replace the base (use_absolute=True) or the relative segment.

        Raises:
            ValueError: If a new base is not an absolute path to an existing directory
        """
        if use_absolute:
            self._base = self._check_base(value)
        else:
            self._relative = os.fspath(value)

    def clone(self) -> "PathResolver":
        """Return an independent copy of this resolver."""
        return PathResolver(self._base, self._relative)

    @staticmethod
    def _check_base(base: str | os.PathLike) -> str:
        base = os.fspath(base)
        if not os.path.isabs(base):
            raise ValueError(f"Base directory must be an absolute path: {base}")
        if not os.path.isdir(base):
            raise ValueError(f"Base directory does not exist: {base}")
        return base

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathResolver):
            return NotImplemented
        return self._base == other._base and self._relative == other._relative

    def __repr__(self) -> str:
        return f"PathResolver(base={self._base!r}, relative={self._relative!r})"
