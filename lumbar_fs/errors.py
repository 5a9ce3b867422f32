"""Error hierarchy for filesystem access and template compilation."""

import errno as errno_codes


class FileAccessError(Exception):
    """Base error for a failed filesystem operation."""

    def __init__(self, message: str, path: str | None = None, errno: int | None = None):
        super().__init__(message)
        self.path = path
        self.errno = errno


class NotFoundError(FileAccessError):
    """The path does not exist."""


class ResourceExhaustedError(FileAccessError):
    """The process is temporarily out of file handles. Retried, never surfaced."""


class AlreadyExistsError(FileAccessError):
    """The path already exists."""


class TemplateCompileError(Exception):
    """The template compiler rejected its input."""


_ERRNO_KINDS: dict[int, type[FileAccessError]] = {
    errno_codes.ENOENT: NotFoundError,
    errno_codes.EMFILE: ResourceExhaustedError,
    errno_codes.ENFILE: ResourceExhaustedError,
    errno_codes.EEXIST: AlreadyExistsError,
}


def translate_os_error(exc: OSError, path: str) -> FileAccessError:
    """Map an OSError onto the matching FileAccessError subclass."""
    kind = _ERRNO_KINDS.get(exc.errno or 0, FileAccessError)
    return kind(f"{exc.strerror or exc}: {path}", path=path, errno=exc.errno)
