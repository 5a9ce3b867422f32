"""Creation of missing parent directories ahead of a write."""

import logging
import os

from lumbar_fs.errors import AlreadyExistsError, NotFoundError
from lumbar_fs.filesystem import Filesystem
from lumbar_fs.retry_on_exhaustion import DEFAULT_RETRY_DELAY, retry_on_exhaustion

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o755


class DirectoryEnsurer:
    """Recursively creates the parent directories of a target path."""

    def __init__(
        self, filesystem: Filesystem, retry_delay: float = DEFAULT_RETRY_DELAY
    ) -> None:
        self.filesystem = filesystem
        self.retry_delay = retry_delay

    async def ensure_dirs(self, target: str) -> None:
        """Make sure the directory containing ``target`` exists."""
        parent = os.path.dirname(target)
        if not parent or parent == target:
            return

        try:
            await retry_on_exhaustion(
                self.filesystem.stat, parent, delay=self.retry_delay
            )
            return
        except NotFoundError:
            pass

        await self.ensure_dirs(parent)
        try:
            await retry_on_exhaustion(
                self.filesystem.mkdir, parent, DIRECTORY_MODE, delay=self.retry_delay
            )
            logger.debug("Created directory %s", parent)
        except AlreadyExistsError:
            # A concurrent writer created it first.
            logger.debug("Directory %s already created", parent)
