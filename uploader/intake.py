import logging
from pathlib import Path
from typing import Iterable, Union

from uploader.models import UploadedFile
from uploader.state import UploadStateStore

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class IntakeSurface:
    """
    File selection surface with two equivalent modalities: browsing for files
    and dropping them. Both hand the same list to `UploadStateStore.add_files`.
    """

    def __init__(self, store: UploadStateStore):
        self.store = store
        self.dragging = False
        # Mirrors the file input's value; cleared so the same file can be picked again.
        self.selection: list[str] = []

    @property
    def disabled(self) -> bool:
        return self.store.busy

    # --- Drag state (presentation only) ---

    def drag_enter(self) -> None:
        self.dragging = True

    def drag_over(self) -> None:
        if not self.dragging:
            self.dragging = True

    def drag_leave(self) -> None:
        self.dragging = False

    # --- Selection ---

    async def browse(self, paths: Iterable[PathLike]) -> bool:
        """Files chosen through the file picker."""
        paths = list(paths)
        self.selection = [str(p) for p in paths]
        return await self._select(paths)

    async def drop(self, paths: Iterable[PathLike]) -> bool:
        """Files dropped onto the surface."""
        self.dragging = False
        return await self._select(list(paths))

    async def _select(self, paths: list[PathLike]) -> bool:
        if self.disabled:
            logger.info("Ignoring selection of %d file(s) while busy", len(paths))
            return False
        if not paths:
            return False

        files = [UploadedFile.from_path(p) for p in paths]
        added = await self.store.add_files(files)
        if added:
            self.selection = []
        return added
