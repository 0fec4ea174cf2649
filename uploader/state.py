import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from uploader import encoder
from uploader.errors import EncodingError, InvalidTransitionError, ValidationError
from uploader.models import ConversionResult, EncodedFile, UploadConfig, UploadedFile
from uploader.validator import Validator

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    EMPTY = "empty"
    READY = "ready"
    BUSY = "busy"


@dataclass
class UploadSession:
    """In-memory upload state. Only UploadStateStore writes to it."""

    files: list[UploadedFile] = field(default_factory=list)
    encodings: list[str] = field(default_factory=list)
    current_index: Optional[int] = None
    error: Optional[str] = None
    busy: bool = False
    result: Optional[ConversionResult] = None

    @property
    def current_file(self) -> Optional[UploadedFile]:
        if self.current_index is None or not (0 <= self.current_index < len(self.files)):
            return None
        return self.files[self.current_index]

    @property
    def encoded_files(self) -> list[EncodedFile]:
        return [EncodedFile(file=f, base64=b) for f, b in zip(self.files, self.encodings)]

    @property
    def state(self) -> SessionState:
        if self.busy:
            return SessionState.BUSY
        if not self.files:
            return SessionState.EMPTY
        return SessionState.READY


class UploadStateStore:
    """
    Owns the UploadSession and exposes the only transitions allowed on it.

    Empty -> Ready(n) -> Busy -> Ready(success | error)
    """

    def __init__(self, config: UploadConfig | None = None):
        self.config = config or UploadConfig()
        self.validator = Validator(self.config)
        self.session = UploadSession()

    @property
    def files(self) -> list[UploadedFile]:
        return list(self.session.files)

    @property
    def current_file(self) -> Optional[UploadedFile]:
        return self.session.current_file

    @property
    def error(self) -> Optional[str]:
        return self.session.error

    @property
    def busy(self) -> bool:
        return self.session.busy

    @property
    def result(self) -> Optional[ConversionResult]:
        return self.session.result

    @property
    def state(self) -> SessionState:
        return self.session.state

    def snapshot(self) -> tuple[UploadedFile, ...]:
        return tuple(self.session.files)

    def _warn_if_busy(self, action: str) -> None:
        if self.session.busy:
            logger.warning("%s called while a submit is in flight", action)

    async def add_files(self, candidates: Iterable[Optional[UploadedFile]]) -> bool:
        """
        Validates, encodes and appends a batch of files.

        The batch is admitted all-or-nothing: one invalid or unreadable file
        leaves the file list untouched and sets `error`. Returns True when
        the batch was admitted.
        """
        candidates = list(candidates)
        self._warn_if_busy("add_files")

        try:
            self.validator.ensure_valid(candidates)
        except ValidationError as e:
            logger.info("Rejected selection of %d file(s): %s", len(candidates), e)
            self.session.error = str(e)
            return False

        if not candidates:
            return False

        try:
            encodings = await encoder.encode_all(candidates)
        except EncodingError as e:
            self.session.error = str(e)
            return False

        # Commit against the list as it is now, not as it was before the awaits.
        session = self.session
        if self.config.multiple:
            session.files = session.files + candidates
            session.encodings = session.encodings + encodings
        else:
            session.files = candidates[-1:]
            session.encodings = encodings[-1:]
        session.current_index = len(session.files) - 1
        session.error = None
        session.result = None

        logger.debug("Added %d file(s), %d total", len(candidates), len(session.files))
        return True

    def remove_file(self, index: int) -> None:
        """Removes the file at `index`. Out-of-range indices are ignored."""
        self._warn_if_busy("remove_file")
        session = self.session
        if not (0 <= index < len(session.files)):
            return

        removed_current = index == session.current_index
        session.files = session.files[:index] + session.files[index + 1:]
        session.encodings = session.encodings[:index] + session.encodings[index + 1:]

        if not session.files:
            session.current_index = None
        elif removed_current or session.current_index is None:
            session.current_index = len(session.files) - 1
        elif index < session.current_index:
            session.current_index -= 1

    def clear_all(self) -> None:
        """Resets files and error. Leaves `busy` alone."""
        session = self.session
        session.files = []
        session.encodings = []
        session.current_index = None
        session.error = None

    def clear_error(self) -> None:
        self.session.error = None

    def set_error(self, message: str) -> None:
        self.session.error = message

    def begin_submit(self) -> None:
        if self.session.state is not SessionState.READY:
            raise InvalidTransitionError(f"Cannot submit from state {self.session.state.value}")
        self.session.busy = True
        self.session.result = None

    def complete_submit(self, result: ConversionResult) -> None:
        if not self.session.busy:
            raise InvalidTransitionError("No submit in flight")
        self.session.busy = False
        self.session.result = result
        self.session.error = None if result.success else result.error
