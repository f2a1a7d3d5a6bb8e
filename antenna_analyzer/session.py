"""AnalysisSession — per-chat request state as a single tagged variant.

    Idle ──select──▶ Ready ──analyze──▶ Loading ──▶ Succeeded
                                           └──────▶ Failed

Succeeded and Failed both go back to Ready on a new upload, and every state
goes back to Idle on clear().
"""
import asyncio
import io
import logging
import time
from dataclasses import dataclass
from typing import Optional, Union

from antenna_analyzer.constants import (
    MSG_ANALYSIS_DONE,
    MSG_ANALYSIS_ERROR,
    MSG_ANALYSIS_FAILED,
    MSG_ANALYSIS_IN_PROGRESS,
    MSG_STALE_RESULT,
    MSG_UPLOAD_FIRST,
    SESSION_STORE_MAX_CHATS,
)
from antenna_analyzer.encoder import encode_file
from antenna_analyzer.errors import AnalysisInProgressError, InvalidImageError
from antenna_analyzer.image import UploadedImage
from antenna_analyzer.vision.client import VisionClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Ready:
    image: UploadedImage


@dataclass(frozen=True)
class Loading:
    image: UploadedImage


@dataclass(frozen=True)
class Succeeded:
    image: UploadedImage
    result: str


@dataclass(frozen=True)
class Failed:
    image: Optional[UploadedImage]
    message: str


SessionState = Union[Idle, Ready, Loading, Succeeded, Failed]


class AnalysisSession:

    def __init__(self) -> None:
        self._state: SessionState = Idle()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def image(self) -> Optional[UploadedImage]:
        match self._state:
            case Ready(image=image) | Loading(image=image) | Succeeded(image=image) | Failed(image=image):
                return image
            case _:
                return None

    @property
    def preview(self) -> Optional[UploadedImage]:
        return self.image

    @property
    def result(self) -> Optional[str]:
        match self._state:
            case Succeeded(result=result):
                return result
            case _:
                return None

    @property
    def error(self) -> Optional[str]:
        match self._state:
            case Failed(message=message):
                return message
            case _:
                return None

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    def select(self, image: UploadedImage) -> SessionState:
        """Make `image` the current image. Non-images keep the old one and fail."""
        try:
            self._state = Ready(image.require_image())
        except InvalidImageError as exc:
            self._state = Failed(self.image, str(exc))
        return self._state

    def clear(self) -> SessionState:
        self._state = Idle()
        return self._state

    async def analyze(self, client: VisionClient) -> SessionState:
        match self._state:
            case Loading():
                raise AnalysisInProgressError(MSG_ANALYSIS_IN_PROGRESS)
            case Idle() | Failed(image=None):
                self._state = Failed(None, MSG_UPLOAD_FIRST)
                return self._state
            case _:
                pass

        image = self.image
        loading = Loading(image)
        self._state = loading
        start = time.time()

        try:
            payload = await encode_file(io.BytesIO(image.data))
            result = await client.analyze(payload, image.mime_type)
            outcome: SessionState = Succeeded(image, result)
            logger.info(MSG_ANALYSIS_DONE, time.time() - start)
        except asyncio.CancelledError:
            if self._state is loading:
                self._state = Ready(image)
            raise
        except Exception:
            logger.exception(MSG_ANALYSIS_ERROR, time.time() - start)
            outcome = Failed(image, MSG_ANALYSIS_FAILED)

        # A new upload or clear() while we were waiting wins over this outcome.
        if self._state is not loading:
            logger.info(MSG_STALE_RESULT)
            return self._state

        self._state = outcome
        return outcome


class SessionStore:
    """In-memory sessions keyed by chat id. Nothing is persisted.

    At most `max_chats` sessions are kept; past that the least recently used
    sessions that are not loading are dropped.
    """

    def __init__(self, max_chats: int = SESSION_STORE_MAX_CHATS) -> None:
        self._max = max_chats
        self._sessions: dict[str, AnalysisSession] = {}

    def get(self, chat_id: str) -> AnalysisSession:
        match self._sessions.pop(chat_id, None):
            case None:
                session = AnalysisSession()
                self._sessions[chat_id] = session
                self._evict(keep=chat_id)
            case session:
                self._sessions[chat_id] = session
        return session

    def drop(self, chat_id: str) -> None:
        """Forget the chat. A call still pending for it finds Idle and is discarded."""
        match self._sessions.pop(chat_id, None):
            case None:
                pass
            case session:
                session.clear()

    def __contains__(self, chat_id: str) -> bool:
        return chat_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def _evict(self, keep: str) -> None:
        excess = len(self._sessions) - self._max
        if excess <= 0:
            return
        stale = [
            cid for cid, s in self._sessions.items() if cid != keep and not s.is_loading
        ][:excess]
        list(map(self.drop, stale))
        logger.info("Dropped %d idle sessions, kept %d", len(stale), len(self._sessions))
