"""VisionClient — abstract base for antenna image analysis backends."""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from antenna_analyzer.constants import MSG_EMPTY_RESPONSE, MSG_REMOTE_FAILED
from antenna_analyzer.encoder import strip_data_url
from antenna_analyzer.errors import AnalysisFailedError

logger = logging.getLogger(__name__)


class VisionClient(ABC):

    name: str = "vision"

    def __init__(self, api_key: str, model: str) -> None:
        self._api_key = api_key
        self.model = model

    async def analyze(self, image_base64: str, mime_type: str) -> str:
        """Send the image with the fixed antenna prompt and return the reply text.

        One call, no retry. Any backend error or an empty reply raises
        AnalysisFailedError carrying the generic message.
        """
        try:
            text = await self._request(strip_data_url(image_base64), mime_type)
            match (text or "").strip():
                case "":
                    raise AnalysisFailedError(MSG_EMPTY_RESPONSE)
                case stripped:
                    return stripped
        except Exception as exc:
            logger.exception("Error analyzing image with %s", self.name)
            raise AnalysisFailedError(MSG_REMOTE_FAILED) from exc

    async def aclose(self) -> None:
        """Release the SDK client's HTTP connection pool."""

    @abstractmethod
    async def _request(self, image_base64: str, mime_type: str) -> Optional[str]:
        """Issue the backend request and return its text field (may be empty)."""
        ...
