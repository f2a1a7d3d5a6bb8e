"""GeminiVisionClient — Google Gemini vision backend (default)."""
import base64
from typing import Optional

from google import genai
from google.genai import types

from antenna_analyzer.constants import ANALYSIS_PROMPT, GEMINI_VISION_MODEL
from antenna_analyzer.vision.client import VisionClient


class GeminiVisionClient(VisionClient):

    name = "gemini"

    def __init__(self, api_key: str, model: Optional[str] = None) -> None:
        super().__init__(api_key, model or GEMINI_VISION_MODEL)
        self._client = genai.Client(api_key=api_key)

    async def _request(self, image_base64: str, mime_type: str) -> Optional[str]:
        image_part = types.Part.from_bytes(
            data=base64.b64decode(image_base64),
            mime_type=mime_type,
        )
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=[image_part, ANALYSIS_PROMPT],
        )
        return response.text

    async def aclose(self) -> None:
        await self._client.aio.aclose()
