"""OpenAIVisionClient — OpenAI GPT-4o vision backend."""
from typing import Optional

from openai import AsyncOpenAI

from antenna_analyzer.constants import ANALYSIS_PROMPT, OPENAI_VISION_MODEL
from antenna_analyzer.vision.client import VisionClient


class OpenAIVisionClient(VisionClient):

    name = "openai"

    def __init__(self, api_key: str, model: Optional[str] = None) -> None:
        super().__init__(api_key, model or OPENAI_VISION_MODEL)
        self._client = AsyncOpenAI(api_key=api_key)

    async def _request(self, image_base64: str, mime_type: str) -> Optional[str]:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{mime_type};base64,{image_base64}"},
                        },
                        {"type": "text", "text": ANALYSIS_PROMPT},
                    ],
                }
            ],
        )
        return response.choices[0].message.content

    async def aclose(self) -> None:
        await self._client.close()
