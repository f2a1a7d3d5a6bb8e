"""ClaudeVisionClient — Anthropic Claude vision backend."""
from typing import Optional

from anthropic import AsyncAnthropic

from antenna_analyzer.constants import ANALYSIS_PROMPT, CLAUDE_MAX_TOKENS, CLAUDE_VISION_MODEL
from antenna_analyzer.vision.client import VisionClient


class ClaudeVisionClient(VisionClient):

    name = "claude"

    def __init__(self, api_key: str, model: Optional[str] = None) -> None:
        super().__init__(api_key, model or CLAUDE_VISION_MODEL)
        self._client = AsyncAnthropic(api_key=api_key)

    async def _request(self, image_base64: str, mime_type: str) -> Optional[str]:
        message = await self._client.messages.create(
            model=self.model,
            max_tokens=CLAUDE_MAX_TOKENS,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": mime_type,
                                "data": image_base64,
                            },
                        },
                        {"type": "text", "text": ANALYSIS_PROMPT},
                    ],
                }
            ],
        )
        match message.content:
            case [first, *_]:
                return first.text
            case _:
                return None

    async def aclose(self) -> None:
        await self._client.close()
