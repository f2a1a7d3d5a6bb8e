"""TDD: VisionClient backend tests written FIRST"""
import base64

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from antenna_analyzer.constants import ANALYSIS_PROMPT, MSG_REMOTE_FAILED
from antenna_analyzer.errors import AnalysisFailedError
from antenna_analyzer.vision.client import VisionClient

IMAGE_B64 = base64.b64encode(b"fake-image-bytes").decode()


# ── VisionClient base ─────────────────────────────────────────────────────────


class StubVisionClient(VisionClient):
    name = "stub"

    def __init__(self, reply=None, error=None) -> None:
        super().__init__(api_key="test-key", model="stub-model")
        self.reply = reply
        self.error = error
        self.calls = []

    async def _request(self, image_base64, mime_type):
        self.calls.append((image_base64, mime_type))
        if self.error is not None:
            raise self.error
        return self.reply


async def test_base_client_returns_stripped_text():
    client = StubVisionClient(reply="  สถานะ: ปกติ \n")

    assert await client.analyze(IMAGE_B64, "image/png") == "สถานะ: ปกติ"


async def test_base_client_strips_data_url_prefix():
    client = StubVisionClient(reply="ok")

    await client.analyze(f"data:image/png;base64,{IMAGE_B64}", "image/png")

    assert client.calls == [(IMAGE_B64, "image/png")]


@pytest.mark.parametrize("reply", [None, "", "   "])
async def test_base_client_empty_reply_raises_generic_error(reply):
    client = StubVisionClient(reply=reply)

    with pytest.raises(AnalysisFailedError, match=MSG_REMOTE_FAILED):
        await client.analyze(IMAGE_B64, "image/png")


async def test_base_client_wraps_backend_errors():
    client = StubVisionClient(error=ConnectionError("network down"))

    with pytest.raises(AnalysisFailedError) as exc_info:
        await client.analyze(IMAGE_B64, "image/png")

    assert isinstance(exc_info.value.__cause__, ConnectionError)


async def test_base_client_makes_exactly_one_call():
    client = StubVisionClient(error=RuntimeError("API down"))

    with pytest.raises(AnalysisFailedError):
        await client.analyze(IMAGE_B64, "image/png")

    assert len(client.calls) == 1


# ── GeminiVisionClient ────────────────────────────────────────────────────────


async def test_gemini_analyze_sends_image_and_prompt():
    from antenna_analyzer.vision.gemini import GeminiVisionClient

    mock_response = MagicMock()
    mock_response.text = "  ตรวจพบการเกิด Flashover  "

    with patch("antenna_analyzer.vision.gemini.genai.Client") as mock_cls:
        mock_genai = MagicMock()
        mock_genai.aio.models.generate_content = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_genai
        client = GeminiVisionClient(api_key="test-key")

        result = await client.analyze(IMAGE_B64, "image/webp")

    assert result == "ตรวจพบการเกิด Flashover"
    mock_cls.assert_called_once_with(api_key="test-key")
    call_kwargs = mock_genai.aio.models.generate_content.call_args.kwargs
    assert call_kwargs["model"] == "gemini-2.5-flash-image"
    image_part, prompt = call_kwargs["contents"]
    assert image_part.inline_data.data == b"fake-image-bytes"
    assert image_part.inline_data.mime_type == "image/webp"
    assert prompt == ANALYSIS_PROMPT


async def test_gemini_model_override():
    from antenna_analyzer.vision.gemini import GeminiVisionClient

    mock_response = MagicMock()
    mock_response.text = "ปกติ"

    with patch("antenna_analyzer.vision.gemini.genai.Client") as mock_cls:
        mock_genai = MagicMock()
        mock_genai.aio.models.generate_content = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_genai
        client = GeminiVisionClient(api_key="test-key", model="gemini-2.5-pro")

        await client.analyze(IMAGE_B64, "image/png")

    assert mock_genai.aio.models.generate_content.call_args.kwargs["model"] == "gemini-2.5-pro"


async def test_gemini_no_text_raises():
    from antenna_analyzer.vision.gemini import GeminiVisionClient

    mock_response = MagicMock()
    mock_response.text = None

    with patch("antenna_analyzer.vision.gemini.genai.Client") as mock_cls:
        mock_genai = MagicMock()
        mock_genai.aio.models.generate_content = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_genai
        client = GeminiVisionClient(api_key="test-key")

        with pytest.raises(AnalysisFailedError):
            await client.analyze(IMAGE_B64, "image/png")


async def test_gemini_raises_on_api_error():
    from antenna_analyzer.vision.gemini import GeminiVisionClient

    with patch("antenna_analyzer.vision.gemini.genai.Client") as mock_cls:
        mock_genai = MagicMock()
        mock_genai.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("API down"))
        mock_cls.return_value = mock_genai
        client = GeminiVisionClient(api_key="test-key")

        with pytest.raises(AnalysisFailedError):
            await client.analyze(IMAGE_B64, "image/png")


# ── ClaudeVisionClient ────────────────────────────────────────────────────────


async def test_claude_vision_analyze_calls_api_with_image():
    from antenna_analyzer.vision.claude import ClaudeVisionClient

    mock_response = MagicMock()
    mock_response.content = [MagicMock(text="  สายอากาศแตกหัก  ")]

    with patch("antenna_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_anthropic
        client = ClaudeVisionClient(api_key="test-key")

        result = await client.analyze(IMAGE_B64, "image/png")

    assert result == "สายอากาศแตกหัก"
    mock_anthropic.messages.create.assert_called_once()
    content = mock_anthropic.messages.create.call_args.kwargs["messages"][0]["content"]
    image_blocks = [b for b in content if b["type"] == "image"]
    text_blocks = [b for b in content if b["type"] == "text"]
    assert image_blocks[0]["source"]["media_type"] == "image/png"
    assert image_blocks[0]["source"]["data"] == IMAGE_B64
    assert text_blocks[0]["text"] == ANALYSIS_PROMPT


async def test_claude_vision_empty_content_raises():
    from antenna_analyzer.vision.claude import ClaudeVisionClient

    mock_response = MagicMock()
    mock_response.content = []

    with patch("antenna_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_anthropic
        client = ClaudeVisionClient(api_key="test-key")

        with pytest.raises(AnalysisFailedError):
            await client.analyze(IMAGE_B64, "image/png")


async def test_claude_vision_analyze_raises_on_api_error():
    from antenna_analyzer.vision.claude import ClaudeVisionClient

    with patch("antenna_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(side_effect=RuntimeError("API down"))
        mock_cls.return_value = mock_anthropic
        client = ClaudeVisionClient(api_key="test-key")

        with pytest.raises(AnalysisFailedError):
            await client.analyze(IMAGE_B64, "image/png")


# ── OpenAIVisionClient ────────────────────────────────────────────────────────


async def test_openai_vision_analyze_calls_api_with_data_url():
    from antenna_analyzer.vision.openai import OpenAIVisionClient

    mock_choice = MagicMock()
    mock_choice.message.content = "  สถานะ: ปกติ  "
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]

    with patch("antenna_analyzer.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.chat.completions.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_openai
        client = OpenAIVisionClient(api_key="test-key")

        result = await client.analyze(IMAGE_B64, "image/jpeg")

    assert result == "สถานะ: ปกติ"
    call_kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert call_kwargs["model"] == "gpt-4o"
    content = call_kwargs["messages"][0]["content"]
    image_blocks = [b for b in content if b["type"] == "image_url"]
    assert image_blocks[0]["image_url"]["url"] == f"data:image/jpeg;base64,{IMAGE_B64}"


async def test_openai_vision_none_content_raises():
    from antenna_analyzer.vision.openai import OpenAIVisionClient

    mock_choice = MagicMock()
    mock_choice.message.content = None
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]

    with patch("antenna_analyzer.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.chat.completions.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_openai
        client = OpenAIVisionClient(api_key="test-key")

        with pytest.raises(AnalysisFailedError):
            await client.analyze(IMAGE_B64, "image/jpeg")


# ── SDK client lifetime ───────────────────────────────────────────────────────


async def test_sdk_client_is_built_once_per_backend():
    from antenna_analyzer.vision.openai import OpenAIVisionClient

    mock_choice = MagicMock()
    mock_choice.message.content = "ปกติ"
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]

    with patch("antenna_analyzer.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.chat.completions.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_openai
        client = OpenAIVisionClient(api_key="test-key")

        await client.analyze(IMAGE_B64, "image/png")
        await client.analyze(IMAGE_B64, "image/png")

    mock_cls.assert_called_once_with(api_key="test-key")
    assert mock_openai.chat.completions.create.await_count == 2


async def test_aclose_closes_sdk_clients():
    from antenna_analyzer.vision.claude import ClaudeVisionClient
    from antenna_analyzer.vision.gemini import GeminiVisionClient
    from antenna_analyzer.vision.openai import OpenAIVisionClient

    with patch("antenna_analyzer.vision.claude.AsyncAnthropic") as anthropic_cls, \
            patch("antenna_analyzer.vision.openai.AsyncOpenAI") as openai_cls, \
            patch("antenna_analyzer.vision.gemini.genai.Client") as genai_cls:
        anthropic_cls.return_value = AsyncMock()
        openai_cls.return_value = AsyncMock()
        mock_genai = MagicMock()
        mock_genai.aio.aclose = AsyncMock()
        genai_cls.return_value = mock_genai

        await ClaudeVisionClient(api_key="k").aclose()
        await OpenAIVisionClient(api_key="k").aclose()
        await GeminiVisionClient(api_key="k").aclose()

    anthropic_cls.return_value.close.assert_awaited_once()
    openai_cls.return_value.close.assert_awaited_once()
    mock_genai.aio.aclose.assert_awaited_once()


async def test_base_aclose_is_noop():
    await StubVisionClient(reply="ok").aclose()
