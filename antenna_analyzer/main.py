"""Entry point — wires Config → VisionClient → TelegramClient."""
import logging

from rich.logging import RichHandler

from antenna_analyzer.config import Config
from antenna_analyzer.constants import (
    MSG_BOT_STARTING,
    MSG_USING_PROVIDER,
    PROVIDER_CLAUDE,
    PROVIDER_GEMINI,
    PROVIDER_OPENAI,
)
from antenna_analyzer.telegram.client import TelegramClient
from antenna_analyzer.vision.claude import ClaudeVisionClient
from antenna_analyzer.vision.client import VisionClient
from antenna_analyzer.vision.gemini import GeminiVisionClient
from antenna_analyzer.vision.openai import OpenAIVisionClient

VISION_BACKENDS: dict[str, type[VisionClient]] = {
    PROVIDER_GEMINI: GeminiVisionClient,
    PROVIDER_CLAUDE: ClaudeVisionClient,
    PROVIDER_OPENAI: OpenAIVisionClient,
}


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def build_vision_client(config: Config) -> VisionClient:
    backend = VISION_BACKENDS[config.vision_provider]
    return backend(config.vision_api_key, config.vision_model)


def main() -> None:
    # Missing credentials raise here, before any handler is registered.
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_BOT_STARTING)

    vision = build_vision_client(config)
    logger.info(MSG_USING_PROVIDER, vision.name, vision.model)

    client = TelegramClient(config, vision_client=vision)
    client.run()


if __name__ == "__main__":
    main()
