from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from antenna_analyzer.constants import (
    PROVIDER_CLAUDE,
    PROVIDER_GEMINI,
    PROVIDER_OPENAI,
    VISION_PROVIDERS,
)


@dataclass(frozen=True)
class Config:
    telegram_bot_token: str
    log_level: str
    allowed_chat_id: Optional[str]
    gemini_api_key: Optional[str]
    anthropic_api_key: Optional[str]
    openai_api_key: Optional[str]
    vision_provider: str
    vision_model: Optional[str]

    @property
    def vision_api_key(self) -> str:
        keys = {
            PROVIDER_GEMINI: self.gemini_api_key,
            PROVIDER_CLAUDE: self.anthropic_api_key,
            PROVIDER_OPENAI: self.openai_api_key,
        }
        return keys.get(self.vision_provider) or ""

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        return cls._validate(
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            allowed_chat_id=os.getenv("ALLOWED_CHAT_ID") or None,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            vision_provider=(os.getenv("VISION_PROVIDER") or "").strip().lower() or None,
            vision_model=os.getenv("VISION_MODEL") or None,
        )

    @staticmethod
    def _validate(
        telegram_bot_token: Optional[str],
        log_level: str,
        allowed_chat_id: Optional[str],
        gemini_api_key: Optional[str],
        anthropic_api_key: Optional[str],
        openai_api_key: Optional[str],
        vision_provider: Optional[str],
        vision_model: Optional[str],
    ) -> "Config":
        match telegram_bot_token:
            case None | "":
                raise ValueError("TELEGRAM_BOT_TOKEN must be set in .env")
            case _:
                pass

        keys = {
            PROVIDER_GEMINI: gemini_api_key,
            PROVIDER_CLAUDE: anthropic_api_key,
            PROVIDER_OPENAI: openai_api_key,
        }
        match vision_provider:
            case None:
                available = [name for name in VISION_PROVIDERS if keys[name]]
                if not available:
                    raise ValueError(
                        "GEMINI_API_KEY, ANTHROPIC_API_KEY or OPENAI_API_KEY must be set in .env"
                    )
                vision_provider = available[0]
            case name if name not in VISION_PROVIDERS:
                raise ValueError(f"VISION_PROVIDER must be one of {', '.join(VISION_PROVIDERS)}")
            case name if not keys[name]:
                raise ValueError(f"VISION_PROVIDER={name} but its API key is not set in .env")
            case _:
                pass

        return Config(
            telegram_bot_token=telegram_bot_token,
            log_level=log_level,
            allowed_chat_id=allowed_chat_id,
            gemini_api_key=gemini_api_key,
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
            vision_provider=vision_provider,
            vision_model=vision_model,
        )
