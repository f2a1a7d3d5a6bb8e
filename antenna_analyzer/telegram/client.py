"""TelegramClient — chat surface for the analyzer via python-telegram-bot."""
import logging
from typing import Callable, Optional

from telegram import Bot, Update
from telegram.ext import Application, CommandHandler, ContextTypes
from telegram.ext import MessageHandler as TGMessageHandler
from telegram.ext import filters

from antenna_analyzer.config import Config
from antenna_analyzer.constants import (
    CAPTION_ANALYZE,
    CMD_ANALYZE,
    CMD_CLEAR,
    CMD_HELP,
    CMD_START,
    MSG_ANALYSIS_FAILED,
    MSG_ANALYSIS_IN_PROGRESS,
    MSG_BLOCKED_CHAT,
    MSG_CLEARED,
    MSG_ERROR_PREFIX,
    MSG_HELP,
    MSG_IMAGE_SELECTED,
    MSG_SEND_FAIL,
    TELEGRAM_PHOTO_MIME,
)
from antenna_analyzer.errors import AnalysisInProgressError
from antenna_analyzer.image import UploadedImage, is_image_mime
from antenna_analyzer.session import Ready, SessionStore
from antenna_analyzer.telegram.typing import TelegramTypingIndicator
from antenna_analyzer.view import render_state
from antenna_analyzer.vision.client import VisionClient

logger = logging.getLogger(__name__)


class TelegramClient:

    def __init__(
        self,
        config: Config,
        vision_client: VisionClient,
        sessions: Optional[SessionStore] = None,
    ) -> None:
        self._token = config.telegram_bot_token
        self._allowed_chat_id = config.allowed_chat_id
        self._app: Optional[Application] = None
        self._vision_client = vision_client
        self._sessions = sessions if sessions is not None else SessionStore()

    def run(self) -> None:
        self._app = (
            Application.builder()
            .token(self._token)
            .concurrent_updates(True)
            .post_shutdown(self._on_shutdown)
            .build()
        )
        self._app.add_handler(CommandHandler([CMD_START, CMD_HELP], self._make_help_handler()))
        self._app.add_handler(CommandHandler(CMD_ANALYZE, self._make_analyze_handler()))
        self._app.add_handler(CommandHandler(CMD_CLEAR, self._make_clear_handler()))
        self._app.add_handler(TGMessageHandler(filters.PHOTO, self._make_photo_handler()))
        self._app.add_handler(
            TGMessageHandler(filters.Document.ALL, self._make_document_handler())
        )
        self._app.run_polling()

    async def send_message(self, to: str, text: Optional[str]) -> bool:
        match (self._app, text):
            case (_, None | ""):
                return False
            case (None, _):
                logger.error("send_message called before run()")
                return False
            case (app, body):
                try:
                    await app.bot.send_message(chat_id=int(to), text=body)
                    return True
                except Exception as exc:
                    logger.error(MSG_SEND_FAIL, exc)
                    return False

    async def _on_shutdown(self, app: Application) -> None:
        await self._vision_client.aclose()

    # ── helpers (also used in tests) ─────────────────────────────────────────

    def _is_allowed(self, update: Update) -> bool:
        if update.effective_chat is None:
            return False
        match self._allowed_chat_id:
            case None:
                return True
            case allowed:
                return str(update.effective_chat.id) == allowed.strip()

    def _allowed_sender(self, update: Update) -> Optional[str]:
        """Chat id of an allowed update, else None (blocked updates are logged)."""
        match self._is_allowed(update):
            case False:
                chat_id = update.effective_chat.id if update.effective_chat else "?"
                logger.warning(MSG_BLOCKED_CHAT, chat_id)
                return None
            case True:
                return str(update.effective_chat.id)

    @staticmethod
    def _wants_analysis(caption: Optional[str]) -> bool:
        return (caption or "").strip().lower() == CAPTION_ANALYZE

    async def _select(
        self, sender: str, image: UploadedImage, caption: Optional[str], bot: Bot
    ) -> None:
        state = self._sessions.get(sender).select(image)
        match state:
            case Ready():
                logger.info(MSG_IMAGE_SELECTED, sender, image.mime_type, len(image.data))
                if self._wants_analysis(caption):
                    await self._analyze(sender, bot)
                    return
            case _:
                pass
        await self.send_message(sender, render_state(state))

    async def _analyze(self, sender: str, bot: Bot) -> None:
        session = self._sessions.get(sender)
        try:
            async with TelegramTypingIndicator(bot, sender):
                state = await session.analyze(self._vision_client)
        except AnalysisInProgressError:
            await self.send_message(sender, MSG_ANALYSIS_IN_PROGRESS)
            return
        await self.send_message(sender, render_state(state))

    # ── internal handler factory ──────────────────────────────────────────────

    def _make_help_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            sender = self._allowed_sender(update)
            if sender is None:
                return
            await self.send_message(sender, MSG_HELP)

        return _handler

    def _make_clear_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            sender = self._allowed_sender(update)
            if sender is None:
                return
            self._sessions.drop(sender)
            await self.send_message(sender, MSG_CLEARED)

        return _handler

    def _make_analyze_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            sender = self._allowed_sender(update)
            if sender is None:
                return
            await self._analyze(sender, context.bot)

        return _handler

    def _make_photo_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            sender = self._allowed_sender(update)
            if sender is None:
                return

            photos = update.message.photo if update.message else None
            match photos:
                case None | ():
                    return
                case _:
                    try:
                        tg_file = await photos[-1].get_file()
                        data = bytes(await tg_file.download_as_bytearray())
                    except Exception:
                        logger.exception("Photo download failed")
                        await self.send_message(sender, MSG_ERROR_PREFIX % MSG_ANALYSIS_FAILED)
                        return
                    image = UploadedImage(data=data, mime_type=TELEGRAM_PHOTO_MIME)
                    await self._select(sender, image, update.message.caption, context.bot)

        return _handler

    def _make_document_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            sender = self._allowed_sender(update)
            if sender is None:
                return

            document = update.message.document if update.message else None
            match document:
                case None:
                    return
                case doc if not is_image_mime(doc.mime_type):
                    # Rejected before any download.
                    image = UploadedImage(
                        data=b"", mime_type=doc.mime_type or "", filename=doc.file_name
                    )
                case doc:
                    try:
                        tg_file = await doc.get_file()
                        data = bytes(await tg_file.download_as_bytearray())
                    except Exception:
                        logger.exception("Document download failed")
                        await self.send_message(sender, MSG_ERROR_PREFIX % MSG_ANALYSIS_FAILED)
                        return
                    image = UploadedImage(
                        data=data, mime_type=doc.mime_type, filename=doc.file_name
                    )
            await self._select(sender, image, update.message.caption, context.bot)

        return _handler
