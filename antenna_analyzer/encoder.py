"""Image encoder — file or bytes → base64 payload for the vision backends."""
import asyncio
import base64
import logging
from pathlib import Path
from typing import BinaryIO

from antenna_analyzer.constants import DATA_URL_SEPARATOR
from antenna_analyzer.errors import ImageEncodingError

logger = logging.getLogger(__name__)


def encode_bytes(data: bytes) -> str:
    return base64.standard_b64encode(data).decode("ascii")


def strip_data_url(value: str) -> str:
    """'data:image/png;base64,AAAA' → 'AAAA'; plain base64 passes through."""
    match value.startswith("data:"), value.partition(DATA_URL_SEPARATOR):
        case (True, (_, sep, payload)) if sep:
            return payload
        case _:
            return value


def _read_all(source: Path | str | BinaryIO) -> bytes:
    match source:
        case Path() | str():
            return Path(source).read_bytes()
        case _:
            return source.read()


async def encode_file(source: Path | str | BinaryIO) -> str:
    """Read the whole file and return its base64 contents. Raises ImageEncodingError."""
    try:
        data = await asyncio.to_thread(_read_all, source)
    except (OSError, ValueError) as exc:
        logger.debug("Image read failed: %s", exc)
        raise ImageEncodingError(f"Could not read image: {exc}") from exc

    match data:
        case bytes() | bytearray():
            return encode_bytes(bytes(data))
        case _:
            raise ImageEncodingError("Image source did not yield bytes")
