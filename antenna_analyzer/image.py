from dataclasses import dataclass, field
from typing import Optional

from antenna_analyzer.constants import IMAGE_MIME_PREFIX, MSG_INVALID_IMAGE
from antenna_analyzer.errors import InvalidImageError


def is_image_mime(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.lower().startswith(IMAGE_MIME_PREFIX)


@dataclass(frozen=True)
class UploadedImage:
    data: bytes = field(repr=False)
    mime_type: str
    filename: Optional[str] = None

    @property
    def is_image(self) -> bool:
        return is_image_mime(self.mime_type)

    def require_image(self) -> "UploadedImage":
        match self.is_image:
            case True:
                return self
            case False:
                raise InvalidImageError(MSG_INVALID_IMAGE)
