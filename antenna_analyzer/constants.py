"""All magic values live here — no inline literals anywhere else."""

# Telegram typing indicator re-send interval (seconds).
# The TYPING action expires after ~5 s, so we refresh every 4 s.
TELEGRAM_TYPING_INTERVAL: float = 4.0

# In-memory sessions kept before the least recently used idle ones are dropped.
SESSION_STORE_MAX_CHATS = 500

# Vision backends
PROVIDER_GEMINI = "gemini"
PROVIDER_CLAUDE = "claude"
PROVIDER_OPENAI = "openai"
VISION_PROVIDERS = (PROVIDER_GEMINI, PROVIDER_CLAUDE, PROVIDER_OPENAI)
GEMINI_VISION_MODEL = "gemini-2.5-flash-image"
CLAUDE_VISION_MODEL = "claude-opus-4-6"
OPENAI_VISION_MODEL = "gpt-4o"
CLAUDE_MAX_TOKENS = 1024

ANALYSIS_PROMPT = (
    "วิเคราะห์ภาพถ่ายสายอากาศนี้ และระบุสถานะว่าเป็น 'ปกติ', 'เกิด Flashover', "
    "หรือ 'แตกหัก' โปรดตอบกลับด้วยสถานะและคำอธิบายสั้นๆ"
)

# Status markers, checked in this order; first match wins.
MARKER_NORMAL = "ปกติ"
MARKER_FLASHOVER = "เกิด Flashover"
MARKER_CRACKED = "แตกหัก"

ICON_NORMAL = "✅"
ICON_FLASHOVER = "⚠️"
ICON_CRACKED = "❌"

# Upload handling
IMAGE_MIME_PREFIX = "image/"
TELEGRAM_PHOTO_MIME = "image/jpeg"
DATA_URL_SEPARATOR = ","
CAPTION_ANALYZE = "analyze"

# Commands
CMD_START = "start"
CMD_HELP = "help"
CMD_ANALYZE = "analyze"
CMD_CLEAR = "clear"

# Log messages
MSG_BOT_STARTING = "Starting antenna analyzer bot…"
MSG_BLOCKED_CHAT = "Blocked update from chat_id: %s"
MSG_USING_PROVIDER = "Vision backend: %s (%s)"
MSG_IMAGE_SELECTED = "Image selected - chat_id: %s - mime: %s - bytes: %d"
MSG_ANALYSIS_DONE = "✓ Analysis finished (%.1fs)"
MSG_ANALYSIS_ERROR = "✗ Analysis failed (%.1fs)"
MSG_STALE_RESULT = "Dropping stale analysis outcome, session moved on"
MSG_SEND_FAIL = "Telegram send_message failed: %s"

# User-facing messages
MSG_INVALID_IMAGE = "Please upload a valid image file."
MSG_UPLOAD_FIRST = "Please upload an image first."
MSG_ANALYSIS_FAILED = "An error occurred during analysis. Please try again."
MSG_REMOTE_FAILED = "Failed to analyze image."
MSG_EMPTY_RESPONSE = "No text response from the vision backend."
MSG_ANALYSIS_IN_PROGRESS = "กำลังวิเคราะห์... กรุณารอสักครู่"
MSG_IMAGE_READY = "ได้รับภาพแล้ว ส่ง /analyze เพื่อเริ่มการวิเคราะห์ หรือ /clear เพื่อลบภาพ"
MSG_ANALYZING = "กำลังวิเคราะห์..."
MSG_CLEARED = "ลบภาพแล้ว อัปโหลดภาพใหม่ได้เลย"
MSG_ERROR_PREFIX = "เกิดข้อผิดพลาด: %s"
MSG_RESULT_HEADER = "ผลการวิเคราะห์"

MSG_HELP = (
    "Antenna Status Analyzer\n"
    "อัปโหลดภาพถ่ายสายอากาศเพื่อวิเคราะห์สถานะ\n"
    "\n"
    "Commands:\n"
    "  /help      — show this message\n"
    "  /analyze   — analyze the current image\n"
    "  /clear     — remove the current image\n"
    "\n"
    "Media:\n"
    "  Photo                 — becomes the current image\n"
    "  Image file (document) — PNG, JPG, WEBP\n"
    "  Photo + caption 'analyze' — upload and analyze in one step\n"
    "\n"
    "Status:\n"
    f"  {ICON_NORMAL} {MARKER_NORMAL}\n"
    f"  {ICON_FLASHOVER} {MARKER_FLASHOVER}\n"
    f"  {ICON_CRACKED} {MARKER_CRACKED}\n"
)
