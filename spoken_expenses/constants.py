"""All magic values live here — no inline literals anywhere else."""

# Telegram typing indicator re-send interval (seconds).
# The TYPING action expires after ~5 s, so we refresh every 4 s.
TELEGRAM_TYPING_INTERVAL: float = 4.0

# Audio
DEFAULT_AUDIO_MIME_TYPE = "audio/webm"
TELEGRAM_VOICE_MIME_TYPE = "audio/ogg"
DATA_URI_PREFIX = "data:"
DATA_URI_BASE64_MARKER = ";base64"

# Providers
PROVIDER_GEMINI = "gemini"
PROVIDER_OPENAI = "openai"
DEFAULT_PROVIDER = PROVIDER_GEMINI

# Gemini REST API
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_API_KEY_HEADER = "x-goog-api-key"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
RESPONSE_MIME_TYPE = "application/json"
SAFETY_THRESHOLD = "BLOCK_ONLY_HIGH"
SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)

# OpenAI fallback
WHISPER_MODEL = "whisper-1"
OPENAI_EXTRACTION_MODEL = "gpt-4o"
OPENAI_SCHEMA_NAME = "expense_response"

# Sampling and transport
EXTRACTION_TEMPERATURE: float = 0.1
DEFAULT_REQUEST_TIMEOUT: float = 60.0

# Retry: 2 retries after the first attempt, 1 s then 2 s.
MAX_RETRIES = 2
INITIAL_RETRY_DELAY: float = 1.0
RETRY_BACKOFF_FACTOR: float = 2.0

# Prompting
ANALYZE_PROMPT = "Please analyze this audio for expenses."
TRANSCRIPT_PROMPT = (
    "The audio has already been transcribed. Analyze this transcript for expenses "
    "and copy it verbatim into the transcription field.\n\nTranscript:\n%s"
)
SYSTEM_INSTRUCTION = """\
You are an expert financial assistant and translator.
Your goal is to listen to audio recordings that may contain mixed Hindi and English speech about daily expenses.

Tasks:
1. Transcribe the audio accurately in the original script (Devanagari for Hindi).
2. Translate it to clear English.
3. Extract every single expense item mentioned.
4. CRITICAL: Convert number words to digits with extreme precision.
   - Handle Indian numbering system: "ek lakh" = 100000, "pachis hazar" = 25000, "dedh lakh" = 150000.
   - Handle mixed phrasing: "200 ka aaloo" (200 for potatoes).
5. Categorize each item accurately.
6. Calculate the total sum."""

# Log messages
MSG_BOT_STARTING = "Starting expense bot…"
MSG_BLOCKED_CHAT = "Blocked update from chat_id: %s"
MSG_SEND_OK = "✓ Sent (%.1fs)"
MSG_SEND_FAIL = "✗ Send failed (%.1fs)"
MSG_ATTEMPT_FAILED = "%s API error (attempt failed): %s"
MSG_EMPTY_RESPONSE = "Empty response from %s"
MSG_EXTRACTED = "Extracted %d expense(s), total %s %s"

# User-facing replies
MSG_EXPENSE_FAILED = "Could not read expenses from that recording — please try again."
MSG_NOT_CONFIGURED = "Expense extraction is not configured in this setup."
MSG_SEND_VOICE = "Send me a voice note describing what you spent, e.g. \"200 ka aaloo, ek lakh ka laptop\"."
MSG_NO_EXPENSES = "No expenses found in this recording."
MSG_EXPENSES_HEADER = "Expenses (%s)"
MSG_EXPENSE_LINE = "• %s: %s [%s]"
MSG_TOTAL_LINE = "Total: %s"
MSG_TOTAL_MISMATCH = "Total: %s (items add up to %s)"
MSG_HEARD = "Heard: %s"
MSG_TRANSLATION = "English: %s"

CMD_STATUS = "status"
MSG_STATUS = (
    "Status\n"
    "  Provider : %s\n"
    "  Model    : %s\n"
)

MSG_HELP = (
    "spoken-expenses — log what you spent by voice\n"
    "\n"
    "Commands:\n"
    "  /help     — show this message\n"
    "  /status   — current provider and model\n"
    "\n"
    "Media:\n"
    "  Voice note  — transcribed, translated and itemised\n"
    "  Audio file  — same as a voice note\n"
    "\n"
    "Hindi, English or a mix of both works: \"dedh lakh ka sofa\", \"500 for petrol\".\n"
)
