"""Error taxonomy shared by the conversation core and its adapters"""


class ResumeBotError(Exception):
    """Base class for all bot errors"""


class TransportError(ResumeBotError):
    """Sending to or downloading from the chat platform failed"""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class ExtractionError(ResumeBotError):
    """Uploaded document could not be retrieved or parsed as a PDF"""


class GenerationError(ResumeBotError):
    """LLM request failed; only ever raised inside the Gemini adapter"""


class GuardViolation(ResumeBotError):
    """Event does not match the current session mode"""

    def __init__(self, message: str, mode=None):
        super().__init__(message)
        self.mode = mode
