"""FastAPI application for the Resume Assistant Bot"""
import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables
load_dotenv()

from api.routes.telegram_webhook import router as telegram_router
from config import Settings, get_settings
from core.conversation.session_store import InMemorySessionStore, StorageConfig
from core.conversation.state_machine import ConversationStateMachine
from core.exceptions import TransportError
from core.messaging.delivery import DeliveryPipeline
from core.services.document_ingestion import DocumentIngestionAdapter
from core.services.gemini_service import GeminiService
from core.services.telegram_poller import TelegramPoller
from core.services.telegram_service import TelegramService

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_state_machine(settings: Settings, telegram: TelegramService) -> ConversationStateMachine:
    """Wire the conversation core to the Telegram and Gemini adapters"""
    ttl = timedelta(minutes=settings.SESSION_TTL_MINUTES) if settings.SESSION_TTL_MINUTES else None

    gemini = GeminiService(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        temperature=settings.GEMINI_TEMPERATURE,
        top_p=settings.GEMINI_TOP_P,
        top_k=settings.GEMINI_TOP_K,
        timeout_seconds=settings.GEMINI_TIMEOUT_SECONDS,
        max_retries=settings.GEMINI_MAX_RETRIES,
    )
    delivery = DeliveryPipeline(
        telegram,
        max_length=settings.MAX_MESSAGE_LENGTH,
        chunk_delay=settings.CHUNK_DELAY_SECONDS,
    )
    ingestion = DocumentIngestionAdapter(telegram, download_dir=settings.DOWNLOAD_DIR)

    return ConversationStateMachine(
        store=InMemorySessionStore(StorageConfig(session_ttl=ttl)),
        delivery=delivery,
        generator=gemini,
        ingestion=ingestion,
        interview_question_count=settings.INTERVIEW_QUESTION_COUNT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing TELEGRAM_BOT_TOKEN / GEMINI_API_KEY stops startup here
    settings = get_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())

    telegram = TelegramService(settings.TELEGRAM_BOT_TOKEN, api_base=settings.TELEGRAM_API_BASE)
    state_machine = build_state_machine(settings, telegram)

    app.state.state_machine = state_machine
    app.state.session_store = state_machine.store
    app.state.webhook_secret = settings.TELEGRAM_WEBHOOK_SECRET
    app.state.handler_tasks = set()

    poller = None
    if settings.use_webhook:
        if settings.TELEGRAM_WEBHOOK_URL:
            try:
                await telegram.set_webhook(settings.TELEGRAM_WEBHOOK_URL, settings.TELEGRAM_WEBHOOK_SECRET)
            except TransportError as e:
                logger.error(f"❌ Could not register Telegram webhook: {e}")
        else:
            logger.warning("⚠️  Webhook mode without TELEGRAM_WEBHOOK_URL - expecting an externally registered webhook")
    else:
        try:
            await telegram.delete_webhook()
        except TransportError as e:
            logger.warning(f"⚠️  Could not remove Telegram webhook before polling: {e}")
        poller = TelegramPoller(telegram, state_machine.handle, poll_timeout=settings.TELEGRAM_POLL_TIMEOUT)
        poller.start()

    logger.info(f"🤖 Resume Assistant Bot is running ({settings.ENVIRONMENT}, {settings.TELEGRAM_MODE} mode)")

    yield

    if poller:
        await poller.stop()
    if app.state.handler_tasks:
        await asyncio.gather(*app.state.handler_tasks, return_exceptions=True)


# Create FastAPI app
app = FastAPI(
    title="Resume Assistant Bot",
    version="1.0.0",
    description="Telegram resume assistant backed by Gemini",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    store = getattr(app.state, "session_store", None)
    return {
        "status": "OK",
        "bot": "running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "active_sessions": store.active_count() if store is not None else 0,
    }


# Include routers
app.include_router(telegram_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_settings().PORT)
