"""
Telegram Webhook Endpoint
Receives updates from Telegram and routes them to the conversation state machine

Telegram only needs a fast 200; the actual handling (LLM calls, downloads,
replies) runs in a background task per update.
"""

from fastapi import APIRouter, HTTPException, Request
import logging

from core.services.telegram_poller import dispatch_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/telegram", tags=["Telegram"])

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def validate_telegram_request(request: Request) -> bool:
    """
    Validate that the request came from Telegram

    When a webhook secret is configured, Telegram echoes it back in the
    X-Telegram-Bot-Api-Secret-Token header of every request.
    """
    expected = getattr(request.app.state, "webhook_secret", None)
    if not expected:
        return True

    received = request.headers.get(SECRET_HEADER, "")
    if received != expected:
        logger.error("❌ Invalid Telegram secret token on webhook request")
        return False
    return True


@router.post("/webhook")
async def telegram_webhook(request: Request):
    """
    Receive an update from Telegram

    Flow:
    1. Validate the secret token header
    2. Parse the JSON update
    3. Schedule handling in the background
    4. Acknowledge immediately
    """
    if not validate_telegram_request(request):
        raise HTTPException(status_code=403, detail="Invalid secret token")

    try:
        update = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Body must be a JSON update")

    if not isinstance(update, dict):
        raise HTTPException(status_code=400, detail="Body must be a JSON update")

    logger.info(f"📥 [TELEGRAM-WEBHOOK] Update {update.get('update_id')} received")

    state_machine = request.app.state.state_machine
    dispatch_update(update, state_machine.handle, request.app.state.handler_tasks)

    return {"ok": True}
