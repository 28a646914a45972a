"""Tests for long polling and update dispatch"""
import asyncio

from core.services.telegram_poller import TelegramPoller, dispatch_update
from models.schemas import CommandEvent, FreeTextEvent


class FakeTelegram:
    def __init__(self, batches):
        self.batches = list(batches)
        self.offsets = []

    async def get_updates(self, offset=None, timeout=25):
        self.offsets.append(offset)
        if self.batches:
            return self.batches.pop(0)
        # Stand in for the long poll so the loop yields
        await asyncio.sleep(0)
        return []


def text_update(update_id, text, chat_id=555):
    return {
        "update_id": update_id,
        "message": {"message_id": update_id, "chat": {"id": chat_id}, "text": text},
    }


class RecordingHandler:
    def __init__(self):
        self.events = []

    async def __call__(self, event):
        self.events.append(event)


async def test_dispatch_schedules_handler():
    handler = RecordingHandler()
    tasks = set()

    task = dispatch_update(text_update(1, "/start"), handler, tasks)
    assert task in tasks

    await task
    assert handler.events == [CommandEvent(conversation_id=555, command="start")]
    # Done callback drops finished tasks
    await asyncio.sleep(0)
    assert tasks == set()


async def test_dispatch_skips_unsupported_and_malformed_updates():
    handler = RecordingHandler()
    tasks = set()

    assert dispatch_update({"update_id": 2, "edited_message": {}}, handler, tasks) is None
    assert dispatch_update({"message": "garbage"}, handler, tasks) is None
    assert tasks == set()


async def test_poll_once_advances_offset():
    telegram = FakeTelegram([
        [text_update(100, "/start"), text_update(101, "Data Engineer")],
        [],
    ])
    handler = RecordingHandler()
    poller = TelegramPoller(telegram, handler, poll_timeout=1)

    assert await poller.poll_once() == 2
    assert await poller.poll_once() == 0
    assert telegram.offsets == [None, 102]

    await poller.stop()
    assert handler.events == [
        CommandEvent(conversation_id=555, command="start"),
        FreeTextEvent(conversation_id=555, text="Data Engineer"),
    ]


async def test_start_and_stop_background_polling():
    telegram = FakeTelegram([[text_update(5, "/help")]])
    handler = RecordingHandler()
    poller = TelegramPoller(telegram, handler, poll_timeout=1)

    poller.start()
    for _ in range(50):
        await asyncio.sleep(0)
        if handler.events:
            break

    await poller.stop()
    assert handler.events == [CommandEvent(conversation_id=555, command="help")]
