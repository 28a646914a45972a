"""Tests for mapping Telegram updates onto conversation events"""
import pytest
from pydantic import ValidationError

from models.schemas import (
    ButtonAction,
    ButtonPressEvent,
    CommandEvent,
    DocumentUploadEvent,
    FreeTextEvent,
)
from models.telegram import TelegramUpdate, parse_command


def message_update(**message_fields):
    message = {"message_id": 10, "chat": {"id": 555, "type": "private"}, "date": 1700000000}
    message.update(message_fields)
    return TelegramUpdate.model_validate({"update_id": 1, "message": message})


def test_slash_text_becomes_command():
    event = message_update(text="/start").to_event()
    assert event == CommandEvent(conversation_id=555, command="start")


@pytest.mark.parametrize("text, expected", [
    ("/start", "start"),
    ("/End_Interview", "end_interview"),
    ("/help@ResumeHelperBot", "help"),
    ("/start referral-42", "start"),
])
def test_parse_command(text, expected):
    assert parse_command(text) == expected


def test_plain_text_becomes_free_text():
    event = message_update(text="Senior Frontend Developer").to_event()
    assert isinstance(event, FreeTextEvent)
    assert event.text == "Senior Frontend Developer"
    assert event.conversation_id == 555


def test_document_becomes_upload_event():
    event = message_update(document={
        "file_id": "BQACAgIAAxk",
        "file_unique_id": "AgADx",
        "file_name": "resume.pdf",
        "mime_type": "application/pdf",
        "file_size": 48213,
    }).to_event()

    assert isinstance(event, DocumentUploadEvent)
    assert event.file_id == "BQACAgIAAxk"
    assert event.file_name == "resume.pdf"
    assert event.is_pdf


def test_document_with_caption_is_still_an_upload():
    event = message_update(
        document={"file_id": "f1", "mime_type": "image/jpeg"},
        caption="my cv",
    ).to_event()

    assert isinstance(event, DocumentUploadEvent)
    assert not event.is_pdf


def test_callback_query_becomes_button_press():
    update = TelegramUpdate.model_validate({
        "update_id": 2,
        "callback_query": {
            "id": "cbq-9",
            "from": {"id": 555, "is_bot": False, "first_name": "Ada"},
            "data": "action_ats",
            "message": {"message_id": 11, "chat": {"id": 555}},
        },
    })

    event = update.to_event()

    assert isinstance(event, ButtonPressEvent)
    assert event.interaction_id == "cbq-9"
    assert event.button == ButtonAction.ACTION_ATS
    assert event.is_resume_action


def test_unknown_button_code_has_no_action():
    event = ButtonPressEvent(conversation_id=1, action="something_else", interaction_id="x")
    assert event.button is None
    assert not event.is_resume_action


def test_unhandled_updates_give_no_event():
    assert message_update(sticker={"file_id": "s"}).to_event() is None
    assert TelegramUpdate.model_validate({"update_id": 3}).to_event() is None
    assert TelegramUpdate.model_validate({
        "update_id": 4,
        "callback_query": {"id": "cbq", "data": "help"},
    }).to_event() is None


def test_malformed_update_is_rejected():
    with pytest.raises(ValidationError):
        TelegramUpdate.model_validate({"message": {"text": "no ids"}})
