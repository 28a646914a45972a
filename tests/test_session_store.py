"""Tests for session storage and the session models"""
from datetime import timedelta

import pytest
from pydantic import TypeAdapter, ValidationError

from core.conversation.session_store import InMemorySessionStore, StorageConfig
from models.schemas import (
    MockInterviewSession,
    ResumeUploadedSession,
    Session,
    SessionMode,
    mode_of,
)

from tests.conftest import CHAT_ID, RESUME_TEXT


def test_missing_session_is_none_mode(store):
    assert store.get(CHAT_ID) is None
    assert mode_of(store.get(CHAT_ID)) == SessionMode.NONE


def test_set_then_get_returns_equal_copy(store):
    session = ResumeUploadedSession(resume_text=RESUME_TEXT, extracted_skills=["Python"])
    store.set(CHAT_ID, session)

    fetched = store.get(CHAT_ID)
    assert fetched == session
    assert fetched is not session


def test_mutating_a_fetched_session_does_not_touch_the_store(store):
    store.set(CHAT_ID, MockInterviewSession(questions=["1. One", "2. Two"]))

    fetched = store.get(CHAT_ID)
    fetched.current_question_index = 1
    fetched.questions.append("3. Three")

    again = store.get(CHAT_ID)
    assert again.current_question_index == 0
    assert again.questions == ["1. One", "2. Two"]


def test_set_replaces_previous_session(store):
    store.set(CHAT_ID, ResumeUploadedSession(resume_text=RESUME_TEXT))
    store.set(CHAT_ID, MockInterviewSession(questions=["1. Why us?"]))

    assert mode_of(store.get(CHAT_ID)) == SessionMode.MOCK_INTERVIEW


def test_delete_reports_whether_a_session_existed(store):
    store.set(CHAT_ID, ResumeUploadedSession(resume_text=RESUME_TEXT))

    assert store.delete(CHAT_ID) is True
    assert store.delete(CHAT_ID) is False
    assert store.get(CHAT_ID) is None


def test_conversations_are_isolated(store):
    store.set(1, ResumeUploadedSession(resume_text="first"))
    store.set("channel-2", ResumeUploadedSession(resume_text="second"))

    assert store.get(1).resume_text == "first"
    assert store.get("channel-2").resume_text == "second"
    assert store.active_count() == 2


def test_expired_session_is_dropped():
    store = InMemorySessionStore(StorageConfig(session_ttl=timedelta(0)))
    store.set(CHAT_ID, ResumeUploadedSession(resume_text=RESUME_TEXT))

    assert store.get(CHAT_ID) is None
    assert store.active_count() == 0


def test_sessions_kept_without_ttl(store):
    store.set(CHAT_ID, ResumeUploadedSession(resume_text=RESUME_TEXT))
    assert store.get(CHAT_ID) is not None


def test_interview_needs_at_least_one_question():
    with pytest.raises(ValidationError):
        MockInterviewSession(questions=[])


def test_interview_index_must_point_at_a_question():
    with pytest.raises(ValidationError):
        MockInterviewSession(questions=["1. Only one"], current_question_index=1)
    with pytest.raises(ValidationError):
        MockInterviewSession(questions=["1. Only one"], current_question_index=-1)


def test_interview_progress_helpers():
    session = MockInterviewSession(questions=["1. A", "2. B"])
    assert session.current_question == "1. A"
    assert session.has_next_question

    session.current_question_index = 1
    assert session.current_question == "2. B"
    assert not session.has_next_question


def test_session_union_is_discriminated_by_mode():
    adapter = TypeAdapter(Session)
    session = adapter.validate_python({"mode": "waiting_for_job_title", "resume_text": RESUME_TEXT})

    assert mode_of(session) == SessionMode.WAITING_FOR_JOB_TITLE
    assert session.extracted_skills == []
