"""
Transition table for the resume assistant conversation.

Each rule pairs an event kind with a guard over (current mode, event) and
names the state machine handler that runs when the guard holds. Rules are
checked in order and the first match wins; an event that matches nothing
is ignored.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from models.schemas import (
    ButtonAction,
    ConversationEvent,
    EventKind,
    SessionMode,
)

Guard = Callable[[SessionMode, ConversationEvent], bool]


class TransitionGuards:
    """Guard predicates over (current mode, event)"""

    @staticmethod
    def always(mode: SessionMode, event: ConversationEvent) -> bool:
        return True

    @staticmethod
    def command_is(name: str) -> Guard:
        return lambda mode, event: event.command == name

    @staticmethod
    def in_mode(expected: SessionMode) -> Guard:
        return lambda mode, event: mode == expected

    @staticmethod
    def button_in(*actions: ButtonAction) -> Guard:
        allowed = set(actions)
        return lambda mode, event: event.button in allowed

    @staticmethod
    def all_of(*guards: Guard) -> Guard:
        return lambda mode, event: all(guard(mode, event) for guard in guards)

    @staticmethod
    def is_pdf_upload(mode: SessionMode, event: ConversationEvent) -> bool:
        return event.is_pdf

    @staticmethod
    def is_not_pdf_upload(mode: SessionMode, event: ConversationEvent) -> bool:
        return not event.is_pdf


@dataclass(frozen=True)
class Transition:
    """One row of the transition table"""
    event_kind: EventKind
    guard: Guard
    handler: str
    description: str

    def matches(self, mode: SessionMode, event: ConversationEvent) -> bool:
        return event.kind == self.event_kind and self.guard(mode, event)


MENU_UPLOAD_PROMPTS = (
    ButtonAction.UPLOAD_RESUME,
    ButtonAction.ATS_SCORE,
    ButtonAction.ANALYZE_RESUME,
    ButtonAction.GENERATE_FROM_RESUME,
)
QUESTION_LIST_BUTTONS = (
    ButtonAction.GENERAL_QUESTIONS,
    ButtonAction.TECH_QUESTIONS,
    ButtonAction.BEHAVIORAL_QUESTIONS,
)

_guards = TransitionGuards


class TransitionRules:
    """The conversation's transition table"""

    EVENT_TRANSITIONS: List[Transition] = [
        Transition(EventKind.COMMAND, _guards.command_is("start"),
                   "_handle_start", "Show welcome menu and drop any flow"),
        Transition(EventKind.COMMAND, _guards.command_is("help"),
                   "_handle_help", "Show help guide"),
        Transition(EventKind.COMMAND, _guards.command_is("end_interview"),
                   "_handle_end_interview", "Stop the mock interview"),
        Transition(EventKind.BUTTON_PRESS, _guards.always,
                   "_handle_button_press", "Route an inline keyboard press"),
        Transition(EventKind.DOCUMENT_UPLOAD, _guards.is_pdf_upload,
                   "_handle_document", "Ingest an uploaded resume"),
        Transition(EventKind.DOCUMENT_UPLOAD, _guards.is_not_pdf_upload,
                   "_reject_document", "Reject a non-PDF upload"),
        Transition(EventKind.FREE_TEXT, _guards.in_mode(SessionMode.WAITING_FOR_JOB_TITLE),
                   "_handle_job_title", "Optimize resume for the typed job title"),
        Transition(EventKind.FREE_TEXT, _guards.in_mode(SessionMode.MOCK_INTERVIEW),
                   "_handle_interview_answer", "Give feedback and move to the next question"),
    ]

    # Checked after the press was acknowledged and stale sessions were cleared
    BUTTON_TRANSITIONS: List[Transition] = [
        Transition(EventKind.BUTTON_PRESS, _guards.button_in(*MENU_UPLOAD_PROMPTS),
                   "_prompt_for_upload", "Ask for a PDF upload"),
        Transition(EventKind.BUTTON_PRESS, _guards.button_in(ButtonAction.GENERATE_QUESTIONS),
                   "_show_question_types", "Show question type menu"),
        Transition(EventKind.BUTTON_PRESS, _guards.button_in(*QUESTION_LIST_BUTTONS),
                   "_generate_question_list", "Generate a generic question list"),
        Transition(EventKind.BUTTON_PRESS, _guards.button_in(ButtonAction.MOCK_INTERVIEW),
                   "_start_mock_interview", "Start a mock interview"),
        Transition(EventKind.BUTTON_PRESS, _guards.button_in(ButtonAction.HELP),
                   "_handle_help", "Show help guide"),
        Transition(EventKind.BUTTON_PRESS,
                   _guards.all_of(_guards.button_in(ButtonAction.ACTION_ATS),
                                  _guards.in_mode(SessionMode.RESUME_UPLOADED)),
                   "_resume_ats_score", "Score the uploaded resume"),
        Transition(EventKind.BUTTON_PRESS,
                   _guards.all_of(_guards.button_in(ButtonAction.ACTION_GENERATE_QUESTIONS),
                                  _guards.in_mode(SessionMode.RESUME_UPLOADED)),
                   "_resume_tailored_questions", "Questions tailored to detected skills"),
        Transition(EventKind.BUTTON_PRESS,
                   _guards.all_of(_guards.button_in(ButtonAction.ACTION_CONTENT_ANALYSIS),
                                  _guards.in_mode(SessionMode.RESUME_UPLOADED)),
                   "_resume_content_analysis", "Full resume analysis"),
        Transition(EventKind.BUTTON_PRESS,
                   _guards.all_of(_guards.button_in(ButtonAction.ACTION_OPTIMIZE_ROLE),
                                  _guards.in_mode(SessionMode.RESUME_UPLOADED)),
                   "_resume_ask_job_title", "Wait for a job title"),
    ]

    @staticmethod
    def _first_match(rules: List[Transition], mode: SessionMode,
                     event: ConversationEvent) -> Optional[Transition]:
        for rule in rules:
            if rule.matches(mode, event):
                return rule
        return None

    @classmethod
    def match_event(cls, mode: SessionMode, event: ConversationEvent) -> Optional[Transition]:
        """Find the rule for an inbound event"""
        return cls._first_match(cls.EVENT_TRANSITIONS, mode, event)

    @classmethod
    def match_button(cls, mode: SessionMode, event: ConversationEvent) -> Optional[Transition]:
        """Find the rule for a button press"""
        return cls._first_match(cls.BUTTON_TRANSITIONS, mode, event)
