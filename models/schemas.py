"""Data models for the resume assistant bot"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Union, Literal, Annotated
from enum import Enum


ConversationId = Union[int, str]


class SessionMode(str, Enum):
    """Conversation state machine states"""
    NONE = "none"
    RESUME_UPLOADED = "resume_uploaded"
    WAITING_FOR_JOB_TITLE = "waiting_for_job_title"
    MOCK_INTERVIEW = "mock_interview"


class InterviewAnswer(BaseModel):
    """One answered mock interview question"""
    question: str
    answer: str


class ResumeUploadedSession(BaseModel):
    """A parsed resume waiting for the user to pick an action"""
    mode: Literal[SessionMode.RESUME_UPLOADED] = SessionMode.RESUME_UPLOADED
    resume_text: str
    extracted_skills: List[str] = Field(default_factory=list)
    file_name: Optional[str] = None


class WaitingForJobTitleSession(BaseModel):
    """Resume kept around while the user types the role to optimize for"""
    mode: Literal[SessionMode.WAITING_FOR_JOB_TITLE] = SessionMode.WAITING_FOR_JOB_TITLE
    resume_text: str
    extracted_skills: List[str] = Field(default_factory=list)
    file_name: Optional[str] = None


class MockInterviewSession(BaseModel):
    """Tracks an ongoing mock interview"""
    mode: Literal[SessionMode.MOCK_INTERVIEW] = SessionMode.MOCK_INTERVIEW
    questions: List[str] = Field(min_length=1)
    answers: List[InterviewAnswer] = Field(default_factory=list)
    current_question_index: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _index_within_questions(self) -> "MockInterviewSession":
        if self.current_question_index >= len(self.questions):
            raise ValueError(
                f"current_question_index {self.current_question_index} "
                f"out of range for {len(self.questions)} questions"
            )
        return self

    @property
    def current_question(self) -> str:
        return self.questions[self.current_question_index]

    @property
    def has_next_question(self) -> bool:
        return self.current_question_index + 1 < len(self.questions)


Session = Annotated[
    Union[ResumeUploadedSession, WaitingForJobTitleSession, MockInterviewSession],
    Field(discriminator="mode"),
]


def mode_of(session: Optional[Session]) -> SessionMode:
    """Mode of a stored session; absence of a record means NONE"""
    if session is None:
        return SessionMode.NONE
    return session.mode


class EventKind(str, Enum):
    """Kinds of inbound platform events"""
    COMMAND = "command"
    BUTTON_PRESS = "button_press"
    FREE_TEXT = "free_text"
    DOCUMENT_UPLOAD = "document_upload"


class ButtonAction(str, Enum):
    """Callback codes attached to the bot's inline keyboards"""
    UPLOAD_RESUME = "upload_resume"
    ATS_SCORE = "ats_score"
    GENERATE_QUESTIONS = "generate_questions"
    MOCK_INTERVIEW = "mock_interview"
    ANALYZE_RESUME = "analyze_resume"
    HELP = "help"
    GENERAL_QUESTIONS = "general_questions"
    TECH_QUESTIONS = "tech_questions"
    BEHAVIORAL_QUESTIONS = "behavioral_questions"
    GENERATE_FROM_RESUME = "generate_from_resume"

    # Resume actions, only valid once a resume has been uploaded
    ACTION_ATS = "action_ats"
    ACTION_GENERATE_QUESTIONS = "action_generate_questions"
    ACTION_CONTENT_ANALYSIS = "action_content_analysis"
    ACTION_OPTIMIZE_ROLE = "action_optimize_role"

    @classmethod
    def parse(cls, code: str) -> Optional["ButtonAction"]:
        try:
            return cls(code)
        except ValueError:
            return None


RESUME_ACTION_PREFIX = "action_"


class CommandEvent(BaseModel):
    """A slash command such as /start"""
    kind: Literal[EventKind.COMMAND] = EventKind.COMMAND
    conversation_id: ConversationId
    command: str


class ButtonPressEvent(BaseModel):
    """An inline keyboard button press"""
    kind: Literal[EventKind.BUTTON_PRESS] = EventKind.BUTTON_PRESS
    conversation_id: ConversationId
    action: str
    interaction_id: str

    @property
    def button(self) -> Optional[ButtonAction]:
        return ButtonAction.parse(self.action)

    @property
    def is_resume_action(self) -> bool:
        return self.action.startswith(RESUME_ACTION_PREFIX)


class FreeTextEvent(BaseModel):
    """A plain text message that is not a command"""
    kind: Literal[EventKind.FREE_TEXT] = EventKind.FREE_TEXT
    conversation_id: ConversationId
    text: str


class DocumentUploadEvent(BaseModel):
    """A file sent to the chat"""
    kind: Literal[EventKind.DOCUMENT_UPLOAD] = EventKind.DOCUMENT_UPLOAD
    conversation_id: ConversationId
    file_id: str
    file_name: Optional[str] = None
    mime_type: Optional[str] = None

    @property
    def is_pdf(self) -> bool:
        return "pdf" in (self.mime_type or "").lower()


ConversationEvent = Annotated[
    Union[CommandEvent, ButtonPressEvent, FreeTextEvent, DocumentUploadEvent],
    Field(discriminator="kind"),
]
