"""
Conversation state machine for the resume assistant.

This module interprets inbound events (commands, button presses, free text
and document uploads) against the conversation's current session and runs
the matching transition from ``TransitionRules``. Sessions are read from
and written back to the injected SessionStore; replies go out through the
DeliveryPipeline so every message is chunked, plain text and in order.

States:
    NONE                   no session record
    RESUME_UPLOADED        resume parsed, waiting for an action button
    WAITING_FOR_JOB_TITLE  waiting for the role to optimize the resume for
    MOCK_INTERVIEW         asking questions one by one
"""

import logging
import random
from typing import Any, Dict, Optional, Type, TypeVar

from core.conversation.prompts import (
    BEHAVIORAL_QUESTIONS_PROMPT,
    GENERAL_QUESTIONS_PROMPT,
    TECHNICAL_QUESTIONS_PROMPT,
    answer_feedback_prompt,
    content_analysis_prompt,
    mock_interview_prompt,
    parse_interview_questions,
    role_optimization_prompt,
    tailored_questions_prompt,
)
from core.conversation import replies
from core.conversation.session_store import SessionStore
from core.conversation.transitions import TransitionRules
from core.exceptions import ExtractionError, GuardViolation, TransportError
from core.messaging.delivery import DeliveryPipeline
from core.services.ats_scorer import calculate_ats_score
from core.services.document_ingestion import DocumentIngestionAdapter
from core.services.transport import TextGenerator
from models.schemas import (
    ButtonAction,
    ButtonPressEvent,
    CommandEvent,
    ConversationEvent,
    ConversationId,
    DocumentUploadEvent,
    FreeTextEvent,
    InterviewAnswer,
    MockInterviewSession,
    ResumeUploadedSession,
    Session,
    SessionMode,
    WaitingForJobTitleSession,
    mode_of,
)

logger = logging.getLogger(__name__)

SessionT = TypeVar("SessionT")

QUESTION_LIST_PROMPTS = {
    ButtonAction.GENERAL_QUESTIONS: GENERAL_QUESTIONS_PROMPT,
    ButtonAction.TECH_QUESTIONS: TECHNICAL_QUESTIONS_PROMPT,
    ButtonAction.BEHAVIORAL_QUESTIONS: BEHAVIORAL_QUESTIONS_PROMPT,
}


class ConversationStateMachine:
    """
    Drives one conversation event at a time.

    The machine keeps no per-conversation state of its own: every handler
    fetches the session from the store, works on the copy, and stores or
    deletes it before returning.
    """

    def __init__(self, store: SessionStore, delivery: DeliveryPipeline,
                 generator: TextGenerator, ingestion: DocumentIngestionAdapter,
                 interview_question_count: int = 8,
                 rng: Optional[random.Random] = None):
        self.store = store
        self.delivery = delivery
        self.transport = delivery.transport
        self.generator = generator
        self.ingestion = ingestion
        self.interview_question_count = interview_question_count
        self.rng = rng or random.Random()

    async def handle(self, event: ConversationEvent) -> None:
        """
        Handle one inbound event to completion.

        Errors never escape: a guard violation is logged and ignored, and any
        other failure is logged and answered with a plain-text apology.
        """
        conversation_id = event.conversation_id
        mode = mode_of(self.store.get(conversation_id))

        transition = TransitionRules.match_event(mode, event)
        if transition is None:
            logger.debug(f"Ignoring {event.kind.value} from {conversation_id} in mode {mode.value}")
            return

        logger.info(
            f"➡️  {event.kind.value} from {conversation_id} in {mode.value}: {transition.description}"
        )

        try:
            await getattr(self, transition.handler)(event)
        except GuardViolation as e:
            logger.info(f"🚫 Ignored event for {conversation_id}: {e}")
        except Exception as e:
            logger.error(
                f"❌ Error handling {event.kind.value} for {conversation_id}: {e}",
                exc_info=True
            )
            await self._apologize(conversation_id)

    async def _apologize(self, conversation_id: ConversationId) -> None:
        try:
            await self._reply(conversation_id, replies.UNEXPECTED_ERROR)
        except Exception as e:
            logger.error(f"❌ Could not send error notice to {conversation_id}: {e}")

    async def _reply(self, conversation_id: ConversationId, text: str,
                     options: Optional[Dict[str, Any]] = None) -> None:
        await self.delivery.send_message(conversation_id, text, options)

    def _require(self, conversation_id: ConversationId, session_type: Type[SessionT]) -> SessionT:
        """Fetch the session, insisting it is of the given variant"""
        session = self.store.get(conversation_id)
        if not isinstance(session, session_type):
            raise GuardViolation(
                f"expected {session_type.__name__}, found {mode_of(session).value}",
                mode=mode_of(session),
            )
        return session

    # Commands

    async def _handle_start(self, event: CommandEvent) -> None:
        self.store.delete(event.conversation_id)
        await self._reply(event.conversation_id, replies.WELCOME_MESSAGE, replies.MAIN_MENU)

    async def _handle_help(self, event: ConversationEvent) -> None:
        await self._reply(event.conversation_id, replies.HELP_MESSAGE)

    async def _handle_end_interview(self, event: CommandEvent) -> None:
        if mode_of(self.store.get(event.conversation_id)) != SessionMode.MOCK_INTERVIEW:
            await self._reply(event.conversation_id, replies.NO_ACTIVE_INTERVIEW)
            return
        await self._finish_interview(event.conversation_id)

    # Button presses

    async def _handle_button_press(self, event: ButtonPressEvent) -> None:
        conversation_id = event.conversation_id

        try:
            await self.transport.answer_interaction(event.interaction_id)
        except TransportError as e:
            logger.warning(f"⚠️  Could not acknowledge button press {event.interaction_id}: {e}")

        # Starting a new top-level flow abandons whatever was in progress
        if not event.is_resume_action:
            self.store.delete(conversation_id)

        mode = mode_of(self.store.get(conversation_id))
        transition = TransitionRules.match_button(mode, event)
        if transition is None:
            if event.is_resume_action:
                raise GuardViolation(f"{event.action} needs an uploaded resume", mode=mode)
            logger.info(f"Unknown button action '{event.action}' from {conversation_id} - ignoring")
            return

        logger.info(f"🔘 {event.action} from {conversation_id}: {transition.description}")
        await getattr(self, transition.handler)(event)

    async def _prompt_for_upload(self, event: ButtonPressEvent) -> None:
        await self._reply(event.conversation_id, replies.UPLOAD_PROMPTS[event.button])

    async def _show_question_types(self, event: ButtonPressEvent) -> None:
        await self._reply(event.conversation_id, replies.QUESTION_TYPE_PROMPT, replies.QUESTION_TYPE_MENU)

    async def _generate_question_list(self, event: ButtonPressEvent) -> None:
        notice, heading = replies.QUESTION_LIST_REPLIES[event.button]
        await self._reply(event.conversation_id, notice)

        questions = await self.generator.generate_text(QUESTION_LIST_PROMPTS[event.button])
        await self._reply(event.conversation_id, replies.with_heading(heading, questions))

    # Mock interview

    async def _start_mock_interview(self, event: ButtonPressEvent) -> None:
        conversation_id = event.conversation_id
        await self._reply(conversation_id, replies.MOCK_INTERVIEW_INTRO)

        generated = await self.generator.generate_text(
            mock_interview_prompt(self.interview_question_count)
        )
        questions = parse_interview_questions(generated)

        if not questions:
            logger.warning(f"⚠️  No interview questions parsed for {conversation_id}")
            self.store.delete(conversation_id)
            await self._reply(conversation_id, replies.MOCK_INTERVIEW_FAILED)
            return

        session = MockInterviewSession(questions=questions)
        self.store.set(conversation_id, session)
        logger.info(f"🎤 Mock interview started for {conversation_id} with {len(questions)} questions")

        await self._reply(
            conversation_id,
            replies.question_message(0, len(questions), session.current_question)
        )

    async def _handle_interview_answer(self, event: FreeTextEvent) -> None:
        conversation_id = event.conversation_id
        session = self._require(conversation_id, MockInterviewSession)

        question = session.current_question
        session.answers.append(InterviewAnswer(question=question, answer=event.text))
        self.store.set(conversation_id, session)

        feedback = await self.generator.generate_text(answer_feedback_prompt(question, event.text))
        await self._reply(conversation_id, replies.feedback_message(feedback))

        # The interview may have been ended or replaced while feedback was generated
        if not self._is_same_interview(self.store.get(conversation_id), session):
            logger.info(f"Interview for {conversation_id} ended or restarted during feedback - not advancing")
            return

        if not session.has_next_question:
            await self._finish_interview(conversation_id)
            return

        session.current_question_index += 1
        self.store.set(conversation_id, session)
        await self._reply(
            conversation_id,
            replies.question_message(session.current_question_index, len(session.questions),
                                     session.current_question)
        )

    @staticmethod
    def _is_same_interview(current: Optional[Session], session: MockInterviewSession) -> bool:
        return (
            isinstance(current, MockInterviewSession)
            and current.questions == session.questions
            and current.current_question_index == session.current_question_index
            and current.answers == session.answers
        )

    async def _finish_interview(self, conversation_id: ConversationId) -> None:
        self.store.delete(conversation_id)
        logger.info(f"🏁 Mock interview finished for {conversation_id}")
        await self._reply(conversation_id, replies.MOCK_INTERVIEW_COMPLETED)

    # Document upload

    async def _reject_document(self, event: DocumentUploadEvent) -> None:
        logger.info(f"🚫 Rejected {event.mime_type} upload from {event.conversation_id}")
        await self._reply(event.conversation_id, replies.PDF_ONLY)

    async def _handle_document(self, event: DocumentUploadEvent) -> None:
        conversation_id = event.conversation_id
        await self._reply(conversation_id, replies.PROCESSING_RESUME)

        try:
            document = await self.ingestion.ingest(event.file_id, event.file_name)
        except (ExtractionError, TransportError) as e:
            logger.error(f"❌ PDF processing error for {conversation_id}: {e}")
            self.store.delete(conversation_id)
            await self._reply(conversation_id, replies.RESUME_PROCESSING_FAILED)
            return

        self.store.set(conversation_id, ResumeUploadedSession(
            resume_text=document.text,
            extracted_skills=document.skills,
            file_name=document.file_name,
        ))

        await self._reply(
            conversation_id,
            replies.resume_processed_message(document.skills),
            replies.RESUME_ACTION_MENU
        )

    # Resume actions

    async def _resume_ats_score(self, event: ButtonPressEvent) -> None:
        session = self._require(event.conversation_id, ResumeUploadedSession)
        await self._reply(event.conversation_id, calculate_ats_score(session.resume_text, self.rng))

    async def _resume_tailored_questions(self, event: ButtonPressEvent) -> None:
        conversation_id = event.conversation_id
        session = self._require(conversation_id, ResumeUploadedSession)

        if not session.extracted_skills:
            await self._reply(conversation_id, replies.NO_SKILLS_FOR_QUESTIONS)
            return

        await self._reply(conversation_id, replies.GENERATING_TAILORED_QUESTIONS)
        questions = await self.generator.generate_text(tailored_questions_prompt(session.extracted_skills))
        await self._reply(conversation_id, replies.with_heading(replies.TAILORED_QUESTIONS_HEADING, questions))

    async def _resume_content_analysis(self, event: ButtonPressEvent) -> None:
        conversation_id = event.conversation_id
        session = self._require(conversation_id, ResumeUploadedSession)

        await self._reply(conversation_id, replies.ANALYZING_CONTENT)
        analysis = await self.generator.generate_text(content_analysis_prompt(session.resume_text))
        await self._reply(conversation_id, replies.with_heading(replies.ANALYSIS_HEADING, analysis))

    async def _resume_ask_job_title(self, event: ButtonPressEvent) -> None:
        conversation_id = event.conversation_id
        session = self._require(conversation_id, ResumeUploadedSession)

        self.store.set(conversation_id, WaitingForJobTitleSession(
            resume_text=session.resume_text,
            extracted_skills=session.extracted_skills,
            file_name=session.file_name,
        ))
        await self._reply(conversation_id, replies.ASK_JOB_TITLE)

    # Free text

    async def _handle_job_title(self, event: FreeTextEvent) -> None:
        conversation_id = event.conversation_id
        session = self._require(conversation_id, WaitingForJobTitleSession)
        job_title = event.text.strip()

        # Consume the session up front so a second message cannot trigger a second run
        self.store.delete(conversation_id)

        await self._reply(conversation_id, replies.optimizing_message(job_title))
        optimization = await self.generator.generate_text(
            role_optimization_prompt(job_title, session.resume_text)
        )
        await self._reply(conversation_id, replies.optimization_message(job_title, optimization))
