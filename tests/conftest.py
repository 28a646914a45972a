import os

# Settings fail fast without these; tests never reach the real services
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "test-telegram-token")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("TELEGRAM_MODE", "webhook")

import random

import pytest

from core.conversation.session_store import InMemorySessionStore
from core.conversation.state_machine import ConversationStateMachine
from core.exceptions import ExtractionError, TransportError
from core.messaging.delivery import DeliveryPipeline
from core.services.document_ingestion import DocumentIngestionAdapter
from core.services.transport import ChatTransport

CHAT_ID = 4242
RESUME_TEXT = "Backend engineer: Python, Docker and Kubernetes. Led an Agile team."


class FakeTransport(ChatTransport):
    """Records every send; attempts listed in ``fail_on`` (1-based) raise TransportError"""

    def __init__(self, fail_on=(), files=None):
        self.fail_on = set(fail_on)
        self.files = files or {}
        self.attempts = []
        self.sent = []
        self.answered = []

    async def send_text(self, destination, text, options=None):
        self.attempts.append(text)
        if len(self.attempts) in self.fail_on:
            raise TransportError(f"simulated failure on attempt {len(self.attempts)}")
        self.sent.append((destination, text, options))
        return {"message_id": len(self.sent)}

    async def answer_interaction(self, interaction_id):
        self.answered.append(interaction_id)

    async def fetch_bytes(self, file_reference):
        if file_reference not in self.files:
            raise TransportError(f"unknown file {file_reference}")
        data = self.files[file_reference]
        # Two blocks to exercise streaming
        yield data[:10]
        yield data[10:]

    @property
    def texts(self):
        return [text for _, text, _ in self.sent]


class FakeGenerator:
    """LLM stand-in: pops scripted responses, then falls back to ``default``"""

    def __init__(self, responses=None, default="Solid answer, add a concrete example."):
        self.responses = list(responses or [])
        self.default = default
        self.prompts = []

    async def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.responses:
            return self.responses.pop(0)
        return self.default


def fake_extract_text(data: bytes) -> str:
    if data.startswith(b"%corrupt"):
        raise ExtractionError("simulated parse failure")
    return data.decode("utf-8")


@pytest.fixture
def transport():
    return FakeTransport(files={
        "resume-file": RESUME_TEXT.encode("utf-8"),
        "plain-resume": b"I like long walks and board games.",
        "corrupt-file": b"%corrupt pdf bytes here",
    })


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def machine(tmp_path, transport, generator, store):
    delivery = DeliveryPipeline(transport, chunk_delay=0)
    ingestion = DocumentIngestionAdapter(
        transport,
        download_dir=str(tmp_path / "downloads"),
        extract_text=fake_extract_text,
    )
    return ConversationStateMachine(
        store=store,
        delivery=delivery,
        generator=generator,
        ingestion=ingestion,
        interview_question_count=3,
        rng=random.Random(7),
    )
