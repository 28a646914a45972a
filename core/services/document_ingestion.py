"""
Resume ingestion: download an uploaded file, extract its text and skills.

The downloaded bytes live in a temporary file inside the download directory
for the duration of one ``ingest`` call only. The file is removed on every
exit path, including download and parse failures.
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

from core.exceptions import ExtractionError
from core.services.pdf_extractor import extract_pdf_text
from core.services.skill_extractor import extract_skills
from core.services.transport import ChatTransport

logger = logging.getLogger(__name__)


@dataclass
class IngestedDocument:
    """Text and skills pulled out of an uploaded resume"""
    text: str
    skills: List[str] = field(default_factory=list)
    file_name: Optional[str] = None


class DocumentIngestionAdapter:
    """Turns a platform file reference into resume text and detected skills"""

    def __init__(self, transport: ChatTransport,
                 download_dir: str = "./downloads",
                 extract_text: Callable[[bytes], str] = extract_pdf_text,
                 skill_extractor: Callable[[str], List[str]] = extract_skills):
        self.transport = transport
        self.download_dir = download_dir
        self._extract_text = extract_text
        self._extract_skills = skill_extractor

    @contextmanager
    def _scoped_temp_file(self, suffix: str = ".pdf") -> Iterator[str]:
        """Reserve a temporary file path and remove the file when the scope ends"""
        try:
            os.makedirs(self.download_dir, exist_ok=True)
            handle, temp_path = tempfile.mkstemp(suffix=suffix, dir=self.download_dir)
            os.close(handle)
        except OSError as e:
            raise ExtractionError(f"Could not create temporary file in {self.download_dir}: {e}") from e

        try:
            yield temp_path
        finally:
            try:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                    logger.debug(f"🧹 Removed temporary upload {temp_path}")
            except OSError as e:
                logger.warning(f"⚠️  Could not remove temporary upload {temp_path}: {e}")

    async def _download(self, file_reference: str, temp_path: str) -> int:
        size = 0
        try:
            with open(temp_path, "wb") as out:
                async for block in self.transport.fetch_bytes(file_reference):
                    out.write(block)
                    size += len(block)
        except OSError as e:
            raise ExtractionError(f"Could not store upload: {e}") from e
        return size

    async def ingest(self, file_reference: str, file_name: Optional[str] = None) -> IngestedDocument:
        """
        Download and parse an uploaded resume.

        Args:
            file_reference: Platform file identifier
            file_name: Original file name, kept for the session

        Returns:
            Extracted text and skills

        Raises:
            ExtractionError: If the file is not a parseable PDF
            TransportError: If the file could not be downloaded
        """
        logger.info(f"📥 Ingesting upload {file_name or file_reference}")

        with self._scoped_temp_file() as temp_path:
            size = await self._download(file_reference, temp_path)
            logger.info(f"   - Downloaded {size} bytes")

            try:
                with open(temp_path, "rb") as f:
                    data = f.read()
            except OSError as e:
                raise ExtractionError(f"Could not read stored upload: {e}") from e
            text = self._extract_text(data)

        skills = self._extract_skills(text)
        logger.info(f"✅ Resume parsed: {len(text)} chars, {len(skills)} skills detected")

        return IngestedDocument(text=text, skills=skills, file_name=file_name)
