"""
Paragraph-based text chunking.

Splits documents into retrievable chunks bounded by an estimated token
budget.

Dependencies: re, uuid, orchestrator.models
System role: Chunking stage of the ingestion pass
"""

import re
import uuid

from orchestrator.models.chunk import Chunk

PARAGRAPH_BREAK = re.compile(r"\n{2,}")
PARAGRAPH_SEPARATOR = "\n\n"
CHARS_PER_TOKEN = 4


def estimate_tokens(char_count: int) -> int:
    """Rough token estimate: about four characters per token."""
    return char_count // CHARS_PER_TOKEN


class Chunker:
    """
    Split text into chunks of whole paragraphs.

    Paragraphs are separated by blank lines. They are accumulated into a
    buffer until adding the next one would push the estimated token count
    over max_tokens, at which point the buffer is closed as a chunk.

    A single paragraph larger than the budget is emitted whole: the budget
    is only checked between paragraphs, never inside one. This is the
    intended policy, so a chunk may exceed max_tokens when its source has
    an oversize paragraph.
    """

    def __init__(self, max_tokens: int = 512) -> None:
        """
        Initialize chunker.

        Args:
            max_tokens: Token budget per chunk (estimated as characters / 4)

        Raises:
            ValueError: When max_tokens is not positive
        """
        if max_tokens < 1:
            raise ValueError("max_tokens must be at least 1")
        self.max_tokens = max_tokens

    def split(self, text: str, source_file: str, fingerprint: str) -> list[Chunk]:
        """
        Split text into ordered chunks without vectors.

        Args:
            text: Raw document text
            source_file: Normalized relative path of the source
            fingerprint: Content hash of the source file

        Returns:
            list[Chunk]: Chunks with chunk_index 0..n-1, empty for blank input
        """
        paragraphs = [
            paragraph.strip()
            for paragraph in PARAGRAPH_BREAK.split(text.replace("\r\n", "\n"))
        ]

        chunks: list[Chunk] = []
        buffer = ""
        for paragraph in paragraphs:
            if not paragraph:
                continue

            estimated = estimate_tokens(len(buffer) + len(paragraph))
            if estimated > self.max_tokens and buffer:
                chunks.append(self._make_chunk(buffer, source_file, len(chunks), fingerprint))
                buffer = ""

            buffer = f"{buffer}{PARAGRAPH_SEPARATOR}{paragraph}" if buffer else paragraph

        if buffer:
            chunks.append(self._make_chunk(buffer, source_file, len(chunks), fingerprint))

        return chunks

    @staticmethod
    def _make_chunk(text: str, source_file: str, chunk_index: int, fingerprint: str) -> Chunk:
        return Chunk(
            id=str(uuid.uuid4()),
            text=text,
            source_file=source_file,
            chunk_index=chunk_index,
            fingerprint=fingerprint,
        )
