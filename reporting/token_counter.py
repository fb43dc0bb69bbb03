"""
Token counting for JSON / TOON / tiny files using tiktoken.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import tiktoken

from utils.retry import retry_with_backoff
import config

logger = logging.getLogger(__name__)


@dataclass
class TokenStats:
    """Token count and UTF-8 size of a piece of text."""
    token_count: int
    byte_size: int


@dataclass
class FileStats:
    """Measurements of one file in the comparison report."""
    file: str
    token_count: int
    size_kb: float


@retry_with_backoff(
    max_retries=config.MAX_RETRIES,
    initial_delay=config.RETRY_DELAY,
    max_delay=config.MAX_RETRY_DELAY
)
def load_encoding(model_name: str, fallback_encoding: str = config.FALLBACK_ENCODING):
    """
    Load the tokenizer encoding for a model.

    Unknown model names fall back to `fallback_encoding`.
    """
    try:
        return tiktoken.encoding_for_model(model_name)
    except KeyError:
        logger.warning(
            f"No tokenizer registered for model {model_name!r}; "
            f"using {fallback_encoding}"
        )
        return tiktoken.get_encoding(fallback_encoding)


class TokenCounter:
    """
    Measures token counts with a tokenizer held for the duration of a `with` block.

    Example:
        with TokenCounter("gpt-4o-mini") as counter:
            stats = counter.measure("users(id name")
    """

    def __init__(
        self,
        model_name: str = config.TOKENIZER_MODEL,
        fallback_encoding: str = config.FALLBACK_ENCODING
    ):
        self.model_name = model_name
        self.fallback_encoding = fallback_encoding
        self._encoding = None

    def __enter__(self) -> "TokenCounter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def open(self):
        """Load the tokenizer encoding."""
        if self._encoding is None:
            self._encoding = load_encoding(self.model_name, self.fallback_encoding)
            logger.debug(f"Loaded tokenizer {self._encoding.name} for {self.model_name}")

    def close(self):
        """Release the tokenizer encoding."""
        self._encoding = None

    @property
    def encoding(self):
        if self._encoding is None:
            raise RuntimeError("TokenCounter is not open; use it as a context manager")
        return self._encoding

    def count_tokens(self, text: str) -> int:
        # Special token markers in the data are counted as plain text
        return len(self.encoding.encode(text, disallowed_special=()))

    def measure(self, text: str) -> TokenStats:
        """Return the token count and UTF-8 byte size of text."""
        return TokenStats(
            token_count=self.count_tokens(text),
            byte_size=len(text.encode("utf-8"))
        )

    def measure_file(
        self,
        file_path: Union[str, Path],
        display_name: Optional[str] = None
    ) -> FileStats:
        """
        Measure a file on disk.

        Raises:
            OSError: File cannot be read
        """
        full_path = Path(file_path).resolve()
        # Undecodable bytes count as U+FFFD rather than failing the file
        with open(full_path, 'r', encoding='utf-8', errors='replace') as f:
            text = f.read()
        size = os.stat(full_path).st_size
        return FileStats(
            file=display_name or str(file_path),
            token_count=self.count_tokens(text),
            size_kb=size / 1024
        )
