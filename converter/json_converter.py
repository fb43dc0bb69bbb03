"""
Read JSON files and write them out as tiny or minified JSON.
"""
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Union

from encoder.tiny_encoder import ROOT_BLOCK_NAME, encode

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("tiny", "minify")

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

PathLike = Union[str, Path]


class JsonConverter:
    """Converts JSON documents into token-compact text formats."""

    def __init__(self, root_name: str = ROOT_BLOCK_NAME):
        """
        Initialize converter.

        Args:
            root_name: Block name used when the JSON root is an array
        """
        self.root_name = root_name

    def load_json(self, input_file: PathLike) -> Any:
        """
        Read and parse a JSON file.

        Raises:
            OSError: File cannot be read
            json.JSONDecodeError: File is not valid JSON
        """
        path = Path(input_file)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {path}: {e}")
            raise

    def to_tiny(self, data: Any) -> str:
        """Encode parsed JSON as a tiny document."""
        return encode(data, root_name=self.root_name)

    def to_minified_json(self, data: Any) -> str:
        """Serialize parsed JSON without any insignificant whitespace."""
        return json.dumps(data, ensure_ascii=False, separators=(",", ":")) + "\n"

    def save_text(self, text: str, output_file: PathLike):
        """
        Write text to a file, replacing it only once the write has succeeded.

        Args:
            text: Full file contents
            output_file: Destination path
        """
        path = Path(output_file)
        # Lone surrogates (from \ud800-style escapes) cannot be encoded as
        # UTF-8; write U+FFFD for them instead
        text = _LONE_SURROGATE.sub("\N{REPLACEMENT CHARACTER}", text)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
            os.replace(tmp_name, path)
        except OSError as e:
            logger.error(f"Failed to save to {path}: {e}")
            raise
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info(f"Saved {len(text.encode('utf-8'))} bytes to {path}")

    def convert(self, data: Any, output_format: str = "tiny") -> str:
        """Render parsed JSON in the requested output format."""
        if output_format == "tiny":
            return self.to_tiny(data)
        if output_format == "minify":
            return self.to_minified_json(data)
        raise ValueError(
            f"Unknown output format {output_format!r}; "
            f"expected one of {', '.join(OUTPUT_FORMATS)}"
        )

    def convert_file(
        self,
        input_file: PathLike,
        output_file: PathLike,
        output_format: str = "tiny"
    ) -> str:
        """
        Convert a JSON file and save the result.

        Nothing is written unless reading, parsing and encoding all succeed.

        Returns:
            The text written to output_file
        """
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format {output_format!r}; "
                f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )

        data = self.load_json(input_file)
        text = self.convert(data, output_format)
        self.save_text(text, output_file)
        return text
