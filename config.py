"""
Configuration settings for the JSON to tiny converter and token report.
"""
import os

from dotenv import load_dotenv

# Pick up overrides from a local .env file
load_dotenv()

# Converter defaults (positional CLI arguments fall back to these)
DEFAULT_INPUT_FILE = os.getenv("TINY_INPUT_FILE", "data.json")
DEFAULT_OUTPUT_FILE = os.getenv("TINY_OUTPUT_FILE", "data.tiny")
MINIFY_OUTPUT_FILE = os.getenv("MINIFY_OUTPUT_FILE", "data-minify.json")

# Block name used when the JSON root is an array
ROOT_BLOCK_NAME = "records"

# Output format: "tiny" or "minify"
OUTPUT_FORMAT = os.getenv("OUTPUT_FORMAT", "tiny").lower()

# Tokenizer used by the report.
# You can change this to "gpt-4o", "gpt-4", etc.
TOKENIZER_MODEL = os.getenv("TOKENIZER_MODEL", "gpt-4o-mini")
FALLBACK_ENCODING = os.getenv("FALLBACK_ENCODING", "o200k_base")

# Files compared by count_tokens.py, relative to the working directory
REPORT_FILES = [
    "data.json",
    "data-minify.json",
    "data.toon",
    "data.tiny",
    "data.tonl",
]

# ANSI colored progress bars in the report table
REPORT_COLOR = os.getenv("REPORT_COLOR", "0").lower() in ("1", "true", "yes")

# Retry settings for downloading tokenizer files
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
RETRY_DELAY = 1  # seconds
MAX_RETRY_DELAY = 30  # seconds

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")  # optional, e.g. "json_tiny.log"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
