"""
Main entry point for the JSON to tiny converter.

Usage:
    python main.py [input.json] [output.tiny]

Defaults:
    input  = data.json
    output = data.tiny (data-minify.json when OUTPUT_FORMAT=minify)
"""
import json
import logging
import sys

from converter.json_converter import JsonConverter
from encoder.errors import TinyEncodingError
import config

logger = logging.getLogger(__name__)


def setup_logging():
    """Log to stderr, and to LOG_FILE when one is configured."""
    handlers = [logging.StreamHandler(sys.stderr)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format=config.LOG_FORMAT,
        handlers=handlers
    )


def main(argv=None) -> int:
    """Main execution function. Returns the process exit code."""
    args = sys.argv[1:] if argv is None else argv
    output_format = config.OUTPUT_FORMAT

    if len(args) > 2:
        logger.error("Usage: python main.py [inputPath] [outputPath]")
        return 1

    default_output = (
        config.MINIFY_OUTPUT_FILE if output_format == "minify"
        else config.DEFAULT_OUTPUT_FILE
    )
    input_path = args[0] if len(args) > 0 else config.DEFAULT_INPUT_FILE
    output_path = args[1] if len(args) > 1 else default_output

    converter = JsonConverter(root_name=config.ROOT_BLOCK_NAME)

    try:
        converter.convert_file(input_path, output_path, output_format)
    except TinyEncodingError as e:
        logger.error(f"Error: {e}")
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"Error: {input_path} is not valid JSON: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1

    print(f"Converted {input_path} -> {output_path}")
    return 0


def run():
    """Console script entry point."""
    setup_logging()
    sys.exit(main())


if __name__ == "__main__":
    run()
