"""
Compare token counts and sizes of the same data in different encodings.

Reads config.REPORT_FILES from the working directory and prints a table.
Files that cannot be read are logged and left out of the table.
"""
import logging
import sys
from typing import List

from tqdm import tqdm

from reporting.report_table import format_report
from reporting.token_counter import FileStats, TokenCounter
import config

logger = logging.getLogger(__name__)


def collect_stats(counter: TokenCounter, files: List[str]) -> List[FileStats]:
    """Measure each file, skipping the ones that fail to read."""
    results = []
    for file_name in tqdm(files, desc="Counting tokens", unit="files", leave=False):
        try:
            results.append(counter.measure_file(file_name))
        except OSError as e:
            logger.error(f"Error reading {file_name}: {e}")
    return results


def main() -> int:
    """Main execution function."""
    with TokenCounter(config.TOKENIZER_MODEL) as counter:
        results = collect_stats(counter, config.REPORT_FILES)

    print(format_report(results, config.TOKENIZER_MODEL, colored=config.REPORT_COLOR))
    return 0


def run():
    """Console script entry point."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format=config.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    sys.exit(main())


if __name__ == "__main__":
    run()
