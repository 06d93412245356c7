"""
Audio2Text Worker.

Entry point for running the transcription pipeline as a queue consumer.
"""

from ddtrace import patch_all

from dependencies import get_worker
from utils import setup_logging

logger = setup_logging()
patch_all()


def main():
    """Starts the worker."""
    logger.info("Starting audio2text worker")
    worker = get_worker()
    worker.start()


if __name__ == "__main__":
    main()
