"""Local scratch files owned by a single pipeline run."""

import posixpath
import tempfile
from pathlib import Path

from utils import setup_logging

from .models import AUDIO_EXTENSION, TRANSCRIPT_EXTENSION

logger = setup_logging()

SCRATCH_PREFIX = "audio2text-"


class ScratchFiles:
    """
    Scratch audio and transcript paths for one upload.

    Each instance gets its own directory under ``scratch_dir``, so runs for
    different uploads (or concurrent runs for the same one) never share a
    path. Used as a context manager: both files and the directory are
    removed on exit, whatever happened inside the block. Removal failures
    are logged, never raised.
    """

    def __init__(self, scratch_dir: Path, name: str):
        self.directory = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=scratch_dir))
        # Virtual folders stay in the object name, not on disk.
        base = posixpath.basename(name.replace("\\", "/"))
        self.audio = self.directory / (base + AUDIO_EXTENSION)
        self.transcript = self.directory / (base + TRANSCRIPT_EXTENSION)

    def __enter__(self) -> "ScratchFiles":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        for path in (self.audio, self.transcript):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(
                    "Failed to remove scratch file",
                    extra={"path": str(path), "error": str(e)},
                )

        try:
            self.directory.rmdir()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(
                "Failed to remove scratch directory",
                extra={"path": str(self.directory), "error": str(e)},
            )
