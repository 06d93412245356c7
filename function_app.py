"""
Azure Functions entry point.

Runs the transcription pipeline whenever a .wav blob lands in the audio
container. The transcript is written to the text container under the same
base name.
"""

import azure.functions as func
from ddtrace import patch_all

from dependencies import get_handler
from utils import setup_logging

logger = setup_logging()
patch_all()

app = func.FunctionApp()


@app.function_name(name="audio2text")
@app.blob_trigger(arg_name="blob", path="audio/{name}.wav", connection="AudioStorage")
def audio2text(blob: func.InputStream) -> None:
    """Blob trigger for newly uploaded audio files."""
    logger.info(
        "Blob trigger fired",
        extra={"blob_name": blob.name, "size": blob.length},
    )

    result = get_handler().process_object_key(blob.name)

    logger.info(
        "Blob trigger completed",
        extra={
            "transcription_file": result.transcript_object_name,
            "uploaded": result.uploaded,
            "status": result.outcome.status.value,
        },
    )
