import logging
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"

# The blob and speech SDKs log each HTTP request and response at INFO.
QUIET_SDK_LOGGERS = ("azure", "azure.core.pipeline.policies.http_logging_policy")


def setup_logging():
    """
    Routes audio2text logs to stdout as one JSON object per line.

    Records carry the Datadog trace_id and span_id injected by ddtrace, so a
    transcription run can be followed from the trigger through download,
    recognition and upload. Azure SDK request logging is cut down to
    warnings and sent through the same handler instead of the Functions
    host's default output.

    Returns:
        logging.Logger: The root logger.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.handlers = [handler]

    for name in QUIET_SDK_LOGGERS:
        sdk_logger = logging.getLogger(name)
        sdk_logger.setLevel(logging.WARNING)
        sdk_logger.handlers = [handler]
        sdk_logger.propagate = False

    return root_logger
