"""Handler exports."""

from .upload_event_handler import UploadEventHandler

__all__ = ["UploadEventHandler"]
