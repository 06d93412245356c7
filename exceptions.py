"""Custom exceptions for the audio2text service."""


class ConfigurationError(Exception):
    """Raised when the environment does not describe a usable configuration."""

    def __init__(self, problems: list[str], cause: Exception | None = None):
        self.problems = problems
        self.cause = cause
        super().__init__("Invalid configuration: " + "; ".join(problems))


class InvalidUploadEventError(Exception):
    """Raised when a trigger payload does not reference a .wav object."""

    def __init__(self, object_key: str, reason: str):
        self.object_key = object_key
        self.reason = reason
        super().__init__(f"Invalid upload event for '{object_key}': {reason}")


class StorageDownloadError(Exception):
    """Raised when downloading a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to download '{object_name}' from storage")


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class RecognitionSetupError(Exception):
    """Raised when a recognition session cannot be created."""

    def __init__(self, audio_file: str, cause: Exception | None = None):
        self.audio_file = audio_file
        self.cause = cause
        super().__init__(f"Failed to set up recognition for '{audio_file}'")
