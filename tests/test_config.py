from pathlib import Path

import pytest

from config import is_valid_endpoint, load_config
from exceptions import ConfigurationError


def test_defaults(base_env):
    config = load_config(base_env)

    assert config.scratch_dir == Path(base_env["SCRATCH_DIR"])
    assert config.storage.backend == "azure"
    assert config.storage.input_container == "audio"
    assert config.storage.output_container == "text"
    assert config.speech.language == "ja-JP"
    assert config.rabbitmq.queue_config.max_delivery_count == 3


def test_tmp_is_used_when_scratch_dir_unset(base_env, tmp_path):
    env = dict(base_env)
    del env["SCRATCH_DIR"]
    env["TMP"] = str(tmp_path)

    assert load_config(env).scratch_dir == tmp_path


@pytest.mark.parametrize(
    "endpoint",
    ["", "not a url", "japaneast.api.cognitive.microsoft.com", "ftp://host/path", "https://"],
)
def test_malformed_endpoint_fails_fast(base_env, endpoint):
    env = dict(base_env, CognitiveEndpoint=endpoint)

    with pytest.raises(ConfigurationError) as exc_info:
        load_config(env)

    assert any(problem.startswith("endpoint") for problem in exc_info.value.problems)


def test_missing_speech_key(base_env):
    env = dict(base_env, CognitiveServiceApiKey="  ")

    with pytest.raises(ConfigurationError, match="api_key"):
        load_config(env)


def test_azure_backend_requires_connection_string(base_env):
    env = dict(base_env)
    del env["AudioStorage"]

    with pytest.raises(ConfigurationError, match="connection string"):
        load_config(env)


def test_minio_backend(base_env):
    env = dict(
        base_env,
        STORAGE_BACKEND="minio",
        MINIO_USER="minio",
        MINIO_PASSWORD="minio-secret",
        MINIO_SECURE="true",
    )
    del env["AudioStorage"]

    config = load_config(env)

    assert config.storage.backend == "minio"
    assert config.storage.minio_secure is True


def test_unknown_backend(base_env):
    with pytest.raises(ConfigurationError, match="backend"):
        load_config(dict(base_env, STORAGE_BACKEND="s3"))


def test_scratch_dir_must_exist(base_env, tmp_path):
    env = dict(base_env, SCRATCH_DIR=str(tmp_path / "nope"))

    with pytest.raises(ConfigurationError, match="scratch_dir"):
        load_config(env)


@pytest.mark.parametrize(
    "endpoint, expected",
    [
        ("https://japaneast.stt.speech.microsoft.com", True),
        ("wss://japaneast.stt.speech.microsoft.com/speech/recognition/conversation/cognitiveservices/v1", True),
        ("http://localhost:5000", True),
        ("localhost:5000", False),
        ("https://[::1", False),
    ],
)
def test_is_valid_endpoint(endpoint, expected):
    assert is_valid_endpoint(endpoint) is expected
