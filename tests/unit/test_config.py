"""
Unit tests for SdkConfig and SdkConfigLoader.
"""

import os

import pytest
from pydantic import ValidationError

from klevu.config import SdkConfig, SdkConfigLoader
from klevu.core.models import AuthAlgorithms, InvalidRecordMode


@pytest.fixture
def isolated_env(clean_klevu_env):
    """Environment copy discarded after the test, including variables set by load_dotenv"""
    clean_klevu_env.setattr(os, "environ", dict(os.environ))
    return clean_klevu_env


@pytest.mark.unit
class TestSdkConfig:
    """Tests for SdkConfig"""

    def test_defaults(self):
        config = SdkConfig()

        assert config.max_batch_size == 250
        assert config.invalid_record_mode is InvalidRecordMode.SKIP
        assert config.auth_algorithm is AuthAlgorithms.HMAC_SHA384
        assert config.timestamp_max_age_seconds == 600
        assert config.timestamp_future_buffer_seconds == 60
        assert config.indexing_url is None

    def test_frozen(self):
        with pytest.raises(ValidationError):
            SdkConfig().max_batch_size = 10

    @pytest.mark.parametrize("size", [0, -1])
    def test_batch_size_must_be_positive(self, size):
        with pytest.raises(ValidationError):
            SdkConfig(max_batch_size=size)

    def test_from_env(self, isolated_env, tmp_path):
        isolated_env.setenv("KLEVU_MAX_BATCH_SIZE", "100")
        isolated_env.setenv("KLEVU_INVALID_RECORD_MODE", "fail")
        isolated_env.setenv("KLEVU_INDEXING_URL", "indexing-qa.klevu.com")
        isolated_env.setenv("KLEVU_HTTP_TIMEOUT_SECONDS", "5")
        isolated_env.setenv("KLEVU_API_URL", "")

        config = SdkConfig.from_env(tmp_path / "missing.env")

        assert config.max_batch_size == 100
        assert config.invalid_record_mode is InvalidRecordMode.FAIL
        assert config.indexing_url == "indexing-qa.klevu.com"
        assert config.http_timeout_seconds == 5.0
        assert config.api_url is None

    def test_from_env_file(self, isolated_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("KLEVU_MAX_BATCH_SIZE=50\nKLEVU_LOG_LEVEL=DEBUG\n")

        config = SdkConfig.from_env(env_file)

        assert config.max_batch_size == 50
        assert config.log_level == "DEBUG"

    def test_environment_wins_over_env_file(self, isolated_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("KLEVU_MAX_BATCH_SIZE=50\n")
        isolated_env.setenv("KLEVU_MAX_BATCH_SIZE", "75")

        assert SdkConfig.from_env(env_file).max_batch_size == 75

    def test_invalid_env_value(self, isolated_env, tmp_path):
        isolated_env.setenv("KLEVU_INVALID_RECORD_MODE", "ignore")

        with pytest.raises(ValueError):
            SdkConfig.from_env(tmp_path / "missing.env")


@pytest.mark.unit
class TestSdkConfigLoader:
    """Tests for SdkConfigLoader"""

    def write(self, tmp_path, content: str):
        path = tmp_path / "klevu.yaml"
        path.write_text(content)
        return path

    def test_load(self, tmp_path):
        path = self.write(
            tmp_path,
            "klevu:\n"
            "  max_batch_size: 100\n"
            "  invalid_record_mode: fail\n"
            "  indexing_url: indexing-qa.klevu.com\n",
        )

        config = SdkConfigLoader(path).load()

        assert config.max_batch_size == 100
        assert config.invalid_record_mode is InvalidRecordMode.FAIL
        assert config.indexing_url == "indexing-qa.klevu.com"

    def test_empty_section_uses_defaults(self, tmp_path):
        assert SdkConfigLoader(self.write(tmp_path, "klevu:\n")).load() == SdkConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SdkConfigLoader(tmp_path / "missing.yaml")

    @pytest.mark.parametrize(
        "content,message",
        [
            ("klevu: [\n", "Invalid YAML"),
            ("other:\n  max_batch_size: 1\n", "must contain 'klevu' section"),
            ("klevu: 5\n", "must be a mapping"),
            ("klevu:\n  batch_size: 1\n", "Unknown settings in 'klevu' section: batch_size"),
            ("klevu:\n  max_batch_size: -1\n", "Invalid settings"),
        ],
    )
    def test_invalid_files(self, tmp_path, content, message):
        loader = SdkConfigLoader(self.write(tmp_path, content))

        with pytest.raises(ValueError) as exc_info:
            loader.load()

        assert message in str(exc_info.value)
