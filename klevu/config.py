"""
SDK configuration.

Settings can be built directly, read from KLEVU_* environment variables
(optionally via a .env file) or loaded from the "klevu" section of a YAML
file. Explicit constructor arguments of services always win over config.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from klevu.core.models import AuthAlgorithms, InvalidRecordMode

ENV_PREFIX = "KLEVU_"


class SdkConfig(BaseModel):
    """
    Settings shared by the SDK services.

    Attributes:
        max_batch_size: Most records accepted by one batch request
        invalid_record_mode: "skip" drops invalid records, "fail" raises
        auth_algorithm: Algorithm used to sign requests
        timestamp_max_age_seconds: Oldest accepted request timestamp
        timestamp_future_buffer_seconds: Allowed clock drift into the future
        http_timeout_seconds: Timeout of the default HTTP client
        indexing_url: Overrides the indexing host
        api_url: Overrides the account API host
        analytics_url: Overrides the analytics host
        js_url: Overrides the JS host
        tiers_url: Overrides the tiers host
        merchant_center_url: Overrides the Merchant Center host
        log_level: Level applied to the "klevu" logger
    """

    max_batch_size: int = Field(250, gt=0)
    invalid_record_mode: InvalidRecordMode = InvalidRecordMode.SKIP
    auth_algorithm: AuthAlgorithms = AuthAlgorithms.HMAC_SHA384
    timestamp_max_age_seconds: int = Field(600, ge=0)
    timestamp_future_buffer_seconds: int = Field(60, ge=0)
    http_timeout_seconds: float = Field(30.0, gt=0)
    indexing_url: str | None = None
    api_url: str | None = None
    analytics_url: str | None = None
    js_url: str | None = None
    tiers_url: str | None = None
    merchant_center_url: str | None = None
    log_level: str = "INFO"

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "max_batch_size": 250,
                "invalid_record_mode": "skip",
                "auth_algorithm": "HmacSHA384",
                "indexing_url": "indexing.ksearchnet.com",
                "log_level": "INFO",
            }
        }

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "SdkConfig":
        """
        Build config from KLEVU_* environment variables.

        A .env file (the given path, or one found from the working
        directory) is loaded first without overriding existing variables.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        load_dotenv(env_file)

        values: dict[str, Any] = {}
        for field_name in cls.model_fields:
            value = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
            if value is not None and value != "":
                values[field_name] = value

        return cls.model_validate(values)


class SdkConfigLoader:
    """
    Loads SdkConfig from a YAML file.

    Expected YAML format:
    ```yaml
    klevu:
      max_batch_size: 100
      invalid_record_mode: fail
      indexing_url: indexing.ksearchnet.com
    ```
    """

    def __init__(self, config_path: str | Path):
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"SDK configuration file not found: {config_path}")

    def load(self) -> SdkConfig:
        """
        Parse the "klevu" section of the file.

        Raises:
            ValueError: If the YAML is invalid, has no "klevu" section or holds
                invalid settings
        """
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict) or "klevu" not in config:
            raise ValueError("Configuration file must contain 'klevu' section")

        section = config["klevu"] or {}
        if not isinstance(section, dict):
            raise ValueError("The 'klevu' section must be a mapping of settings")

        unknown = sorted(set(section) - set(SdkConfig.model_fields))
        if unknown:
            raise ValueError(f"Unknown settings in 'klevu' section: {', '.join(unknown)}")

        try:
            return SdkConfig.model_validate(section)
        except ValidationError as e:
            raise ValueError(f"Invalid settings in {self.config_path}: {e}") from e
