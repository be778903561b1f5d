"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://api.wireway.ch/wave/"
DEFAULT_SEARCH_ENDPOINT = "ytmusicsearch"
DEFAULT_USER_AGENT = "wave-cli (+https://wireway.ch)"

REQUEST_METHODS = ("GET", "POST")


class WaveConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # API
    base_url: str = DEFAULT_BASE_URL
    search_endpoint: str = DEFAULT_SEARCH_ENDPOINT
    request_method: str = "GET"
    timeout: int = 30
    user_agent: str = DEFAULT_USER_AGENT

    # Output
    thumbnail_dir: str = "."
    result_limit: int = 0

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Requires an absolute http(s) URL and normalizes the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got: {v!r}")
        return v if v.endswith("/") else v + "/"

    @field_validator("search_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        v = v.strip("/")
        if not v:
            raise ValueError("search_endpoint cannot be empty.")
        return v

    @field_validator("request_method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        v = v.upper()
        if v not in REQUEST_METHODS:
            raise ValueError(f"request_method must be one of {', '.join(REQUEST_METHODS)}.")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 1 or v > 300:
            raise ValueError("Timeout must be between 1 and 300 seconds.")
        return v

    @field_validator("result_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError("result_limit cannot be negative (use 0 for no limit).")
        return v

    @property
    def search_url(self) -> str:
        return self.base_url + self.search_endpoint

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
