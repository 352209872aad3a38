from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import Field, PlainValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .wrapper import Wrapper, parse


def _validate_wrapper(value: Any) -> Optional[Wrapper]:
    if value is None:
        return None
    if isinstance(value, (str, bytes)):
        return parse(value)
    if callable(value):
        return value
    raise ValueError(f"expected a wrapper config string or callable, got {type(value).__name__}")


# Drop-in field type for any pydantic model, e.g. a YAML-loaded service config:
#
#     class TracingConfig(BaseModel):
#         logger: WrapperSetting = None
WrapperSetting = Annotated[Optional[Wrapper], PlainValidator(_validate_wrapper)]


class LogwrapSettings(BaseSettings):
    """
    Runtime configuration, read from LOGWRAP_* env vars or .env.

    Notes:
    - default_wrapper uses the parse() grammar ("", "nop", "std",
      "structlog[:level[:k=v,...]]", "sentry"). Unset keeps the built-in default.
    - sentry_dsn unset leaves Sentry uninitialised; sentry_wrapper then only logs.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGWRAP_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    service_name: str = ""
    environment: str = "dev"
    json_logs: bool = True

    sentry_dsn: Optional[str] = None
    sentry_traces_sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)

    default_wrapper: WrapperSetting = None
