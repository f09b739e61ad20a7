# src/sift/core/config.py
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

PlaceholderStyle = Literal["qmark", "numeric", "format", "named"]


class SiftConfig(BaseModel):
    """
    Engine-wide settings shared by every parse and emission.

    Instances are frozen so one config can back any number of concurrent requests.
    """

    model_config = ConfigDict(frozen=True)

    placeholder: PlaceholderStyle = "qmark"
    max_limit: Optional[int] = Field(default=None, ge=1)
    default_limit: Optional[int] = Field(default=None, ge=0)
    log_level: str = "WARNING"

    @model_validator(mode="after")
    def _check_limits(self) -> "SiftConfig":
        if (
            self.max_limit is not None
            and self.default_limit is not None
            and self.default_limit > self.max_limit
        ):
            raise ValueError("default_limit cannot exceed max_limit")
        return self


DEFAULT_CONFIG = SiftConfig()
