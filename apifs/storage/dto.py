# storage/dto.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Optional


class ResponseEnvelope(BaseModel):
    """
    The JSON wrapper returned by every endpoint of the remote storage API.
    `response` is false or null on failure; anything else is the payload.
    """

    response: Any = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.response is not False and self.response is not None


class AdapterConfig(BaseModel):
    """
    Free-form per-call options (visibility, mimetype, ...) forwarded to the
    remote store untouched.
    """

    model_config = ConfigDict(extra="allow")

    def merged(self, overrides: Optional[dict] = None) -> "AdapterConfig":
        """Returns a new config with `overrides` applied on top of this one."""
        values = self.model_dump()
        values.update(overrides or {})
        return AdapterConfig(**values)
