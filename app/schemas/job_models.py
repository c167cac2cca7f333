# schemas/job_models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

T = TypeVar("T")


class JobDecodeError(Exception):
    """Raised when a queue message cannot be turned into an OutboundJob."""


class OutboundJob(BaseModel):
    """
    One outbound message as written to the source queue.
    Field names are matched case-insensitively; Body is the only field
    rewritten after decoding (by the media relay).
    """
    model_config = ConfigDict(populate_by_name=True)

    job_id: int = Field(..., alias="CodSysFilaEnvioMensagens")
    url: str = Field(..., alias="Url", min_length=1)
    header: Optional[str] = Field(None, alias="Header")
    body: Optional[str] = Field(None, alias="Body")
    instance: Optional[str] = Field(None, alias="Instancia")

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        canonical = {
            field.alias.lower(): field.alias
            for field in cls.model_fields.values()
            if field.alias
        }
        return {canonical.get(str(key).lower(), key): value for key, value in data.items()}

    @classmethod
    def from_message(cls, raw: str) -> "OutboundJob":
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise JobDecodeError(str(e)) from e


class OutcomeRecord(BaseModel):
    """Result of one job, published to the result queue."""
    model_config = ConfigDict(populate_by_name=True)

    job_id: int = Field(..., alias="CodSysFilaEnvioMensagens")
    status: int = Field(..., alias="Status")
    response_content: Optional[str] = Field(None, alias="ResponseContent")

    def to_message(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


@dataclass
class MediaReference:
    """Media node located inside a job body; lives only during a relay."""
    media_type: str
    link: str
    filename: Optional[str] = None


@dataclass
class StepResult(Generic[T]):
    """Outcome of a single relay step: a value on success, a reason otherwise."""
    ok: bool
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "StepResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> "StepResult[T]":
        return cls(ok=False, reason=reason)
