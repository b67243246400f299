"""Decoding of raw callback record values."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from callback_worker.application.exceptions import PayloadDecodeError
from callback_worker.domain.entities.transaction import TransactionPayload


class _CallbackBody(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: str = ""
    desc: str = ""
    msisdn: str = ""
    operator: str = ""
    short_code: str = Field(default="", alias="short-code")
    tran_ref: str = Field(default="", alias="tran-ref")
    timestamp: int = 0
    cyberus_return: str = Field(default="", alias="cyberus-return")

    @model_validator(mode="before")
    @classmethod
    def _normalise_keys(cls, data: Any) -> Any:
        """Producers send keys in any case and use null for absent values."""
        if not isinstance(data, dict):
            return data
        return {
            str(key).lower(): value
            for key, value in data.items()
            if value is not None
        }


def decode_payload(raw: str | bytes) -> TransactionPayload:
    try:
        body = _CallbackBody.model_validate_json(raw, strict=True)
    except PydanticValidationError as e:
        raise PayloadDecodeError(str(e)) from e
    return TransactionPayload(
        code=body.code,
        desc=body.desc,
        msisdn=body.msisdn,
        operator=body.operator,
        short_code=body.short_code,
        tran_ref=body.tran_ref,
        timestamp=body.timestamp,
        cyberus_return=body.cyberus_return,
    )
