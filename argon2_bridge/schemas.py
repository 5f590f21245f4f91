from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator, model_validator
from collections.abc import Mapping
from typing import Any, Optional, Union

from .errors import InvalidParameter

class HashingConfig(BaseModel):
    """Caller-supplied configuration, one call's worth. Keys follow the JS bridge."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    password: Optional[Union[str, bytes]] = None
    salt: Optional[Union[str, bytes]] = None
    is_hex_encoded: bool = Field(False, alias="isHexEncoded")
    variant: Optional[str] = Field(None, validation_alias=AliasChoices("variant", "mode"))
    # checked strictly by the resolver, not here, so any value reaches InvalidVersion
    version: Optional[Union[int, str]] = None
    # strict: booleans, numeric strings and floats are rejected, not coerced
    iterations: Optional[StrictInt] = None
    memory: Optional[StrictInt] = None
    parallelism: Optional[StrictInt] = None
    hash_length: Optional[StrictInt] = Field(None, alias="hashLength")

    @model_validator(mode="before")
    @classmethod
    def _input_encoding(cls, data: Any) -> Any:
        # the JS layer spoke inputEncoding="hex"; isHexEncoded wins when both are given
        if isinstance(data, Mapping) and "inputEncoding" in data and "isHexEncoded" not in data:
            data = dict(data)
            data["isHexEncoded"] = data.pop("inputEncoding") == "hex"
        return data

    @field_validator("variant", mode="before")
    @classmethod
    def _lenient_variant(cls, v: Any) -> Any:
        return v if isinstance(v, str) else None

    @field_validator("version", mode="before")
    @classmethod
    def _keep_version(cls, v: Any) -> Any:
        # stringify bools, floats etc. so 19.0 is not coerced to 19
        if v is None or isinstance(v, str) or (isinstance(v, int) and not isinstance(v, bool)):
            return v
        return str(v)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HashingConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise InvalidParameter(f"Invalid configuration field(s): {fields}") from e

class HashResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rawHash: str
    encodedHash: str

class ErrorResponse(BaseModel):
    code: str
    message: str
