"""Request and response payloads for the signing endpoints."""

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from ..errors import SigningError

# Present, a JSON string, and not empty.
RequiredStr = Annotated[StrictStr, Field(min_length=1)]


class SigningRequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Sep10SignRequest(SigningRequestModel):
    transaction: RequiredStr
    network_passphrase: RequiredStr


class Sep45SignRequest(SigningRequestModel):
    authorization_entry: RequiredStr
    network_passphrase: RequiredStr


class Sep10SignResponse(BaseModel):
    transaction: str
    network_passphrase: str


class Sep45SignResponse(BaseModel):
    authorization_entry: str
    network_passphrase: str


RequestT = TypeVar("RequestT", bound=SigningRequestModel)


def parse_signing_request(model: type[RequestT], body: dict[str, Any]) -> RequestT:
    """Validate a decoded JSON body against a request model.

    The first offending field, in declaration order, is reported as
    ``missing <field> parameter``.
    """
    try:
        return model.model_validate(body)
    except ValidationError as e:
        errors = e.errors()
        field_name = errors[0]["loc"][0] if errors and errors[0]["loc"] else "request"
        raise SigningError.invalid_input(f"missing {field_name} parameter") from e
