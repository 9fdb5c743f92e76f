"""User Schemas — Pydantic models for user records and the error body.

Invariants:
    - JSON field names are camelCase (email, firstName, lastName); always dump by_alias
    - Missing or null fields become "" — a zero-valued User is the "not found" record
    - Non-string field values are rejected (invalid user data), unknown fields ignored
    - Every failure response body is rendered through ErrorBody

Design Decisions:
    - One model for wire and store: the DynamoDB item has exactly the JSON shape
    - is_empty property over an Optional return: fetch keeps its empty-identity
      "not found" representation (ADR: preserve observed behavior, see DESIGN.md)
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """User record — email is the partition key."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str = ""
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")

    @field_validator("email", "first_name", "last_name", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        """JSON null decodes to the zero value, same as an absent field."""
        return "" if v is None else v

    @property
    def is_empty(self) -> bool:
        return not self.email

    def to_item(self) -> dict:
        """Serialize to the store/wire shape."""
        return self.model_dump(by_alias=True)


class ErrorBody(BaseModel):
    """Error Body — error omitted entirely when absent."""
    error: str | None = None

    def to_response(self) -> dict:
        return self.model_dump(exclude_none=True)
