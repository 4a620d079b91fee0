"""
Contact schema (API contract). Validates Salesforce Contact records by API field name.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Contact(BaseModel):
    """Contact row as shown under the selected account."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias=AliasChoices("Id", "id"))
    first_name: str | None = Field(None, validation_alias=AliasChoices("FirstName", "first_name"))
    last_name: str | None = Field(None, validation_alias=AliasChoices("LastName", "last_name"))
    email: str | None = Field(None, validation_alias=AliasChoices("Email", "email"))
