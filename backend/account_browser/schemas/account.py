"""
Account schema (API contract). Validates Salesforce Account records by API field name.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Salesforce datetimes look like 2024-01-15T10:30:00.000+0000
_SF_DATETIME_FORMATS = ("%Y-%m-%dT%H:%M:%S.%f%z", "%Y-%m-%dT%H:%M:%S%z")


def parse_salesforce_datetime(value: object) -> object:
    """Parse a Salesforce datetime string; other values are passed through."""
    if not isinstance(value, str) or not value.strip():
        return value or None
    raw = value.strip()
    for fmt in _SF_DATETIME_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


def format_display_date(value: datetime | None) -> str | None:
    """Numeric year, 2-digit month and day: MM/DD/YYYY."""
    if value is None:
        return None
    return value.strftime("%m/%d/%Y")


class Account(BaseModel):
    """Account row as shown in the account datatables."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias=AliasChoices("Id", "id"))
    name: str | None = Field(None, validation_alias=AliasChoices("Name", "name"))
    account_number: str | None = Field(
        None, validation_alias=AliasChoices("AccountNumber", "account_number")
    )
    type: str | None = Field(None, validation_alias=AliasChoices("Type", "type"))
    status: str | None = Field(None, validation_alias=AliasChoices("AccountStatus__c", "status"))
    record_type_id: str | None = Field(
        None, validation_alias=AliasChoices("RecordTypeId", "record_type_id")
    )
    created_date: datetime | None = Field(
        None, validation_alias=AliasChoices("CreatedDate", "created_date")
    )
    created_date_display: str | None = None

    @field_validator("created_date", mode="before")
    @classmethod
    def parse_created_date(cls, v: object) -> object:
        return parse_salesforce_datetime(v)

    @classmethod
    def from_record(cls, record: dict) -> "Account":
        account = cls.model_validate(record)
        account.created_date_display = format_display_date(account.created_date)
        return account
