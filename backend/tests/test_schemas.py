"""
Tests for record validation: Salesforce field names and datetimes.
"""

from datetime import datetime, timezone

from account_browser.schemas.account import Account, format_display_date, parse_salesforce_datetime
from account_browser.schemas.contact import Contact


def test_parse_salesforce_datetime() -> None:
    parsed = parse_salesforce_datetime("2024-01-15T10:30:00.000+0000")
    assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def test_parse_iso_datetime_with_z() -> None:
    parsed = parse_salesforce_datetime("2024-03-02T08:00:00Z")
    assert parsed == datetime(2024, 3, 2, 8, 0, tzinfo=timezone.utc)


def test_parse_blank_is_none() -> None:
    assert parse_salesforce_datetime("") is None
    assert parse_salesforce_datetime(None) is None


def test_format_display_date() -> None:
    assert format_display_date(datetime(2024, 1, 5)) == "01/05/2024"
    assert format_display_date(None) is None


def test_account_from_record() -> None:
    account = Account.from_record(
        {
            "Id": "001000000000001AAA",
            "Name": "Acme",
            "AccountNumber": "A-1",
            "Type": "Prospect",
            "AccountStatus__c": "Inactive",
            "CreatedDate": "2023-12-31T23:59:59.000+0000",
        }
    )
    assert account.name == "Acme"
    assert account.status == "Inactive"
    assert account.created_date_display == "12/31/2023"
    dumped = account.model_dump()
    assert "Name" not in dumped and dumped["account_number"] == "A-1"


def test_account_missing_optional_fields() -> None:
    account = Account.from_record({"Id": "001000000000001AAA"})
    assert account.name is None
    assert account.created_date is None
    assert account.created_date_display is None


def test_contact_from_record() -> None:
    contact = Contact.model_validate(
        {"Id": "003000000000001AAA", "FirstName": "Ada", "LastName": "Lovelace", "Email": None}
    )
    assert contact.first_name == "Ada"
    assert contact.email is None
