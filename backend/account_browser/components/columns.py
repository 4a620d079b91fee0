"""
Datatable column definitions for the account and contact tables.
"""

from account_browser.schemas.common import DataTableColumn

DATE_TYPE_ATTRIBUTES = {"year": "numeric", "month": "2-digit", "day": "2-digit"}

ACCOUNT_COLUMNS = [
    DataTableColumn(label="Name", field_name="name", sortable=True),
    DataTableColumn(label="Account Number", field_name="account_number"),
    DataTableColumn(label="Type", field_name="type"),
    DataTableColumn(label="Status", field_name="status"),
    DataTableColumn(
        label="Created Date",
        field_name="created_date",
        type="date",
        type_attributes=DATE_TYPE_ATTRIBUTES,
    ),
]

CONTACT_COLUMNS = [
    DataTableColumn(label="First Name", field_name="first_name"),
    DataTableColumn(label="Last Name", field_name="last_name"),
    DataTableColumn(label="Email", field_name="email", type="email"),
]

# Simple account datatable (no pagination, no contacts)
DATATABLE_COLUMNS = [
    DataTableColumn(label="Account Name", field_name="name", sortable=True),
    DataTableColumn(label="Account ID", field_name="id", sortable=True),
    DataTableColumn(label="Record Type ID", field_name="record_type_id"),
    DataTableColumn(
        label="Created Date",
        field_name="created_date_display",
        type="date",
        type_attributes=DATE_TYPE_ATTRIBUTES,
        sortable=True,
    ),
]
