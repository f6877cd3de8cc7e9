"""Request and response records for the RD Station CRM resources."""

from .base import Record
from .endpoints import DEALS, DEAL_BY_ID, CONTACTS, CONTACT_BY_ID, endpoint_for
from .deals import (
    Deal,
    ListDealsFilter,
    ListDealsResponse,
    CreateDealData,
    CreateDealRequest,
    DealResponse,
    UpdateDealData,
    UpdateDealRequest,
)
from .contacts import (
    Contact,
    ListContactsFilter,
    ListContactsResponse,
    CreateContactData,
    CreateContactRequest,
    ContactResponse,
    UpdateContactData,
    UpdateContactRequest,
    EmailData,
    PhoneData,
)

__all__ = [
    "Record",
    "DEALS",
    "DEAL_BY_ID",
    "CONTACTS",
    "CONTACT_BY_ID",
    "endpoint_for",
    "Deal",
    "ListDealsFilter",
    "ListDealsResponse",
    "CreateDealData",
    "CreateDealRequest",
    "DealResponse",
    "UpdateDealData",
    "UpdateDealRequest",
    "Contact",
    "ListContactsFilter",
    "ListContactsResponse",
    "CreateContactData",
    "CreateContactRequest",
    "ContactResponse",
    "UpdateContactData",
    "UpdateContactRequest",
    "EmailData",
    "PhoneData",
]
