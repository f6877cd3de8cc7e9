"""Contact records of the RD Station CRM API."""

from dataclasses import dataclass, field
from typing import Any

from .base import Record
from .deals import OrganizationResponse


# ===== Listing =====

@dataclass
class BirthdayResponse(Record):
    id: str = field(default="", metadata={"json": "_id"})
    created_at: str = ""
    day: int = 0
    month: int = 0
    updated_at: str = ""
    year: int = 0


@dataclass
class ContactCustomField(Record):
    id: str = field(default="", metadata={"json": "_id"})
    created_at: str = ""
    custom_field_id: str = ""
    updated_at: str = ""
    value: str = ""


@dataclass
class ContactDeal(Record):
    deal_id: str = field(default="", metadata={"json": "_id"})
    closed_at: str = ""
    deal_lost_reason_id: str = ""
    id: str = ""
    name: str = ""
    prediction_date: str = ""
    win: bool = False


@dataclass
class Email(Record):
    id: str = field(default="", metadata={"json": "_id"})
    created_at: str = ""
    email: str = ""
    updated_at: str = ""


@dataclass
class LegalBasis(Record):
    category: str = ""
    status: str = ""
    type: str = ""


@dataclass
class Phone(Record):
    created_at: str = ""
    phone: str = ""
    type: str = ""
    updated_at: str = ""
    whatsapp: bool = False
    # The API spells this key in Portuguese
    whatsapp_full_international: str = field(
        default="", metadata={"json": "whatsapp_full_internacional"}
    )
    whatsapp_url_web: str = ""


@dataclass
class Contact(Record):
    """A contact as returned by the listing endpoint."""
    birthday: BirthdayResponse = field(default_factory=BirthdayResponse)
    contact_custom_fields: list[ContactCustomField] = field(default_factory=list)
    created_at: str = ""
    deals: list[ContactDeal] = field(default_factory=list)
    emails: list[Email] = field(default_factory=list)
    facebook: str | None = None
    id: str = ""
    legal_bases: list[LegalBasis] = field(default_factory=list)
    linkedin: str | None = None
    name: str = ""
    notes: str = ""
    organization_id: str | None = None
    phones: list[Phone] = field(default_factory=list)
    skype: str | None = None
    title: str | None = None
    updated_at: str = ""


@dataclass
class ListContactsFilter(Record):
    page: str = field(default="", metadata={"query": "page"})
    limit: str = field(default="", metadata={"query": "limit"})
    order: str = field(default="", metadata={"query": "order"})
    direction: str = field(default="", metadata={"query": "direction"})
    email: str = field(default="", metadata={"query": "email"})
    # Contact name
    q: str = field(default="", metadata={"query": "q"})
    phone: str = field(default="", metadata={"query": "phone"})
    title: str = field(default="", metadata={"query": "title"})


@dataclass
class ListContactsResponse(Record):
    contacts: list[Contact] = field(default_factory=list)
    has_more: bool = False
    total: float = 0.0


# ===== Create / update =====

@dataclass
class BirthdayData(Record):
    day: int
    month: int
    year: int


@dataclass
class EmailData(Record):
    email: str


@dataclass
class PhoneData(Record):
    phone: str
    type: str | None = None


@dataclass
class CreateContactData(Record):
    name: str
    birthday: BirthdayData | None = None
    contact_custom_fields: list[ContactCustomField] | None = None
    deal_ids: list[str] | None = None
    emails: list[EmailData] | None = None
    facebook: str | None = None
    legal_bases: list[LegalBasis] | None = None
    linkedin: str | None = None
    phones: list[PhoneData] | None = None
    organization_id: str | None = None
    skype: str | None = None


@dataclass
class CreateContactRequest(Record):
    contact: CreateContactData


@dataclass
class UpdateContactData(Record):
    """Partial contact update. Fields left as None are not sent."""
    birthday: BirthdayData | None = None
    contact_custom_fields: list[ContactCustomField] | None = None
    deal_ids: list[str] | None = None
    emails: list[EmailData] | None = None
    facebook: str | None = None
    legal_bases: list[LegalBasis] | None = None
    linkedin: str | None = None
    name: str | None = None
    organization_id: str | None = None
    phones: list[Phone] | None = None
    skype: str | None = None
    title: str | None = None


@dataclass
class UpdateContactRequest(Record):
    contact: UpdateContactData = field(default_factory=UpdateContactData)


@dataclass
class ContactResponse(Record):
    """A contact as returned by the create and update endpoints."""
    id: str = ""
    internal_id: str = field(default="", metadata={"json": "_id"})
    birthday: BirthdayResponse = field(default_factory=BirthdayResponse)
    contact_cf: Any = field(default=None, metadata={"json": "contact_c_f"})
    contact_custom_fields: list[ContactCustomField] = field(default_factory=list)
    created_at: str = ""
    deal_ids: list[str] = field(default_factory=list)
    emails: list[Email] = field(default_factory=list)
    facebook: str = ""
    legal_bases: list[LegalBasis] = field(default_factory=list)
    linkedin: str = ""
    name: str = ""
    notes: str = ""
    organization: OrganizationResponse = field(default_factory=OrganizationResponse)
    organization_id: str = ""
    phones: list[Phone] = field(default_factory=list)
    skype: str = ""
    title: str = ""
    updated_at: str = ""
