"""Tests for resource records and endpoints."""

from dataclasses import dataclass, field

import pytest

from rdstation_crm.resources.base import Record
from rdstation_crm.resources.contacts import (
    Contact,
    ContactResponse,
    CreateContactData,
    CreateContactRequest,
    PhoneData,
    UpdateContactData,
    UpdateContactRequest,
)
from rdstation_crm.resources.deals import (
    CreateDealData,
    CreateDealRequest,
    Deal,
    DealProductData,
    DealResponse,
    DealSourceData,
    ListDealsFilter,
    ListDealsResponse,
    UpdateDealCustomField,
    UpdateDealData,
    UpdateDealRequest,
)
from rdstation_crm.resources.endpoints import DEAL_BY_ID, CONTACT_BY_ID, endpoint_for


@dataclass
class Sample(Record):
    name: str = ""
    count: int = 0
    ratio: float = 0.0
    flag: bool = False
    label: str | None = None
    tags: list[str] = field(default_factory=list)
    internal_id: str = field(default="", metadata={"json": "_id"})


# ===== to_dict =====

def test_to_dict_omits_absent_fields():
    """Test that None fields are left out."""
    assert Sample().to_dict() == {
        "name": "",
        "count": 0,
        "ratio": 0.0,
        "flag": False,
        "tags": [],
        "_id": "",
    }


def test_to_dict_keeps_explicitly_empty_values():
    """Test that empty strings and lists are sent on partial updates."""
    request = UpdateContactRequest(contact=UpdateContactData(title="", emails=[]))

    assert request.to_dict() == {"contact": {"title": "", "emails": []}}


def test_to_dict_nested_records():
    """Test that nested records and lists of records are converted."""
    request = CreateDealRequest(
        deal=CreateDealData(
            name="Deal",
            deal_products=[DealProductData(name="Plan", amount=2)],
            deal_source=DealSourceData(id="src1"),
        )
    )

    assert request.to_dict() == {
        "deal": {
            "name": "Deal",
            "deal_products": [{"name": "Plan", "amount": 2}],
            "deal_source": {"_id": "src1"},
        }
    }


def test_update_deal_request_only_sends_changes():
    """Test that an update with a single field sends only that field."""
    request = UpdateDealRequest(
        deal=UpdateDealData(
            win="false",
            deal_custom_fields=[UpdateDealCustomField(custom_field_id="cf1", value="x")],
        )
    )

    assert request.to_dict() == {
        "deal": {
            "win": "false",
            "deal_custom_fields": [{"custom_field_id": "cf1", "value": "x"}],
        }
    }


def test_create_contact_request_to_dict():
    """Test contact creation body."""
    request = CreateContactRequest(
        contact=CreateContactData(name="Ana", phones=[PhoneData(phone="+55 11 99999-0000")])
    )

    assert request.to_dict() == {
        "contact": {"name": "Ana", "phones": [{"phone": "+55 11 99999-0000"}]}
    }


# ===== from_dict =====

def test_from_dict_missing_keys_use_defaults():
    """Test that absent keys keep field defaults."""
    sample = Sample.from_dict({})

    assert sample == Sample()


def test_from_dict_null_keeps_default_for_required_types():
    """Test that null on a non-optional field keeps the default."""
    sample = Sample.from_dict({"name": None, "label": None})

    assert sample.name == ""
    assert sample.label is None


def test_from_dict_wire_names():
    """Test that JSON keys from metadata are used."""
    assert Sample.from_dict({"_id": "abc"}).internal_id == "abc"


def test_from_dict_int_accepted_for_float():
    """Test that integer JSON numbers decode into float fields."""
    sample = Sample.from_dict({"ratio": 3})

    assert sample.ratio == 3.0
    assert isinstance(sample.ratio, float)


def test_from_dict_ignores_unknown_keys():
    """Test that extra keys from the API are ignored."""
    assert Sample.from_dict({"surprise": 1}) == Sample()


@pytest.mark.parametrize(
    "payload",
    [
        {"name": 5},
        {"count": "5"},
        {"count": True},
        {"ratio": "1.0"},
        {"flag": "true"},
        {"tags": "a,b"},
        {"tags": [1, 2]},
    ],
)
def test_from_dict_rejects_wrong_types(payload):
    """Test that mistyped values raise TypeError."""
    with pytest.raises(TypeError):
        Sample.from_dict(payload)


@pytest.mark.parametrize("payload", [[], "text", 1, None])
def test_from_dict_rejects_non_objects(payload):
    """Test that only JSON objects decode into records."""
    with pytest.raises(TypeError):
        Sample.from_dict(payload)


def test_deal_from_dict():
    """Test decoding a listed deal with nested records."""
    deal = Deal.from_dict({
        "id": "d1",
        "amount_montly": 99.9,
        "deal_products": [{"name": "Plan", "amount": 1, "price": 10}],
        "deal_stage": {"_id": "s1", "name": "Proposal"},
        "user": {"email": "owner@test.com"},
        "deal_custom_fields": [{"anything": True}],
        "stop_time_limit": {"expired": False},
        "deals": [{"id": "child"}],
        "user_changed": True,
    })

    assert deal.amount_monthly == 99.9
    assert deal.deal_products[0].price == 10.0
    assert deal.deal_stage.internal_id == "s1"
    assert deal.user.email == "owner@test.com"
    assert deal.deal_custom_fields == [{"anything": True}]
    assert deal.stop_time_limit == {"expired": False}
    assert deal.deals[0].id == "child"
    assert deal.user_changed is True


def test_deal_response_from_dict():
    """Test decoding the create/update deal response."""
    deal = DealResponse.from_dict({
        "id": "d1",
        "name": "Deal",
        "rating": 4,
        "deal_stage_histories": [{"deal_stage_id": "s1", "end_date": None, "start_date": "2024"}],
        "stop_time_limit": {"expired": True, "expired_days": 3},
        "errors": {},
    })

    assert deal.rating == 4.0
    assert deal.deal_stage_histories[0].end_date is None
    assert deal.stop_time_limit.expired_days == 3
    assert deal.errors == {}
    assert deal.campaign is None


def test_list_deals_response_pagination_fields():
    """Test that has_more and next_page are decoded."""
    response = ListDealsResponse.from_dict({"deals": [], "has_more": True, "next_page": "p2", "total": 3})

    assert response.has_more is True
    assert response.next_page == "p2"


def test_contact_from_dict():
    """Test decoding a listed contact."""
    contact = Contact.from_dict({
        "id": "c1",
        "name": "Ana",
        "facebook": None,
        "phones": [{"phone": "123", "whatsapp": True, "whatsapp_full_internacional": "+55123"}],
        "deals": [{"_id": "x", "win": False}],
        "birthday": {"day": 1, "month": 2, "year": 1990},
    })

    assert contact.facebook is None
    assert contact.phones[0].whatsapp_full_international == "+55123"
    assert contact.deals[0].deal_id == "x"
    assert contact.birthday.year == 1990


def test_contact_response_from_dict():
    """Test decoding the create/update contact response."""
    contact = ContactResponse.from_dict({
        "id": "c1",
        "_id": "i1",
        "contact_c_f": {"x": 1},
        "deal_ids": ["d1"],
        "organization": {"_id": "o1", "name": "Acme"},
    })

    assert contact.contact_cf == {"x": 1}
    assert contact.deal_ids == ["d1"]
    assert contact.organization.id == "o1"


def test_filters_are_records():
    """Test that filters can be printed as dictionaries."""
    assert ListDealsFilter(limit="5").to_dict()["limit"] == "5"


# ===== Endpoints =====

def test_endpoint_for_substitutes_id():
    """Test endpoint template substitution."""
    assert endpoint_for(DEAL_BY_ID, "abc123") == "deals/abc123"
    assert endpoint_for(CONTACT_BY_ID, "c1") == "contacts/c1"


def test_endpoint_for_quotes_id():
    """Test that identifiers cannot inject path segments or queries."""
    assert endpoint_for(DEAL_BY_ID, "a/b?c") == "deals/a%2Fb%3Fc"


def test_endpoint_for_requires_id():
    """Test that an empty identifier is rejected."""
    with pytest.raises(ValueError):
        endpoint_for(DEAL_BY_ID, "")
