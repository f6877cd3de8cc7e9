"""Deal records of the RD Station CRM API."""

from dataclasses import dataclass, field
from typing import Any

from .base import Record


# ===== Listing =====

@dataclass
class User(Record):
    internal_id: str = field(default="", metadata={"json": "_id"})
    email: str = ""
    id: str = ""
    name: str = ""
    nickname: str = ""


@dataclass
class DealStage(Record):
    internal_id: str = field(default="", metadata={"json": "_id"})
    created_at: str = ""
    id: str = ""
    name: str = ""
    nickname: str = ""
    updated_at: str = ""


@dataclass
class DealProduct(Record):
    id: str = ""
    amount: int = 0
    base_price: float = 0.0
    created_at: str = ""
    description: str = ""
    discount: float = 0.0
    discount_type: str = ""
    name: str = ""
    price: float = 0.0
    product_id: str = ""
    recurrence: str = ""
    total: float = 0.0
    updated_at: str = ""


@dataclass
class Deal(Record):
    """A deal as returned by the listing endpoint."""
    id: str = ""
    # The API spells this key without the "h"
    amount_monthly: float = field(default=0.0, metadata={"json": "amount_montly"})
    amount_total: float = 0.0
    amount_unique: float = 0.0
    closed_at: str = ""
    deals: list["Deal"] = field(default_factory=list)
    created_at: str = ""
    deal_custom_fields: list[Any] = field(default_factory=list)
    deal_products: list[DealProduct] = field(default_factory=list)
    deal_stage: DealStage = field(default_factory=DealStage)
    hold: str = ""
    interactions: int = 0
    last_activity_at: str = ""
    last_activity_content: str = ""
    markup: str = ""
    markup_created: str = ""
    markup_last_activities: str = ""
    name: str = ""
    prediction_date: str = ""
    rating: int = 0
    stop_time_limit: Any = None
    updated_at: str = ""
    user: User = field(default_factory=User)
    user_changed: bool = False
    win: str = ""


@dataclass
class ListDealsFilter(Record):
    """
    Search parameters for listing deals.

    Every field is sent as text, the API expects "true"/"false" strings for
    its flag parameters. Empty fields are not sent.
    """
    page: str = field(default="", metadata={"query": "page"})
    # Default 20, maximum 200
    limit: str = field(default="", metadata={"query": "limit"})
    # Default "created_at"
    order: str = field(default="", metadata={"query": "order"})
    # "asc" or "desc" (default)
    direction: str = field(default="", metadata={"query": "direction"})
    name: str = field(default="", metadata={"query": "name"})
    # "true" matches name exactly
    exact_name: str = field(default="", metadata={"query": "exact_name"})
    # "true" (won), "false" (lost) or "null" (open)
    win: str = field(default="", metadata={"query": "win"})
    user_id: str = field(default="", metadata={"query": "user_id"})
    # "true" returns won or lost deals, "false" returns open or paused deals
    closed_at: str = field(default="", metadata={"query": "closed_at"})
    # The *_period flags require start_date and end_date
    closed_at_period: str = field(default="", metadata={"query": "closed_at_period"})
    created_at_period: str = field(default="", metadata={"query": "created_at_period"})
    prediction_date_period: str = field(default="", metadata={"query": "prediction_date_period"})
    # ISO 8601, e.g. "2020-12-14T15:00:00"
    start_date: str = field(default="", metadata={"query": "start_date"})
    end_date: str = field(default="", metadata={"query": "end_date"})
    campaign_id: str = field(default="", metadata={"query": "campaign_id"})
    deal_stage_id: str = field(default="", metadata={"query": "deal_stage_id"})
    deal_lost_reason_id: str = field(default="", metadata={"query": "deal_lost_reason_id"})
    deal_pipeline_id: str = field(default="", metadata={"query": "deal_pipeline_id"})
    organization: str = field(default="", metadata={"query": "organization"})
    # "true" returns only paused deals
    hold: str = field(default="", metadata={"query": "hold"})
    # "true", "false" or comma separated product IDs
    product_presence: str = field(default="", metadata={"query": "product_presence"})
    # Continuation token from a previous ListDealsResponse
    next_page: str = field(default="", metadata={"query": "next_page"})


@dataclass
class ListDealsResponse(Record):
    deals: list[Deal] = field(default_factory=list)
    has_more: bool = False
    next_page: str = ""
    total: int = 0


# ===== Creation =====

@dataclass
class DealProductData(Record):
    amount: int | None = None
    base_price: float | None = None
    description: str | None = None
    discount_type: str | None = None
    name: str | None = None
    price: float | None = None
    recurrence: str | None = None
    total: float | None = None


@dataclass
class OwnerData(Record):
    email: str | None = None
    id: str | None = None
    type: str | None = None


@dataclass
class OrganizationData(Record):
    id: str | None = field(default=None, metadata={"json": "_id"})


@dataclass
class DistributionSettingsData(Record):
    owner: OwnerData | None = None
    organization: OrganizationData | None = None


@dataclass
class DealSourceData(Record):
    id: str | None = field(default=None, metadata={"json": "_id"})
    distribution_settings: DistributionSettingsData | None = None


@dataclass
class CampaignData(Record):
    id: str | None = field(default=None, metadata={"json": "_id"})
    deals: list[Deal] | None = None


@dataclass
class CreateDealData(Record):
    name: str
    # Contact records from rdstation_crm.resources.contacts
    contacts: list[Any] | None = None
    deal_custom_fields: list[Any] | None = None
    deal_stage_id: str | None = None
    prediction_date: str | None = None
    rating: int | None = None
    user_id: str | None = None
    deal_products: list[DealProductData] | None = None
    deal_source: DealSourceData | None = None


@dataclass
class CreateDealRequest(Record):
    deal: CreateDealData
    campaign: CampaignData | None = None


# ===== Create / update response =====

@dataclass
class CampaignResponse(Record):
    id: str = ""
    name: str = ""


@dataclass
class CustomFieldResponse(Record):
    custom_field_id: str = ""


@dataclass
class DealCustomFieldResponse(Record):
    created_at: str = ""
    custom_field: CustomFieldResponse = field(default_factory=CustomFieldResponse)
    updated_at: str = ""
    value: Any = None


@dataclass
class DealProductResponse(DealProduct):
    pass


@dataclass
class DealSourceResponse(Record):
    id: str = ""
    name: str = ""
    deal_source_id: str = ""


@dataclass
class DealStageResponse(Record):
    deal_pipeline_id: str = ""
    id: str = ""
    name: str = ""
    nickname: str = ""


@dataclass
class DealStageHistoryResponse(Record):
    deal_stage_id: str = ""
    end_date: str | None = None
    id: str = ""
    start_date: str = ""


@dataclass
class StopTimeLimitResponse(Record):
    expiration_date_time: str | None = None
    expired: bool | None = None
    expired_days: int | None = None


@dataclass
class UserResponse(Record):
    id: str = ""
    name: str = ""


@dataclass
class OrganizationResponse(Record):
    id: str = field(default="", metadata={"json": "_id"})
    name: str = ""
    resume: str = ""
    url: str = ""


@dataclass
class DealResponse(Record):
    """A deal as returned by the create and update endpoints."""
    id: str = ""
    amount_monthly: float = field(default=0.0, metadata={"json": "amount_montly"})
    amount_total: float = 0.0
    amount_unique: float = 0.0
    best_moment_to_touch: bool | None = None
    c_cf_errors: dict | None = None
    campaign: CampaignResponse | None = None
    campaign_id: str | None = None
    closed_at: str | None = None
    deal_errors: dict | None = None
    created_at: str = ""
    deal_custom_fields: list[DealCustomFieldResponse] = field(default_factory=list)
    deal_lost_note: str | None = None
    deal_lost_reason_id: str | None = None
    deal_products: list[DealProductResponse] = field(default_factory=list)
    deal_source: DealSourceResponse | None = None
    deal_stage: DealStageResponse | None = None
    deal_stage_histories: list[DealStageHistoryResponse] = field(default_factory=list)
    errors: dict | None = None
    from_rdsm_integration: bool | None = None
    hold: str | None = None
    interactions: int = 0
    last_note_content: str | None = None
    name: str = ""
    organization: OrganizationResponse | None = None
    prediction_date: str | None = None
    rating: float | None = None
    resume: str | None = None
    stop_time_limit: StopTimeLimitResponse | None = None
    updated_at: str = ""
    url: str | None = None
    user: UserResponse | None = None
    visible: bool | None = None
    win: str | None = None


# ===== Update =====

@dataclass
class UpdateCampaignData(Record):
    id: str | None = field(default=None, metadata={"json": "_id"})


@dataclass
class UpdateDealCustomField(Record):
    custom_field_id: str
    value: Any = None


@dataclass
class UpdateDealSourceData(Record):
    id: str | None = field(default=None, metadata={"json": "_id"})
    deal_stage_id: str | None = None


@dataclass
class UpdateDealData(Record):
    """Partial deal update. Fields left as None are not sent."""
    deal_custom_fields: list[UpdateDealCustomField] | None = None
    deal_lost_note: str | None = None
    deal_lost_reason_id: str | None = None
    hold: str | None = None
    name: str | None = None
    organization_id: str | None = None
    prediction_date: str | None = None
    rating: float | None = None
    user_id: str | None = None
    win: str | None = None
    deal_source: UpdateDealSourceData | None = None
    deal_stage_id: str | None = None


@dataclass
class UpdateDealRequest(Record):
    deal: UpdateDealData = field(default_factory=UpdateDealData)
    campaign: UpdateCampaignData | None = None
