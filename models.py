from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class EndpointConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    url: str
    price_path: str = Field(alias="price-path")
    time_path: str | None = Field(default=None, alias="time-path")
    authentication: str = "none"
    priority: int
    description: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    rate_conversion: Literal["invert"] | None = None

    @property
    def requires_auth(self) -> bool:
        return self.authentication != "none"


class RecipientRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recipient_name: str = Field(alias="recipientName")
    giver_name: str = Field(alias="giverName")
    gift_date: dt.date = Field(alias="giftDate")
    initial_price: float = Field(alias="initialPrice", gt=0)
    silver_amount: float = Field(alias="silverAmount", gt=0)


class DailyPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    price: float
    source: str | None = None


class StatusIcon(BaseModel):
    level: Literal["reliable", "warning", "error"]
    tooltip: list[str]


class ChartMessage(BaseModel):
    title: str
    message: str
    sub_message: str | None = None


class RecipientOption(BaseModel):
    recipient_id: str
    recipient_name: str


class GiftView(BaseModel):
    kind: Literal["gift"] = "gift"
    recipient_name: str
    giver_name: str
    status: StatusIcon
    time_description: str
    gift_description: str
    price_label: str | None = None
    total_value: str | None = None
    is_last_known: bool = False
    change_description: str | None = None
    spot_price: str | None = None
    unavailable_notes: list[str] = Field(default_factory=list)
    content: str
    chart: dict | None = None
    chart_message: ChartMessage | None = None


class SelectorView(BaseModel):
    kind: Literal["selector"] = "selector"
    title: str
    options: list[RecipientOption]


class ErrorView(BaseModel):
    kind: Literal["error"] = "error"
    title: str
    message: str
