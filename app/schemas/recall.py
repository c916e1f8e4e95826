"""Schemas for the recall search endpoint."""

from typing import TypedDict

from pydantic import BaseModel, ConfigDict, Field


class RawHazard(TypedDict, total=False):
    Name: str | None


class RawRemedy(TypedDict, total=False):
    Name: str | None


class RawImage(TypedDict, total=False):
    URL: str | None


class RawProduct(TypedDict, total=False):
    Name: str | None
    Type: str | None
    Model: str | None
    Description: str | None
    CategoryID: str | int | None


class RawRecallRecord(TypedDict, total=False):
    """One recall as returned by the CPSC API. Any key may be missing or null."""

    RecallID: int | str
    RecallNumber: str | None
    RecallDate: str | None
    LastPublishDate: str | None
    URL: str | None
    Title: str | None
    Description: str | None
    Hazards: list[RawHazard] | None
    Remedies: list[RawRemedy] | None
    Images: list[RawImage] | None
    Products: list[RawProduct] | None


class RecallProduct(BaseModel):
    """Compact product entry of a normalized recall."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str | None = None
    type: str | None = None
    model: str | None = None
    category_id: int | str | None = Field(None, alias="categoryId")


class NormalizedRecall(BaseModel):
    """Compact, read-only projection of a CPSC recall."""

    model_config = ConfigDict(frozen=True)

    id: int | str | None = Field(None, description="CPSC RecallID.")
    number: str | None = Field(None, description="CPSC RecallNumber.")
    title: str | None = None
    url: str | None = None
    published: str | None = Field(None, description="LastPublishDate, or RecallDate when not published.")
    description: str | None = None
    hazard: str = Field("", description="First hazard name, trimmed.")
    remedy: str = Field("", description="First remedy name, trimmed.")
    images: list[str] = Field(default_factory=list)
    products: list[RecallProduct] = Field(default_factory=list)


class RecallListResponse(BaseModel):
    """Response for GET /api/recalls."""

    count: int = Field(..., description="Number of items returned.")
    items: list[NormalizedRecall] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "count": 1,
                    "items": [
                        {
                            "id": 1,
                            "number": "23001",
                            "title": "Toy Car Recall",
                            "url": "https://www.cpsc.gov/Recalls/2023/toy-car",
                            "published": "2023-01-01",
                            "description": "Wheels can detach.",
                            "hazard": "Choking",
                            "remedy": "Refund",
                            "images": [],
                            "products": [{"name": "Car", "type": "Toy", "model": None, "categoryId": None}],
                        }
                    ],
                }
            ]
        }
    }
