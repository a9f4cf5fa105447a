"""
Pydantic schemas for property submissions.

`Submission` is the raw shape a plugin sends (camelCase JSON). After the rule
and transform passes in `validation.py` it becomes one variant of
`ValidatedProperty`, a union discriminated by `type` where each variant only
carries the room/floor fields that make sense for that kind of property.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, TypeAdapter
from pydantic.alias_generators import to_camel


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    VILLA = "villa"
    OFFICE = "office"
    RIADS = "riads"
    GARAGE = "garage"
    STUDIO = "studio"
    DUPLEX = "duplex"


class TransactionType(str, Enum):
    FOR_RENT = "for_rent"
    FOR_SALE = "for_sale"


class PropertyStyle(str, Enum):
    MODERN = "modern"
    TRADITIONAL = "traditional"


class PropertyUsage(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class FinishingQuality(str, Enum):
    ECONOMIC = "economic"
    MEDIUM = "medium"
    HIGH = "high"


class SunLightLevel(str, Enum):
    WEAK = "weak"
    MEDIUM = "medium"
    HIGH = "high"


class WeekDay(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class PublishStatus(str, Enum):
    UNDER_REVIEW = "under_review"
    PAUSE = "pause"
    REJECTED = "rejected"
    PUBLISHED = "published"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Submission(_CamelModel):
    """
    One property as sent by a plugin, before any type-dependent rule is applied.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str = Field(..., min_length=10)
    type: PropertyType
    transaction_type: TransactionType
    property_style: PropertyStyle
    property_usage: PropertyUsage
    is_furnished: StrictBool
    finishing_quality: FinishingQuality
    sun_light_level: SunLightLevel
    year_built: StrictInt = Field(..., ge=1800)

    price: StrictInt = Field(..., gt=0)
    is_negotiable: StrictBool = True

    property_rent_contract_months: StrictInt | None = None
    property_rent_deposit_months: StrictInt | None = None

    latitude: StrictFloat = Field(..., ge=-90, le=90)
    longitude: StrictFloat = Field(..., ge=-180, le=180)
    full_address: str | None = None
    compact_address: str | None = None

    floor_number: StrictInt | None = Field(default=None, ge=0)
    total_floor: StrictInt | None = Field(default=None, ge=1)
    total_water_closets: StrictInt | None = Field(default=None, ge=0)
    total_bathrooms: StrictInt | None = Field(default=None, ge=0)
    total_bedrooms: StrictInt | None = Field(default=None, ge=0)
    total_salons: StrictInt | None = Field(default=None, ge=0)
    total_kitchens: StrictInt | None = Field(default=None, ge=0)
    area_size: StrictInt | None = Field(default=None, ge=1)
    building_size: StrictInt | None = Field(default=None, ge=1)

    youtube_video_url: AnyHttpUrl | None = None
    matter_port_url: AnyHttpUrl | None = None
    floor_plan_url: AnyHttpUrl | None = None

    cover_image_id: str = Field(..., min_length=1)
    gallery_image_ids: list[str] | None = None

    visit_days: list[WeekDay]
    amenity_ids: list[UUID] | None = None


class _ListingBase(_CamelModel):
    # Leftover fields mean the transform pass missed something.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: str | None = None
    description: str
    transaction_type: TransactionType
    property_style: PropertyStyle
    property_usage: PropertyUsage
    is_furnished: bool
    finishing_quality: FinishingQuality
    sun_light_level: SunLightLevel
    year_built: int
    price: int
    is_negotiable: bool = True

    property_rent_contract_months: int | None = None
    property_rent_deposit_months: int | None = None

    latitude: float
    longitude: float
    full_address: str | None = None
    compact_address: str | None = None

    total_water_closets: int | None = None
    area_size: int | None = None
    building_size: int | None = None

    youtube_video_url: AnyHttpUrl | None = None
    matter_port_url: AnyHttpUrl | None = None
    floor_plan_url: AnyHttpUrl | None = None

    cover_image_id: str
    gallery_image_ids: list[str] | None = None

    visit_days: list[WeekDay]
    amenity_ids: list[UUID] | None = None


class FlatListing(_ListingBase):
    """Apartment, studio or duplex: a unit inside a building."""

    type: Literal[PropertyType.APARTMENT, PropertyType.STUDIO, PropertyType.DUPLEX]
    floor_number: int
    total_floor: int
    total_bedrooms: int
    total_bathrooms: int
    total_salons: int
    total_kitchens: int
    building_size: int


class DetachedListing(_ListingBase):
    """House, riad or villa: the whole building, so no floor number."""

    type: Literal[PropertyType.HOUSE, PropertyType.RIADS, PropertyType.VILLA]
    total_floor: int
    total_bedrooms: int
    total_bathrooms: int
    total_salons: int
    total_kitchens: int


class OfficeListing(_ListingBase):
    type: Literal[PropertyType.OFFICE]
    floor_number: int
    total_floor: int | None = None
    total_kitchens: int
    total_water_closets: int


class GarageListing(_ListingBase):
    type: Literal[PropertyType.GARAGE]
    total_floor: int
    total_water_closets: int


ValidatedProperty = Annotated[
    Union[FlatListing, DetachedListing, OfficeListing, GarageListing],
    Field(discriminator="type"),
]

validated_property_adapter: TypeAdapter[ValidatedProperty] = TypeAdapter(ValidatedProperty)
