"""
Property submission validation.

`validate_submission` runs three passes over one raw submission:
1. shape: types, enums and scalar bounds (pydantic)
2. rules: usage/type compatibility, rent fields, per-type required fields
3. transform: drop fields that do not apply, fill type-specific defaults

It never raises for bad input; callers get every violation at once in a
`ValidationResult`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from .schemas import (
    PropertyType,
    PropertyUsage,
    Submission,
    TransactionType,
    ValidatedProperty,
    validated_property_adapter,
)

RESIDENTIAL_TYPES = frozenset(
    {
        PropertyType.APARTMENT,
        PropertyType.HOUSE,
        PropertyType.RIADS,
        PropertyType.VILLA,
        PropertyType.STUDIO,
        PropertyType.DUPLEX,
    }
)

FLAT_TYPES = frozenset({PropertyType.APARTMENT, PropertyType.STUDIO, PropertyType.DUPLEX})
DETACHED_TYPES = frozenset({PropertyType.HOUSE, PropertyType.RIADS, PropertyType.VILLA})

_FLAT_REQUIRED = (
    "floor_number",
    "total_bedrooms",
    "total_bathrooms",
    "total_salons",
    "total_kitchens",
    "building_size",
)
_DETACHED_REQUIRED = (
    "total_floor",
    "total_bedrooms",
    "total_bathrooms",
    "total_salons",
    "total_kitchens",
)

REQUIRED_FIELDS_BY_TYPE: dict[PropertyType, tuple[str, ...]] = {
    PropertyType.APARTMENT: _FLAT_REQUIRED,
    PropertyType.STUDIO: _FLAT_REQUIRED,
    PropertyType.DUPLEX: _FLAT_REQUIRED,
    PropertyType.HOUSE: _DETACHED_REQUIRED,
    PropertyType.RIADS: _DETACHED_REQUIRED,
    PropertyType.VILLA: _DETACHED_REQUIRED,
    PropertyType.OFFICE: ("floor_number", "total_kitchens", "total_water_closets"),
    PropertyType.GARAGE: ("total_floor", "total_water_closets"),
}

DROPPED_FIELDS_BY_TYPE: dict[PropertyType, tuple[str, ...]] = {
    PropertyType.HOUSE: ("floor_number",),
    PropertyType.RIADS: ("floor_number",),
    PropertyType.VILLA: ("floor_number",),
    PropertyType.OFFICE: ("total_bedrooms", "total_bathrooms", "total_salons"),
    PropertyType.GARAGE: (
        "floor_number",
        "total_bedrooms",
        "total_bathrooms",
        "total_salons",
        "total_kitchens",
    ),
}

RENT_FIELDS = ("property_rent_contract_months", "property_rent_deposit_months")

_URL_FIELDS = ("youtube_video_url", "matter_port_url", "floor_plan_url")


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    listing: ValidatedProperty | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.listing is not None and not self.errors

    def summary(self) -> str:
        return "; ".join(str(error) for error in self.errors)


def _errors_from_pydantic(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for item in exc.errors():
        path = ".".join(str(part) for part in item.get("loc", ())) or "body"
        errors.append(FieldError(field=path, message=str(item.get("msg") or "Invalid value")))
    return errors


def _type_label(property_type: PropertyType) -> str:
    if property_type in DETACHED_TYPES:
        return "house/riad/villa"
    return property_type.value


def check_rules(submission: Submission) -> list[FieldError]:
    """
    Cross-field rules. Returns every violation, in a stable order.
    """
    errors: list[FieldError] = []

    if submission.property_usage is PropertyUsage.RESIDENTIAL and submission.type not in RESIDENTIAL_TYPES:
        errors.append(
            FieldError(
                field="type",
                message=(
                    "When propertyUsage is residential, only apartment, house, riads, "
                    "villa, studio, and duplex are allowed"
                ),
            )
        )

    if submission.transaction_type is TransactionType.FOR_RENT:
        for name in RENT_FIELDS:
            if getattr(submission, name) is None:
                field = to_camel(name)
                errors.append(
                    FieldError(field=field, message=f"{field} is required when transactionType is for_rent")
                )

    label = _type_label(submission.type)
    for name in REQUIRED_FIELDS_BY_TYPE[submission.type]:
        if getattr(submission, name) is None:
            field = to_camel(name)
            errors.append(FieldError(field=field, message=f"{field} is required for {label}"))

    return errors


def transform(submission: Submission) -> dict[str, Any]:
    """
    Reshape a rule-clean submission into the fields its type keeps.
    """
    data = submission.model_dump(exclude_none=True)

    if submission.transaction_type is not TransactionType.FOR_RENT:
        for name in RENT_FIELDS:
            data.pop(name, None)

    property_type = submission.type
    if property_type in FLAT_TYPES:
        if submission.building_size is not None:
            data["area_size"] = submission.building_size
        if property_type is PropertyType.APARTMENT:
            data.setdefault("total_floor", 1)
        elif property_type is PropertyType.STUDIO:
            data["total_floor"] = 1
        else:
            data["total_floor"] = 2

    for name in DROPPED_FIELDS_BY_TYPE.get(property_type, ()):
        data.pop(name, None)

    for name in _URL_FIELDS:
        if name in data:
            data[name] = str(data[name])

    return data


def validate_submission(raw: Any) -> ValidationResult:
    try:
        submission = Submission.model_validate(raw)
    except ValidationError as exc:
        return ValidationResult(errors=tuple(_errors_from_pydantic(exc)))

    rule_errors = check_rules(submission)
    if rule_errors:
        return ValidationResult(errors=tuple(rule_errors))

    try:
        listing = validated_property_adapter.validate_python(transform(submission))
    except ValidationError as exc:
        return ValidationResult(errors=tuple(_errors_from_pydantic(exc)))
    return ValidationResult(listing=listing)
