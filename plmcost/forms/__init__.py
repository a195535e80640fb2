from .state import (
    FormState,
    InputValidationError,
    apply_field_change,
    industry_label,
    info_location_label,
    sector_label,
    to_counts,
    validate_form,
)

__all__ = [
    "FormState",
    "InputValidationError",
    "apply_field_change",
    "industry_label",
    "info_location_label",
    "sector_label",
    "to_counts",
    "validate_form",
]
