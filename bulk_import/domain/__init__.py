"""Domain models and value normalizers used across application layer boundaries."""

from .models import HealthStatus, ImportAcceptedRecord, ImportResult, ImportRowError
from .value_normalization import (
    domain_normalize_boolean,
    domain_normalize_currency,
    domain_normalize_date,
    domain_normalize_text,
)

__all__ = [
	"HealthStatus",
	"ImportAcceptedRecord",
	"ImportResult",
	"ImportRowError",
	"domain_normalize_boolean",
	"domain_normalize_currency",
	"domain_normalize_date",
	"domain_normalize_text",
]
