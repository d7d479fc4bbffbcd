"""Audience segmentation.

A campaign's audience is described by a list of filter rules sharing a
single AND/OR combinator:

    filters = [{"key": "minSpend", "value": 1000}, {"key": "inactiveDays", "value": 30}]
    logic = "AND"

Everything here is pure: no queries, no writes. Callers pass in the
customer records (model instances or plain mappings) and get back the
matching subset.
"""
import logging
import math
from datetime import date, datetime, time, timezone as dt_timezone
from typing import Any, Iterable, List, Mapping, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

logger = logging.getLogger(__name__)

MIN_SPEND = 'minSpend'
MIN_VISITS = 'minVisits'
INACTIVE_DAYS = 'inactiveDays'
RULE_KEYS = (MIN_SPEND, MIN_VISITS, INACTIVE_DAYS)

LOGIC_AND = 'AND'
LOGIC_OR = 'OR'

SECONDS_PER_DAY = 86400

# model attribute, camelCase key, snake_case key
_CUSTOMER_FIELDS = {
    'total_spend': ('totalSpend', 'total_spend'),
    'visits': ('visits',),
    'last_active': ('lastActive', 'last_active'),
}


def coerce_number(value: Any) -> float:
    """Numeric parse with fallback to 0. Never raises."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def normalize_filters(filters: Any) -> List[dict]:
    """Return filters as a list of {"key", "value"} rules.

    Accepts the rule-list form and the older mapping form
    {"minSpend": 1000, "inactiveDays": 90}.
    """
    if not filters:
        return []
    if isinstance(filters, Mapping):
        return [{'key': key, 'value': value} for key, value in filters.items()]
    return [dict(rule) for rule in filters]


def _customer_value(customer, field):
    if isinstance(customer, Mapping):
        for key in _CUSTOMER_FIELDS[field]:
            if key in customer:
                return customer[key]
        return None
    return getattr(customer, field, None)


def _as_datetime(value) -> Optional[datetime]:
    """Best-effort conversion; unparseable or impossible dates count as missing."""
    if value is None or value == '':
        return None
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value) or parse_date(value)
        except ValueError:
            return None
        if parsed is None:
            return None
        value = parsed
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if not isinstance(value, datetime):
        return None
    if timezone.is_naive(value):
        value = timezone.make_aware(value, dt_timezone.utc)
    return value


def days_inactive(last_active, now: Optional[datetime] = None) -> Optional[float]:
    last_active = _as_datetime(last_active)
    if last_active is None:
        return None
    now = now or timezone.now()
    return (now - last_active).total_seconds() / SECONDS_PER_DAY


def evaluate_rule(customer, rule: Mapping, now: Optional[datetime] = None) -> bool:
    key = rule.get('key')
    threshold = coerce_number(rule.get('value'))

    if key == MIN_SPEND:
        return coerce_number(_customer_value(customer, 'total_spend')) >= threshold

    if key == MIN_VISITS:
        return coerce_number(_customer_value(customer, 'visits')) >= threshold

    if key == INACTIVE_DAYS:
        # 0 means "no constraint"
        if threshold == 0:
            return True
        inactive = days_inactive(_customer_value(customer, 'last_active'), now)
        return inactive is not None and inactive >= threshold

    # Unknown rules never narrow the audience
    logger.debug(f"Unknown filter rule {key!r} treated as a match")
    return True


def matches_segment(customer, filters, logic: str = LOGIC_AND, now: Optional[datetime] = None) -> bool:
    rules = normalize_filters(filters)
    if not rules:
        return True

    results = (evaluate_rule(customer, rule, now) for rule in rules)
    if str(logic or '').upper() == LOGIC_OR:
        return any(results)
    return all(results)


def evaluate_segment(customers: Iterable, filters, logic: str = LOGIC_AND,
                     now: Optional[datetime] = None) -> list:
    """Customers matching the filter rules, in input order."""
    rules = normalize_filters(filters)
    now = now or timezone.now()
    return [
        customer for customer in customers
        if matches_segment(customer, rules, logic, now)
    ]
