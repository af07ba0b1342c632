import re
from datetime import date, datetime, time

from django.utils import timezone
from django.utils.text import slugify


def parse_bool(value, default=None):
    """Query-string boolean: 'true'/'1'/'yes' vs 'false'/'0'/'no'."""
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ('true', '1', 'yes', 'on'):
        return True
    if lowered in ('false', '0', 'no', 'off'):
        return False
    return default


def parse_int(value, default=None, *, minimum=None, maximum=None):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if minimum is not None and number < minimum:
        number = minimum
    if maximum is not None and number > maximum:
        number = maximum
    return number


def parse_date(value):
    """YYYY-MM-DD (or an ISO datetime) -> date, None when unparsable."""
    if not value:
        return None
    try:
        return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()
    except ValueError:
        return None


def day_bounds(start: date, end: date):
    """Aware datetimes covering [start 00:00, end 23:59:59.999999]."""
    tz = timezone.get_current_timezone()
    return (
        timezone.make_aware(datetime.combine(start, time.min), tz),
        timezone.make_aware(datetime.combine(end, time.max), tz),
    )


_NON_WORD = re.compile(r'[^\w-]+')


def make_slug(value: str) -> str:
    """Lower-case, whitespace to '-', non-word characters dropped."""
    slug = slugify(value or '')
    return _NON_WORD.sub('', slug) or 'item'


def unique_slug(model, value: str, *, instance=None, field: str = 'slug') -> str:
    """Slug for ``value`` that is unique in ``model``; appends -2, -3, ... on collision."""
    base = make_slug(value)
    candidate = base
    counter = 2
    qs = model.objects.using('default').all()
    if instance is not None and instance.pk:
        qs = qs.exclude(pk=instance.pk)
    while qs.filter(**{field: candidate}).exists():
        candidate = f'{base}-{counter}'
        counter += 1
    return candidate
