from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Привести дату к наивному UTC.

    Колонки DateTime хранятся без зоны, трекер сравнивает с datetime.utcnow(),
    поэтому значения со смещением (например, "...Z" из toISOString())
    переводятся в UTC и теряют tzinfo. Наивные значения считаются UTC.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
