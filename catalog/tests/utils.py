from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=dt_timezone.utc)
YESTERDAY = NOW - timedelta(days=1)
TOMORROW = NOW + timedelta(days=1)
