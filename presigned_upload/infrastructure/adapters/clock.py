from __future__ import annotations

import datetime as _dt

from presigned_upload.application.interfaces import IClock


class SystemClock(IClock):
    """Wall clock in UTC."""

    def now(self) -> _dt.datetime:
        return _dt.datetime.now(_dt.timezone.utc)
