"""Cache data models for statusline.

Contains Pydantic models for persisted state:
- CacheRecord: Envelope stored for every cache kind
- GitStatusFact: Version-control state of the project directory
- UsageFact: Remote quota utilisation and extra-usage figures
- UpdateFact: Local and latest published host versions
- SessionMarker: Last session id that has been rendered
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class CacheRecord(BaseModel):
    """Envelope persisted for a cache kind."""

    identity: Optional[str] = None
    captured_at: float  # epoch seconds
    payload: dict[str, Any]


class GitStatusFact(BaseModel):
    """Version-control status of a project directory."""

    model_config = ConfigDict(frozen=True)

    has_repo: bool = False
    branch: str = ""
    staged_count: int = 0
    modified_count: int = 0
    remote_url: str = ""


class UsageFact(BaseModel):
    """Quota utilisation for the active credential."""

    model_config = ConfigDict(frozen=True)

    five_hour_pct: int = 0
    five_hour_reset_at: Optional[datetime] = None
    seven_day_pct: int = 0
    seven_day_reset_at: Optional[datetime] = None
    extra_enabled: bool = False
    extra_used: Decimal = Decimal("0")  # dollars
    extra_limit: Decimal = Decimal("0")  # dollars
    extra_pct: int = 0


class UpdateFact(BaseModel):
    """Installed and latest available host versions."""

    model_config = ConfigDict(frozen=True)

    local_version: str = ""
    remote_version: str = ""

    @property
    def has_update(self) -> bool:
        return bool(
            self.local_version
            and self.remote_version
            and self.local_version != self.remote_version
        )


class SessionMarker(BaseModel):
    """Last session id rendered on this machine."""

    last_session_id: str
