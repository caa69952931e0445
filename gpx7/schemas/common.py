"""Types communs / Shared schema types."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from gpx7.utils.dates import to_utc_naive

# ISO 8601 ramene en UTC naif / ISO 8601 converted to naive UTC
UtcDatetime = Annotated[datetime, AfterValidator(to_utc_naive)]
