"""
Product Service Event Schemas
=============================

The payload published for every product change. Consumers read the
camelCase field names, so the model always serializes by alias.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ==============================================
# EVENT TYPE CONSTANTS
# ==============================================

PRODUCT_CREATED = "CREATED"
PRODUCT_UPDATED = "UPDATED"
PRODUCT_DELETED = "DELETED"


class ProductEvent(BaseModel):
    """Product lifecycle event: which product changed and how"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    event_type: Literal["CREATED", "UPDATED", "DELETED"]
    product_id: int
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc).replace(tzinfo=None)
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
