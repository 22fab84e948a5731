"""Menu Item Schemas - Pydantic models for request bodies at the API boundary.

Invariants:
    - Body must be a JSON object; unknown keys are kept (extension fields, meta)
    - Integer fields accept numeric strings ("7"); classes/xfn accept a list or
      a space/comma delimited string
    - title is a string or {"raw": ...}
    - Malformed fields fail here and surface as 400 rest_invalid_param

Design Decisions:
    - Enums for type/status over plain str: Pydantic handles validation natively
    - Internal statuses (trash, auto-draft, inherit) pass the enum and are
      rejected by the item schema, which knows the writable status set
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from navmenu.core.domain_types import MenuItemType, PostStatus
from navmenu.core.item_schema import StringList


class TitleInput(BaseModel):
    """Title in object form; only `raw` is writable."""
    model_config = ConfigDict(extra="ignore")

    raw: str = ""


class MenuItemWrite(BaseModel):
    """Create/update payload for a menu item."""
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    title: str | TitleInput | None = None
    menu_id: int | None = None
    type: MenuItemType | None = None
    status: PostStatus | None = None
    parent: int | None = None
    menu_item_parent: int | None = None
    menu_order: int | None = None
    db_id: int | None = None
    object: str | None = None
    object_id: int | None = None
    url: str | None = None
    target: str | None = None
    attr_title: str | None = None
    description: str | None = None
    classes: StringList | None = None
    xfn: StringList | None = None
    meta: dict[str, Any] | None = None

    def to_params(self) -> dict[str, Any]:
        """Fields the client actually sent; explicit nulls count as absent."""
        return {
            key: value
            for key, value in self.model_dump(mode="json", exclude_unset=True).items()
            if value is not None
        }
