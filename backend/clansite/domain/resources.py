"""
Resource Domain Models

Schemas for the documents the site manages. Fields are loosely typed on
purpose: unknown fields are kept, null is allowed and no format checks are
applied. The listed fields document the shape the site expects, the stored
document is exactly what the client sent (plus the server-owned ``id``).
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class LooseDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    def to_document(self) -> dict[str, Any]:
        """Fields the client actually sent, extras included, under their wire names"""
        return {
            **self.model_dump(by_alias=True, exclude_unset=True),
            **(self.model_extra or {}),
        }


class ResourceDocument(LooseDocument):
    """Base for list-style resources; ``id`` is optional on create"""

    id: Optional[Union[str, int]] = None


class Wipe(ResourceDocument):
    """Server wipe schedule entry"""

    server: Any = None
    date: Any = None
    time: Any = None
    notes: Any = None


class TeamMember(ResourceDocument):
    """Clan roster entry"""

    name: Any = None
    role: Any = None
    description: Any = None
    avatar: Any = None


class Video(ResourceDocument):
    """Video link; ``uploadedAt`` is set by the server"""

    title: Any = None
    url: Any = None
    description: Any = None
    uploaded_at: Any = Field(None, alias="uploadedAt")

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ClanInfo(LooseDocument):
    """Singleton clan description"""

    description: Any = None
    discord: Any = None
    website: Any = None


class CreateResponse(BaseModel):
    success: bool = True
    id: str


class SuccessResponse(BaseModel):
    success: bool = True
