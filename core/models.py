# core/models.py
from pydantic import BaseModel, Field, AliasChoices
from typing import List, Optional, Dict, Any, Literal, Union, Annotated
from enum import Enum


# --- Core Data Models ---

class Sauce(BaseModel):
    """A sauce catalog item as exchanged with the Sauce API (camelCase on the wire)."""
    id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
        description="Server-assigned identifier, absent before creation",
    )
    user_id: Optional[str] = Field(None, alias="userId", description="Identifier of the creating user")
    # Descriptive fields are opaque: accepted as sent, never defaulted to invented values
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    description: Optional[str] = None
    main_pepper: Optional[str] = Field(None, alias="mainPepper")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    heat: Optional[Union[int, float]] = None
    likes: Optional[int] = Field(default=None, ge=0)
    dislikes: Optional[int] = Field(default=None, ge=0)
    # Mutual exclusion between these two lists is enforced server-side only
    users_liked: Optional[List[str]] = Field(None, alias="usersLiked")
    users_disliked: Optional[List[str]] = Field(None, alias="usersDisliked")

    class Config:
        populate_by_name = True
        extra = 'allow' # server-side fields (__v, timestamps, ...) pass through untouched

    def to_wire(self) -> Dict[str, Any]:
        """Dumps the sauce with the API's field names, leaving out unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Request/Response Models ---

class MessageResponse(BaseModel):
    """Acknowledgement returned by every mutating endpoint."""
    message: str


class VoteKind(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"

    @property
    def sign(self) -> int:
        return 1 if self is VoteKind.LIKE else -1


class VoteRequest(BaseModel):
    """Body of POST /sauces/{id}/like. 1 = like, -1 = dislike, 0 = retract."""
    user_id: Optional[str] = Field(None, alias="userId")
    like: Literal[-1, 0, 1]

    class Config:
        populate_by_name = True


# --- Image parameter for create/update ---

class ImageUnchanged(BaseModel):
    """Keep the image currently stored for the sauce."""
    kind: Literal["unchanged"] = "unchanged"
    url: str = Field("", description="Current image URL, informational only")


class ImageUpload(BaseModel):
    """Binary replacement image sent as the multipart 'image' part."""
    kind: Literal["upload"] = "upload"
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    def as_multipart(self) -> tuple:
        return (self.filename, self.content, self.content_type)


SauceImage = Annotated[Union[ImageUnchanged, ImageUpload], Field(discriminator="kind")]
