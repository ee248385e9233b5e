"""Anime request and response schemas.

AnimeRequest deliberately has no length constraint on name: an empty name
must reach the service layer so it is rejected as "Invalid Name" (400)
rather than as a generic request validation error.
"""

from pydantic import BaseModel, Field


class AnimeRequest(BaseModel):
    """Client payload for create, batch create and full replacement.

    Any id in the body is ignored; the store assigns ids and PUT takes the id
    from the path.
    """

    name: str = Field(max_length=100)


class AnimeResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
