"""Wire models for the backend conversation API.

Field names follow the API's camelCase JSON.
"""

from pydantic import BaseModel, ConfigDict, Field


class InitThreadResponse(BaseModel):
    """Body of `GET /api/init-thread`."""

    model_config = ConfigDict(populate_by_name=True)

    thread_id: str = Field(alias="threadId", min_length=1)


class ChatRequest(BaseModel):
    """Body of `POST /api/chat`."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    thread_id: str | None = Field(default=None, alias="threadId")


class ChatResponse(BaseModel):
    """Body returned by `POST /api/chat`."""

    reply: str | None = None
