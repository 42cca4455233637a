"""
Data models for the Clarifai Tagger.
"""

import base64
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


# Clarifai status code for a fully successful request
STATUS_SUCCESS = 10000


class ReferenceKind(str, Enum):
    """Where an image reference points."""
    LOCAL = "local"
    REMOTE = "remote"


class Credentials(BaseModel):
    """OAuth2 application credentials (App ID and App Secret)."""
    api_key: str
    api_secret: Optional[str] = None

    class Config:
        frozen = True

    def __repr__(self) -> str:
        return f"Credentials(api_key={self.api_key!r}, api_secret='***')"

    __str__ = __repr__


class ImageData(BaseModel):
    """Image payload: either a URL or inline base64 bytes."""
    url: Optional[str] = None
    base64: Optional[str] = None


class InputData(BaseModel):
    image: ImageData


class ImageInput(BaseModel):
    """One entry of a predict batch."""
    data: InputData

    @classmethod
    def from_url(cls, url: str) -> "ImageInput":
        return cls(data=InputData(image=ImageData(url=url)))

    @classmethod
    def from_bytes(cls, content: bytes) -> "ImageInput":
        encoded = base64.b64encode(content).decode("ascii")
        return cls(data=InputData(image=ImageData(base64=encoded)))


class PredictRequest(BaseModel):
    """Request body for the model outputs endpoint."""
    inputs: List[ImageInput]


class Status(BaseModel):
    code: int
    description: str = ""
    details: Optional[str] = None


class Concept(BaseModel):
    """A named concept predicted for an image."""
    name: str
    id: Optional[str] = None
    value: float = 0.0


class OutputData(BaseModel):
    concepts: List[Concept] = []


class PredictOutput(BaseModel):
    """Prediction for a single input."""
    status: Optional[Status] = None
    data: OutputData = Field(default_factory=OutputData)

    def tag_names(self) -> set:
        """Concept names for this output, deduplicated."""
        return {concept.name for concept in self.data.concepts}


class PredictResponse(BaseModel):
    """Response body of the model outputs endpoint."""
    status: Status
    outputs: List[PredictOutput] = []


class TokenResponse(BaseModel):
    """Response body of the OAuth2 token endpoint."""
    access_token: str
    expires_in: int = 0
    token_type: str = "Bearer"
