from typing import Optional
from pydantic import BaseModel, field_validator


class MetadataRequest(BaseModel):
    url: str
    respect_robots: bool = True  # set False only to fetch pages robots.txt would block

    @field_validator("url")
    @classmethod
    def url_must_be_http(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v


class MetadataResponse(BaseModel):
    url: str

    # og:* first, standard html tags as fallback; None when neither is present
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    detail: str
    code: str
    upstream_status: Optional[int] = None   # only for code "upstream_status"
