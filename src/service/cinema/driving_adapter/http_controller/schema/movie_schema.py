from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MovieCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    genre: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    poster_image_url: Optional[str] = Field(None, max_length=1024)

    class Config:
        json_schema_extra = {
            'example': {
                'title': 'Inception',
                'genre': 'Sci-Fi',
                'description': 'A thief who steals corporate secrets through dream-sharing.',
                'poster_image_url': 'https://example.com/posters/inception.jpg',
            }
        }


class MovieResponse(BaseModel):
    id: int
    title: str
    genre: str
    description: Optional[str] = None
    poster_image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
