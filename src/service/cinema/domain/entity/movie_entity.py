from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidRequestError


@attrs.define
class Movie:
    title: str
    genre: str
    description: Optional[str] = None
    poster_image_url: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        title: str,
        genre: str,
        description: Optional[str] = None,
        poster_image_url: Optional[str] = None,
    ) -> 'Movie':
        title = title.strip()
        genre = genre.strip()
        if not title:
            raise InvalidRequestError('Movie title is required')
        if not genre:
            raise InvalidRequestError('Movie genre is required')

        return cls(
            title=title,
            genre=genre,
            description=description,
            poster_image_url=poster_image_url,
            created_at=datetime.now(timezone.utc),
        )
