from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CategoryOut(CatalogModel):
    id: int
    name: str

class VideoOut(CatalogModel):
    id: int
    title: str
    description: Optional[str] = None
    upload_date: datetime
    duration_seconds: int
    url: str
    thumbnail_url: Optional[str] = None
    uploader_id: int
    category_id: int

class VideoPage(CatalogModel):
    items: List[VideoOut]
    total: int

class RatingOut(CatalogModel):
    video_id: int
    user_id: int
    rating: int
    rated_at: datetime
