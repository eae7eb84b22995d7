from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from app.api.v1.dependencies import get_catalog_service, pagination
from app.features.catalog.schemas import CategoryOut, RatingOut, VideoOut, VideoPage
from app.features.catalog.services import CatalogService

router = APIRouter(
    tags=["catalog"],
    responses={404: {"description": "Not Found"}},
)

@router.get(
    "/categories",
    summary="Lister les catégories",
    response_model=List[CategoryOut],
)
def list_categories(svc: CatalogService = Depends(get_catalog_service)):
    return [CategoryOut.model_validate(c) for c in svc.list_categories()]

@router.get(
    "/videos",
    summary="Lister les vidéos (plus récentes d'abord)",
    response_model=VideoPage,
)
def list_videos(p=Depends(pagination), svc: CatalogService = Depends(get_catalog_service)):
    data = svc.list_videos(**p)
    return VideoPage(
        items=[VideoOut.model_validate(v) for v in data["items"]],
        total=data["total"],
    )

@router.get(
    "/videos/{video_id}",
    summary="Récupérer une vidéo",
    response_model=VideoOut,
)
def get_video(video_id: int = Path(..., ge=1), svc: CatalogService = Depends(get_catalog_service)):
    try:
        return VideoOut.model_validate(svc.get_video(video_id))
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

@router.get(
    "/videos/{video_id}/ratings",
    summary="Lister les notes d'une vidéo",
    response_model=List[RatingOut],
)
def list_ratings(video_id: int = Path(..., ge=1), svc: CatalogService = Depends(get_catalog_service)):
    try:
        return [RatingOut.model_validate(r) for r in svc.list_ratings(video_id)]
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
