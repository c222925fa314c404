# mhsurvey/api/v1/endpoints/videos.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import get_pagination, video_service
from mhsurvey.models.video import Video
from mhsurvey.schemas.admin import VideoIn, VideoUpdate
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.videos import VideoService

router = APIRouter(tags=["admin/videos"], dependencies=[Depends(guard("admin.videos"))])


@router.get("/admin/videos", response_model=Page[Video])
async def list_videos(
    category: Optional[str] = Query(None),
    pagination: PaginationParams = Depends(get_pagination),
    service: VideoService = Depends(video_service),
):
    if category:
        return await service.get_by_category(category, pagination)
    return await service.get_all(pagination)


@router.get("/admin/videos/categories", response_model=List[str])
async def list_categories(service: VideoService = Depends(video_service)):
    return await service.get_categories()


@router.get("/admin/videos/{video_id}", response_model=Video)
async def get_video(video_id: str = Path(...), service: VideoService = Depends(video_service)):
    return await service.get_by_id(video_id)


@router.post("/admin/videos", response_model=Video, status_code=201)
async def create_video(payload: VideoIn, service: VideoService = Depends(video_service)):
    return await service.create(payload.model_dump())


@router.patch("/admin/videos/{video_id}", response_model=Video)
async def update_video(
    payload: VideoUpdate,
    video_id: str = Path(...),
    service: VideoService = Depends(video_service),
):
    return await service.update(video_id, payload.model_dump(exclude_unset=True))


@router.delete("/admin/videos/{video_id}", status_code=204)
async def delete_video(video_id: str = Path(...), service: VideoService = Depends(video_service)):
    await service.delete(video_id)
