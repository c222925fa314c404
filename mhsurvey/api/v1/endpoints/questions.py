# mhsurvey/api/v1/endpoints/questions.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import get_pagination, question_service
from mhsurvey.models.question import Question, QuestionType
from mhsurvey.schemas.admin import QuestionIn, QuestionUpdate
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.questions import QuestionService

router = APIRouter(tags=["admin/questions"], dependencies=[Depends(guard("admin.questions"))])


@router.get("/admin/questions", response_model=Page[Question])
async def list_questions(
    category: Optional[str] = Query(None),
    qtype: Optional[QuestionType] = Query(None, alias="type"),
    active: bool = Query(False),
    pagination: PaginationParams = Depends(get_pagination),
    service: QuestionService = Depends(question_service),
):
    if category:
        return await service.get_by_category(category, pagination)
    if qtype:
        return await service.get_by_type(qtype, pagination)
    if active:
        return await service.get_active(pagination)
    return await service.get_all(pagination)


@router.get("/admin/questions/categories", response_model=List[str])
async def list_categories(service: QuestionService = Depends(question_service)):
    return await service.get_categories()


@router.get("/admin/questions/{question_id}", response_model=Question)
async def get_question(question_id: str = Path(...), service: QuestionService = Depends(question_service)):
    return await service.get_by_id(question_id)


@router.post("/admin/questions", response_model=Question, status_code=201)
async def create_question(payload: QuestionIn, service: QuestionService = Depends(question_service)):
    return await service.create(payload.model_dump())


@router.patch("/admin/questions/{question_id}", response_model=Question)
async def update_question(
    payload: QuestionUpdate,
    question_id: str = Path(...),
    service: QuestionService = Depends(question_service),
):
    return await service.update(question_id, payload.model_dump(exclude_unset=True))


@router.delete("/admin/questions/{question_id}", status_code=204)
async def delete_question(question_id: str = Path(...), service: QuestionService = Depends(question_service)):
    await service.delete(question_id)
