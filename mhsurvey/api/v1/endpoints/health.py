from fastapi import APIRouter, Depends

from mhsurvey.db.store import MemoryStore, get_store

router = APIRouter(tags=["health"])


@router.get("/health")
def health(store: MemoryStore = Depends(get_store)):
    return {"status": "ok", "collections": store.counts()}
