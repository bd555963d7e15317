"""Knowledge base inspection routes."""

from fastapi import APIRouter, Depends

from web.deps import get_components, verify_webhook_token
from web.models import KnowledgeStats

router = APIRouter(
    prefix="/api/knowledge",
    tags=["knowledge"],
    dependencies=[Depends(verify_webhook_token)],
)


@router.get("/stats", response_model=KnowledgeStats)
async def knowledge_stats(components: dict = Depends(get_components)):
    stats = components["kb"].stats()
    review = components["review"].stats()
    return KnowledgeStats(
        **stats,
        unknown_cases=review["unknown_cases"],
        learning_rate=review["learning_rate"],
    )
