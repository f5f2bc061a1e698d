import logging

from fastapi import APIRouter, Depends, Header

from zokey.core.exceptions import SearchLimitReachedError
from zokey.routers.users import get_user_service
from zokey.schemas.search import RecommendationResponse, SearchRequest
from zokey.services.search_service import SearchService, get_search_service
from zokey.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["Search"])


@router.post("", response_model=RecommendationResponse)
async def search_products(
    request: SearchRequest,
    user_id: str = Header(..., alias="X-User-Id"),
    search_service: SearchService = Depends(get_search_service),
    user_service: UserService = Depends(get_user_service),
):
    """
    Run a questionnaire search for a user.

    Flow:
    1. Entitlement check: active subscription or free searches left
    2. Normalize answers, look up the search cache, fetch + rank on a miss
    3. Record history, consume a free search for non-subscribers, track the event

    Errors:
    - 403 LIMIT_REACHED when the free quota is used up
    - 404 NOT_FOUND for an unknown subcategory
    - 404 NO_PRODUCTS when nothing matched
    """
    user = await user_service.get_user(user_id)
    if not user.can_search:
        raise SearchLimitReachedError(user_id)

    outcome = await search_service.recommend(request.subcategory_id, request.answers, user.region)
    response = outcome.response

    search_id = await user_service.record_search(
        user_id, outcome.query, outcome.query_hash, user.region, len(response.products)
    )
    if user.subscription_status != "active":
        await user_service.increment_search_count(user_id)

    await user_service.track_event(
        user_id,
        "search_completed",
        {
            "search_id": search_id,
            "subcategory_id": request.subcategory_id,
            "query_hash": outcome.query_hash,
            "result_count": len(response.products),
            "cache_hit": response.cache_hit,
        },
    )
    logger.info(f"Search {search_id} completed for {user_id}: {len(response.products)} products")
    return response.model_copy(update={"search_id": search_id})
