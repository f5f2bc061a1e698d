from fastapi import APIRouter, Query

from zokey.core.exceptions import UnknownSubcategoryError
from zokey.data.categories import find_subcategory, get_catalog
from zokey.schemas.catalog import Category, SubcategoryQuestionsResponse

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[Category])
async def list_categories(currency: str = Query("GBP", description="GBP or USD; anything else falls back to GBP")):
    """Full category tree with each subcategory's question flow."""
    return list(get_catalog(currency.upper()))


@router.get("/{subcategory_id}/questions", response_model=SubcategoryQuestionsResponse)
async def get_subcategory_questions(subcategory_id: str, currency: str = Query("GBP")):
    resolved = find_subcategory(get_catalog(currency.upper()), subcategory_id)
    if resolved is None:
        raise UnknownSubcategoryError(subcategory_id)
    category, subcategory = resolved
    return SubcategoryQuestionsResponse(
        subcategory_id=subcategory.id,
        subcategory_name=subcategory.name,
        category_name=category.name,
        questions=list(subcategory.questions),
    )
