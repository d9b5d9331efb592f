"""GET /v1/categories - default category catalogue"""

from fastapi import APIRouter

from nossos_gastos.api.v1.schemas import CategoriesResponse, CategorySchema
from nossos_gastos.domain.categories import expense_categories, income_categories

router = APIRouter()


@router.get("/categories", response_model=CategoriesResponse)
def list_categories():
    return CategoriesResponse(
        expense=[CategorySchema.model_validate(c) for c in expense_categories()],
        income=[CategorySchema.model_validate(c) for c in income_categories()],
    )
