from pydantic import BaseModel, Field


class Product(BaseModel):
    """Catalog product as returned by the retrieval provider"""

    asin: str = Field(..., min_length=1, description="Provider product id")
    title: str
    price: float = Field(..., ge=0)
    currency: str
    original_price: float | None = None
    image_url: str = ""
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    product_url: str = ""
    is_prime: bool = False
    availability: str = ""
    features: list[str] = Field(default_factory=list)


class RankedProduct(Product):
    """Candidate product plus its ranking and explanation"""

    rank: int = Field(..., ge=1)
    match_score: float
    explanation: str
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)


class RankingResult(BaseModel):
    ranked_products: list[RankedProduct]
    summary: str
