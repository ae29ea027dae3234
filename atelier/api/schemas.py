from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from atelier.components.catalog import Course, Product
from atelier.components.datagrid import PaginationInfo


class PaginationResponse(BaseModel):
    """Pagination metadata, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_info(cls, info: PaginationInfo) -> "PaginationResponse":
        return cls(
            page=info.page,
            limit=info.limit,
            total_count=info.total_count,
            total_pages=info.total_pages,
            has_next_page=info.has_next_page,
            has_prev_page=info.has_prev_page,
        )


class CourseResponse(BaseModel):
    id: int
    title: str
    description: str
    max_price: float
    discounted_price: float
    discount_percentage: float
    created_at: str
    updated_at: str

    @classmethod
    def from_course(cls, course: Course) -> "CourseResponse":
        return cls(
            id=course.id,
            title=course.title,
            description=course.description,
            max_price=float(course.max_price),
            discounted_price=float(course.discounted_price),
            discount_percentage=float(course.discount_percentage),
            created_at=course.created_at,
            updated_at=course.updated_at,
        )


class ProductResponse(BaseModel):
    id: int
    name: str
    category: str
    price: float
    description: str
    is_featured: bool
    created_at: str

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            category=product.category,
            price=float(product.price),
            description=product.description,
            is_featured=product.is_featured,
            created_at=product.created_at,
        )


class CourseListResponse(BaseModel):
    courses: list[CourseResponse]
    pagination: PaginationResponse


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: PaginationResponse
