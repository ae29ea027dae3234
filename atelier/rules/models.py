from pydantic import BaseModel, Field, field_validator, model_validator

from atelier.components.datagrid import SortOrder


class GridMessages(BaseModel):
    empty: str = "No data found."
    loading: str = "Loading..."
    loading_more: str = "Loading more..."
    search_placeholder: str = "Search..."


class GridRules(BaseModel):
    mobile_breakpoint_px: int = Field(default=768, gt=0)
    page_size_options: list[int] = Field(default_factory=lambda: [5, 10, 25, 50])
    default_page_size: int = 10
    max_page_size: int = 100
    messages: GridMessages = Field(default_factory=GridMessages)

    @field_validator("page_size_options")
    @classmethod
    def _positive_options(cls, v: list[int]) -> list[int]:
        if not v or any(size < 1 for size in v):
            raise ValueError("page_size_options must be a non-empty list of positive sizes")
        return v

    @model_validator(mode="after")
    def _sizes_within_max(self) -> "GridRules":
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise ValueError("default_page_size must be between 1 and max_page_size")
        if max(self.page_size_options) > self.max_page_size:
            raise ValueError("page_size_options may not exceed max_page_size")
        return self


class TableRules(BaseModel):
    search_field: str
    sortable: list[str]
    default_order_by: str = "created_at"
    default_order: SortOrder = SortOrder.DESC
    filterable: list[str] = Field(default_factory=list)


class CatalogRules(BaseModel):
    courses: TableRules
    products: TableRules


class OpsRules(BaseModel):
    data_dir_required: bool = True
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    grid: GridRules = Field(default_factory=GridRules)
    catalog: CatalogRules
    ops: OpsRules = Field(default_factory=OpsRules)
