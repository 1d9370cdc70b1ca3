# app/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union


class Product(BaseModel):
    # clients may attach extra fields; they are kept on the record
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None
    price: Union[int, float]
    category: Optional[str] = None
    in_stock: bool = Field(False, alias="inStock")

    def to_record(self):
        return self.model_dump(by_alias=True, exclude_none=True)
