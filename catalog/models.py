# catalog/models.py
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    price: Union[int, float]
    description: str = ""
    category: str = "general"
    in_stock: StrictBool = Field(True, alias="inStock")
