from dataclasses import dataclass
from typing import List, Union


@dataclass
class CartProductDTO:
    id: str
    title: str
    description: str
    price: str
    thumbnail: str
    code: str
    stock: int
    quantity: int


@dataclass
class CartItemDTO:
    id: str
    quantity: int


@dataclass
class CartDTO:
    id: str
    products: List[Union[CartProductDTO, CartItemDTO]]
