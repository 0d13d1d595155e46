from dataclasses import dataclass


@dataclass
class ProductDTO:
    id: str
    title: str
    description: str
    price: str
    thumbnail: str
    code: str
    stock: int
    owner: str
