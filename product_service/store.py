from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Dict, List

from common.errors import Conflict, InvalidInput, NotFound

logger = logging.getLogger("product_service")


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    quantity: int

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "quantity": self.quantity}


@dataclass(frozen=True)
class BookedProduct:
    product_id: int
    name: str

    def to_dict(self) -> dict:
        return {"productId": self.product_id, "nama": self.name}


class InventoryStore:
    """
    Products plus a single booking slot per product.

    A booking takes exactly one unit and then closes the product for
    good, whatever quantity is left. Products and bookings live behind
    one lock so the checks in book_product and the write that follows
    are a single step for every other caller.
    """

    def __init__(self) -> None:
        self._products: Dict[int, Product] = {}
        self._bookings: Dict[int, str] = {}
        self._lock = threading.Lock()

    def add_product(self, product: Product) -> None:
        if product.id <= 0 or not product.name or product.quantity < 0:
            logger.warning(f"rejected product data: {product}")
            raise InvalidInput("invalid product data")
        with self._lock:
            if product.id in self._products:
                logger.warning(f"product {product.id} already exists")
                raise Conflict("product already exists")
            self._products[product.id] = product
        logger.info(f"product added: id={product.id} name={product.name} qty={product.quantity}")

    def get_product(self, product_id: int) -> Product:
        with self._lock:
            product = self._products.get(product_id)
        if product is None:
            raise NotFound("product not found")
        return product

    def book_product(self, product_id: int, email: str) -> None:
        with self._lock:
            product = self._products.get(product_id)
            if product is None:
                logger.warning(f"book {product_id} for {email}: not found")
                raise Conflict("product not found")
            if product.quantity <= 0:
                logger.warning(f"book {product_id} for {email}: out of stock")
                raise Conflict("product out of stock")
            if product_id in self._bookings:
                logger.warning(f"book {product_id} for {email}: already booked")
                raise Conflict("product already booked")

            remaining = product.quantity - 1
            self._products[product_id] = replace(product, quantity=remaining)
            self._bookings[product_id] = email
        logger.info(f"product {product_id} booked by {email} (remaining={remaining})")

    def get_bookings(self, email: str) -> List[BookedProduct]:
        with self._lock:
            booked = []
            for product_id, booked_by in self._bookings.items():
                if booked_by != email:
                    continue
                product = self._products.get(product_id)
                if product is None:
                    continue
                booked.append(BookedProduct(product_id=product_id, name=product.name))
        return booked
