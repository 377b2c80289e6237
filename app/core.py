import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .models import Product, ProductPage

# This file holds the error taxonomy and the filter/pagination rules used by
# the list endpoint.


# ---------------------------
# Errors
# ---------------------------
class ProductAPIError(Exception):
    status = 500
    message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnauthorizedError(ProductAPIError):
    status = 401
    message = "Unauthorized: Invalid or missing API key"


class ProductValidationError(ProductAPIError):
    status = 400
    message = "All fields are required and inStock must be boolean"


class ProductNotFoundError(ProductAPIError):
    status = 404
    message = "Product not found"


# ---------------------------
# Query resolution
# ---------------------------
@dataclass(frozen=True)
class PageParams:
    page: int = 1
    limit: int = 10

    @property
    def start(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def end(self) -> int:
        return self.start + self.limit


_INT_RE = re.compile(r"-?[0-9]+")


def _to_int(raw: Optional[str], name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    text = str(raw).strip()
    # plain ascii digits only; int() alone also takes "1_0" and non-ascii digits
    if not _INT_RE.fullmatch(text):
        raise ProductValidationError(f"{name} must be an integer")
    return int(text)


def parse_page_params(page: Optional[str] = None, limit: Optional[str] = None, default_limit: int = 10) -> PageParams:
    """Coerce raw query-string values. ``limit`` must be positive; ``page`` is
    left unbounded so out-of-range pages simply come back empty."""
    params = PageParams(page=_to_int(page, "page", 1), limit=_to_int(limit, "limit", default_limit))
    if params.limit <= 0:
        raise ProductValidationError("limit must be a positive integer")
    return params


def filter_products(products: Iterable[Product], category: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
    out = list(products)
    if category:
        wanted = category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if search:
        term = search.lower()
        out = [p for p in out if term in p.name.lower()]
    return out


def paginate(products: List[Product], params: PageParams) -> ProductPage:
    total = len(products)
    # page <= 0 would give a negative start; python slicing would wrap around
    window = products[params.start:params.end] if params.page >= 1 else []
    return ProductPage(
        total_products=total,
        current_page=params.page,
        total_pages=math.ceil(total / params.limit),
        products=window,
    )
