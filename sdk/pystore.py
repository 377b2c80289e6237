# sdk/pystore.py
import requests
import httpx
from typing import Optional, Dict, Any


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _product_payload(name=None, description=None, price=None, category=None, in_stock=None) -> Dict[str, Any]:
        fields = {"name": name, "description": description, "price": price,
                  "category": category, "inStock": in_stock}
        # drop unset fields only; False and 0 are sent as-is
        return {k: v for k, v in fields.items() if v is not None}

    # Products (public)
    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url("/api/products"), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def stats(self):
        r = self.session.get(self._url("/api/products/stats"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Products (need api key)
    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        payload = self._product_payload(name, description, price, category, in_stock)
        r = self.session.post(self._url("/api/products"), json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, name: Optional[str] = None, description: Optional[str] = None,
                       price: Optional[float] = None, category: Optional[str] = None,
                       in_stock: Optional[bool] = None):
        payload = self._product_payload(name, description, price, category, in_stock)
        r = self.session.put(self._url(f"/api/products/{product_id}"), json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create (example)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: bool = True, client: Optional[httpx.AsyncClient] = None):
        payload = self._product_payload(name, description, price, category, in_stock)
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        if client is not None:
            return await client.post(self._url("/api/products"), json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            # do not raise_for_status here; callers may want to inspect 400/401
            return await ac.post(self._url("/api/products"), json=payload, headers=headers)


def _parse_bool(raw: str) -> bool:
    if raw.lower() in ("1", "true", "yes", "y"):
        return True
    if raw.lower() in ("0", "false", "no", "n"):
        return False
    raise ValueError(f"not a boolean: {raw}")


if __name__ == "__main__":
    import argparse
    import os
    from rich import print

    parser = argparse.ArgumentParser(description="Product API CLI")
    parser.add_argument("--base-url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("PRODUCT_API_KEY"), help="Value for the x-api-key header")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Read commands
    # ---------------------------
    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive, exact)")
    lp.add_argument("--search", help="Search product names")
    lp.add_argument("--page", type=int, help="Page number")
    lp.add_argument("--limit", type=int, help="Page size")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    subparsers.add_parser("stats", help="Show product statistics")

    # ---------------------------
    # Write commands
    # ---------------------------
    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--in-stock", type=_parse_bool, default=True)

    up = subparsers.add_parser("update-product", help="Update some fields of a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--category")
    up.add_argument("--in-stock", type=_parse_bool)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        print(c.list_products(args.category, args.search, args.page, args.limit))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "stats":
        print(c.stats())
    elif args.command == "create-product":
        print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
    elif args.command == "update-product":
        print(c.update_product(args.product_id, args.name, args.description, args.price,
                               args.category, args.in_stock))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
