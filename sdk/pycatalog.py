# sdk/pycatalog.py
from typing import Any, Dict, Optional

import httpx
import requests
from rich import print


class CatalogError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(r) -> str:
    # the API answers with {"error": {...}} or, for auth/search, a bare {"message": ...}
    try:
        body = r.json()
    except ValueError:
        return r.text
    if isinstance(body, dict):
        if isinstance(body.get("error"), dict):
            return body["error"].get("message", "")
        if "message" in body:
            return body["message"]
    return str(body)


def _check(r):
    if r.status_code >= 400:
        raise CatalogError(r.status_code, _error_message(r))
    return r


class CatalogClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_key: Optional[str] = None,
        timeout: int = 10,
        session=None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        self.async_transport = async_transport

    def _auth_headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key} if self.api_key else {}

    def hello(self) -> str:
        r = _check(self.session.get(f"{self.base_url}/", timeout=self.timeout))
        return r.text

    # Reads
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        return _check(r).json()

    def search_products(self, q: str):
        r = self.session.get(f"{self.base_url}/api/products/search", params={"q": q}, timeout=self.timeout)
        return _check(r).json()

    def product_stats(self) -> Dict[str, int]:
        r = self.session.get(f"{self.base_url}/api/products/stats", timeout=self.timeout)
        return _check(r).json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        # a missing product is an answer, not an error
        if r.status_code == 404:
            return None
        return _check(r).json()

    # Writes (need api_key)
    @staticmethod
    def _product_payload(name, price, description=None, category=None, in_stock=None) -> Dict[str, Any]:
        payload = {"name": name, "price": price}
        if description is not None:
            payload["description"] = description
        if category is not None:
            payload["category"] = category
        if in_stock is not None:
            payload["inStock"] = in_stock
        return payload

    def create_product(self, name: str, price: float, description: Optional[str] = None,
                       category: Optional[str] = None, in_stock: Optional[bool] = None):
        payload = self._product_payload(name, price, description, category, in_stock)
        r = self.session.post(f"{self.base_url}/api/products", json=payload,
                              headers=self._auth_headers(), timeout=self.timeout)
        return _check(r).json()

    def update_product(self, product_id: str, **fields):
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json=fields,
                             headers=self._auth_headers(), timeout=self.timeout)
        return _check(r).json()

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}",
                                headers=self._auth_headers(), timeout=self.timeout)
        _check(r)

    # Async create (example)
    async def create_product_async(self, name: str, price: float, description: Optional[str] = None,
                                   category: Optional[str] = None, in_stock: Optional[bool] = None):
        payload = self._product_payload(name, price, description, category, in_stock)
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                     transport=self.async_transport) as client:
            r = await client.post("/api/products", json=payload, headers=self._auth_headers())
            return _check(r).json()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="PyCatalog CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000")
    parser.add_argument("--api-key", help="Value sent as x-api-key on writes")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    sp = subparsers.add_parser("search", help="Search for products by name")
    sp.add_argument("--q", required=True, help="Text to look for in product names")

    subparsers.add_parser("stats", help="Product count per category")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--description")
    cp.add_argument("--category")

    up = subparsers.add_parser("update-product", help="Update a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name", required=True)
    up.add_argument("--price", type=float, required=True)
    up.add_argument("--category")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category, args.page, args.limit))
        elif args.command == "search":
            print(c.search_products(args.q))
        elif args.command == "stats":
            print(c.product_stats())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.price, args.description, args.category))
        elif args.command == "update-product":
            fields = {"name": args.name, "price": args.price}
            if args.category:
                fields["category"] = args.category
            print(c.update_product(args.product_id, **fields))
        elif args.command == "delete-product":
            c.delete_product(args.product_id)
            print(f"[green]Deleted {args.product_id}[/green]")
    except CatalogError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
