# sdk/product_client.py
import requests
from typing import Any, Dict, Optional
from rich import print


class ProductAPIError(Exception):
    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"{status_code} {code}: {message}")


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", token: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def _request(self, method: str, path: str, **kwargs) -> Any:
        r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if r.status_code >= 400:
            try:
                body = r.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            raise ProductAPIError(
                r.status_code,
                body.get("code", "HTTP_ERROR"),
                body.get("error", r.text or r.reason or "request failed"),
            )
        return r.json()

    def welcome(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.text

    def list_products(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        in_stock: Optional[bool] = None,
    ) -> Dict[str, Any]:
        params = {}
        if name:
            params["name"] = name
        if category:
            params["category"] = category
        if min_price is not None:
            params["minPrice"] = str(min_price)
        if max_price is not None:
            params["maxPrice"] = str(max_price)
        if in_stock is not None:
            params["inStock"] = "true" if in_stock else "false"
        return self._request("GET", "/api/products", params=params)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/products/{product_id}")["data"]

    def create_product(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/products", json=payload)["data"]

    def update_product(self, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/products/{product_id}", json=payload)["data"]

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/products/{product_id}")


def _bool_arg(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Product API client")
    parser.add_argument("--base-url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--token", default=os.getenv("PRODUCT_API_TOKEN"), help="Bearer token for write operations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--name", help="Case-insensitive name substring")
    lp.add_argument("--category", help="Category (case-insensitive)")
    lp.add_argument("--min-price", type=float)
    lp.add_argument("--max-price", type=float)
    lp.add_argument("--in-stock", type=_bool_arg)

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--description")
    cp.add_argument("--category")
    cp.add_argument("--in-stock", action="store_true")

    up = subparsers.add_parser("update", help="Update a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name", required=True)
    up.add_argument("--price", type=float, required=True)
    up.add_argument("--description")
    up.add_argument("--category")
    up.add_argument("--in-stock", type=_bool_arg)

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, token=args.token)

    def _payload(a) -> Dict[str, Any]:
        out = {"name": a.name, "price": a.price}
        for key, field in (("description", "description"), ("category", "category"), ("inStock", "in_stock")):
            value = getattr(a, field)
            if value is not None:
                out[key] = value
        return out

    try:
        if args.command == "list":
            print(c.list_products(args.name, args.category, args.min_price, args.max_price, args.in_stock))
        elif args.command == "get":
            print(c.get_product(args.product_id))
        elif args.command == "create":
            print(c.create_product(_payload(args)))
        elif args.command == "update":
            print(c.update_product(args.product_id, _payload(args)))
        elif args.command == "delete":
            print(c.delete_product(args.product_id))
    except ProductAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
