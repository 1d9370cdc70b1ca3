# app/core.py
import math
from typing import Any, Dict, List, Optional

from .errors import Unauthorized, ValidationFailed

# Gates, query filtering and record helpers. Everything here is pure: no store
# access, no request objects.

BEARER_PREFIX = "Bearer "


# ---------------------------
# Gates
# ---------------------------
def check_authorization(authorization: Optional[str], verifier) -> Dict[str, Any]:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized("Authentication required")
    return verifier.verify(authorization[len(BEARER_PREFIX):])


def _parse_price(value: Any) -> Optional[float]:
    # bool is an int subclass but never a price
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def validate_product(payload: Any) -> None:
    if not isinstance(payload, dict):
        raise ValidationFailed("Request body must be a JSON object")

    name = payload.get("name")
    price = payload.get("price")
    if not isinstance(name, str) or not name.strip() or price is None or price == "":
        raise ValidationFailed("Name and price are required")

    parsed = _parse_price(price)
    if parsed is None or parsed <= 0:
        raise ValidationFailed("Price must be a positive number")


# ---------------------------
# Query filter
# ---------------------------
def _parse_bound(param: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValidationFailed(f"{param} must be a number")
    if math.isnan(value):
        raise ValidationFailed(f"{param} must be a number")
    return value


def filter_products(
    products: List[Dict[str, Any]],
    name: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    in_stock: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Narrow ``products`` by the list endpoint's query parameters.

    All predicates are optional and combine with AND; an empty string counts
    as absent. ``in_stock`` matches records whose flag equals
    ``in_stock.lower() == "true"``; only real booleans match.
    """
    result = list(products)

    if name:
        term = name.lower()
        result = [p for p in result if term in str(p.get("name", "")).lower()]

    if category:
        wanted = category.lower()
        result = [p for p in result if str(p.get("category") or "").lower() == wanted]

    if min_price:
        low = _parse_bound("minPrice", min_price)
        result = [p for p in result if p["price"] >= low]

    if max_price:
        high = _parse_bound("maxPrice", max_price)
        result = [p for p in result if p["price"] <= high]

    if in_stock:
        flag = in_stock.lower() == "true"
        result = [p for p in result if p.get("inStock") is flag]

    return result


# ---------------------------
# Record helpers
# ---------------------------
def _normalize_price(record: Dict[str, Any]) -> None:
    # numeric strings pass validation; store them as numbers so bounds compare
    if isinstance(record.get("price"), str):
        record["price"] = float(record["price"])


def make_product_record(product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    fields = {k: v for k, v in payload.items() if k != "id"}
    record = {"id": product_id, **fields}
    _normalize_price(record)
    # any falsy inStock (missing, null, "", 0) is stored as False
    record["inStock"] = payload.get("inStock") or False
    return record


def apply_patch(existing: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    merged = {**existing, **{k: v for k, v in patch.items() if k != "id"}}
    merged["id"] = existing["id"]
    _normalize_price(merged)
    return merged
