"""FastAPI endpoints for layouts and fixed-width arithmetic.

Routes
------
POST   /layouts              Register a named layout
GET    /layouts              List layouts
GET    /layouts/{name}       Retrieve a single layout
DELETE /layouts/{name}       Remove a layout
POST   /arithmetic/evaluate  Apply one operation to two operands
POST   /arithmetic/convert   Re-encode a value in another base
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from checked import (
    Checked,
    checked_add,
    checked_divide,
    checked_modulus,
    checked_multiply,
    checked_power,
    checked_subtract,
)
from integer import Integer, integer_type
from layout import DigitLayout
from models import (
    ConvertRequest,
    ConvertResponse,
    LayoutCreate,
    LayoutListResponse,
    LayoutRecord,
    MAX_EXPONENT_BITS,
    Mode,
    Operation,
    OperationRequest,
    OperationResponse,
    Signedness,
)
from number import Number, number_type
from store import LayoutExistsError, LayoutNotFoundError, LayoutStore

layouts_router = APIRouter(prefix="/layouts", tags=["layouts"])
arithmetic_router = APIRouter(prefix="/arithmetic", tags=["arithmetic"])

# The store instance is injected by the app factory (see app.py).
_store: LayoutStore | None = None


def set_store(store: LayoutStore) -> None:
    """Inject the store instance. Called once at app startup."""
    global _store
    _store = store


def get_store() -> LayoutStore:
    assert _store is not None, "Store not initialized"
    return _store


_OPERATIONS = {
    Operation.ADD: checked_add,
    Operation.SUB: checked_subtract,
    Operation.MUL: checked_multiply,
    Operation.DIV: checked_divide,
    Operation.MOD: checked_modulus,
    Operation.POW: checked_power,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _not_found(name: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Layout not found: {name}")


def _lookup(name: str) -> DigitLayout:
    try:
        return get_store().get(name)
    except LayoutNotFoundError:
        raise _not_found(name) from None


def _value_type(
    layout: DigitLayout, signedness: Signedness
) -> type[Number] | type[Integer]:
    if signedness == Signedness.SIGNED:
        return integer_type(layout)
    return number_type(layout)


def _parse(cls: type[Number] | type[Integer], text: str, base: int) -> Number | Integer:
    value = cls.from_string(text, base)
    if value is None:
        raise HTTPException(
            status_code=422, detail=f"Invalid base-{base} operand: {text!r}"
        )
    return value


def _digits(value: Number | Integer) -> list[int]:
    magnitude = value.magnitude if isinstance(value, Integer) else value
    return list(magnitude.digits)


# ---------------------------------------------------------------------------
# Layout endpoints
# ---------------------------------------------------------------------------

@layouts_router.post("", response_model=LayoutRecord, status_code=201)
def create_layout(payload: LayoutCreate) -> LayoutRecord:
    """Register a new named layout."""
    store = get_store()
    layout = payload.layout.to_layout()
    try:
        store.create(payload.name, layout)
    except LayoutExistsError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return LayoutRecord.build(payload.name, layout)


@layouts_router.get("", response_model=LayoutListResponse)
def list_layouts(
    offset: int = Query(default=0, ge=0, description="Pagination offset"),
    limit: int = Query(default=50, ge=1, le=200, description="Pagination limit"),
) -> LayoutListResponse:
    store = get_store()
    items = [
        LayoutRecord.build(name, layout)
        for name, layout in store.list(offset=offset, limit=limit)
    ]
    return LayoutListResponse(items=items, total=store.count())


@layouts_router.get("/{name}", response_model=LayoutRecord)
def get_layout(name: str) -> LayoutRecord:
    return LayoutRecord.build(name, _lookup(name))


@layouts_router.delete("/{name}", response_model=LayoutRecord)
def delete_layout(name: str) -> LayoutRecord:
    """Remove a layout and return the removed record."""
    try:
        layout = get_store().delete(name)
    except LayoutNotFoundError:
        raise _not_found(name) from None
    return LayoutRecord.build(name, layout)


# ---------------------------------------------------------------------------
# Arithmetic endpoints
# ---------------------------------------------------------------------------

@arithmetic_router.post("/evaluate", response_model=OperationResponse)
def evaluate(payload: OperationRequest) -> OperationResponse:
    """Apply one operation; in strict mode a fault is reported as 422."""
    cls = _value_type(_lookup(payload.layout), payload.signedness)
    if payload.operation == Operation.POW and issubclass(cls, Integer):
        raise HTTPException(
            status_code=422, detail="pow is only defined for unsigned values"
        )

    lhs = _parse(cls, payload.lhs, payload.base)
    rhs = _parse(cls, payload.rhs, payload.base)
    if payload.operation == Operation.POW and int(rhs).bit_length() > MAX_EXPONENT_BITS:
        raise HTTPException(
            status_code=422,
            detail=f"pow exponent is limited to {MAX_EXPONENT_BITS} bits",
        )
    outcome: Checked = _OPERATIONS[payload.operation](lhs, rhs)

    if outcome.fault is not None and payload.mode == Mode.STRICT:
        raise HTTPException(
            status_code=422,
            detail=f"{outcome.fault.value} in {payload.operation.value}",
        )

    return OperationResponse(
        result=outcome.value.to_string(payload.base),
        fault=outcome.fault.value if outcome.fault is not None else None,
        digits=_digits(outcome.value),
    )


@arithmetic_router.post("/convert", response_model=ConvertResponse)
def convert(payload: ConvertRequest) -> ConvertResponse:
    cls = _value_type(_lookup(payload.layout), payload.signedness)
    value = _parse(cls, payload.text, payload.from_base)
    return ConvertResponse(text=value.to_string(payload.to_base), digits=_digits(value))
