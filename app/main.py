# app/main.py
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .core import ProductIn
from .sdk import (
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, delete_product_logic,
)

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title="product inventory api")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------
# Error shapes
# ---------------------------
def _error_message(field: str, kind: str, fallback: str) -> str:
    label = field.replace("_", " ")
    if kind in ("missing", "required"):
        return f"The {label} field is required."
    if kind.startswith("int"):
        return f"The {label} field must be an integer."
    if kind.startswith("decimal") or kind.startswith("float"):
        return f"The {label} field must be a number."
    if kind.startswith("string"):
        return f"The {label} field must be a string."
    return fallback


def validation_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = err.get("loc", ())
        if err.get("type") == "json_invalid" or len(loc) < 2:
            field = "body"
        else:
            field = str(loc[1])
        message = _error_message(field, err.get("type", ""), err.get("msg", "Invalid value."))
        errors.setdefault(field, []).append(message)
    return errors


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = validation_errors(exc)
    logger.info("rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=422, content={"message": "The given data was invalid.", "errors": errors})


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.get("/")
def read_root():
    return {"status": "ok"}


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products")
async def list_products() -> List[Dict[str, Any]]:
    return await list_products_logic()


@app.get("/api/products/{product_id}")
async def get_product(product_id: int):
    return await get_product_logic(product_id)


@app.post("/api/products", status_code=201)
async def create_product(payload: ProductIn):
    return await create_product_logic(payload)


@app.put("/api/products/{product_id}")
async def update_product(product_id: int, payload: ProductIn):
    return await update_product_logic(product_id, payload)


@app.delete("/api/products/{product_id}", status_code=204)
async def delete_product(product_id: int):
    await delete_product_logic(product_id)
    return Response(status_code=204)


def serve() -> None:
    import uvicorn

    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s:     %(name)s - %(message)s")
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
