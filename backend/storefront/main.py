"""
PC Parts Storefront Backend with OpenTelemetry Instrumentation
"""

import logging
import time
from datetime import datetime, timezone
from typing import Annotated, List

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from sqlalchemy.orm import Session

from storefront import crud, schemas
from storefront.config import settings
from storefront.database import Base, engine, get_db
from storefront.datasource import CatalogSource, build_catalog_source
from storefront.errors import StoreError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PC Parts Storefront API",
    description="Catalog, cart, order, wishlist and review backend with observability features",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

tracer = trace.get_tracer(__name__)

# Prometheus metrics
http_requests_total = Counter('http_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
http_request_duration_seconds = Histogram('http_request_duration_seconds', 'HTTP request duration', ['method', 'endpoint'])
orders_total = Counter('orders_total', 'Orders entering each status', ['status'])
revenue_total = Counter('revenue_total_usd', 'Total value of created orders in USD')
cart_additions_total = Counter('cart_additions_total', 'Add-to-cart calls', ['result'])


def get_catalog(db: Session = Depends(get_db)) -> CatalogSource:
    return build_catalog_source(settings.CATALOG_SOURCE, db)


@app.middleware("http")
async def record_request_metrics(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    # Label with the route template (/products/{product_id}), not the raw path
    route = request.scope.get("route")
    endpoint = getattr(route, "path", "unmatched")
    http_requests_total.labels(method=request.method, endpoint=endpoint, status=str(response.status_code)).inc()
    http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(time.time() - start_time)
    return response


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def _or_404(obj, what: str):
    if obj is None:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return obj


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "storefront-backend",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# Users
@app.post("/users/", response_model=schemas.User, status_code=201)
def create_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    return crud.create_user(db, user)


# Products
@app.get("/products/", response_model=List[schemas.Product])
def list_products(
    filters: Annotated[schemas.ProductFilters, Query()],
    catalog: CatalogSource = Depends(get_catalog),
):
    return catalog.list_products(filters)


@app.get("/products/low-stock", response_model=List[schemas.Product])
def list_low_stock_products(db: Session = Depends(get_db)):
    return crud.get_low_stock_products(db)


@app.get("/products/{product_id}", response_model=schemas.Product)
def get_product(product_id: int, catalog: CatalogSource = Depends(get_catalog)):
    return _or_404(catalog.get_product(product_id), "Product")


@app.post("/products/", response_model=schemas.Product, status_code=201)
def create_product(product: schemas.ProductCreate, db: Session = Depends(get_db)):
    return crud.create_product(db, product)


@app.patch("/products/{product_id}", response_model=schemas.Product)
def update_product(product_id: int, product: schemas.ProductUpdate, db: Session = Depends(get_db)):
    return _or_404(crud.update_product(db, product_id, product), "Product")


@app.put("/products/{product_id}/stock", response_model=schemas.Product)
def update_product_stock(product_id: int, stock: schemas.StockUpdate, db: Session = Depends(get_db)):
    return _or_404(crud.update_product_stock(db, product_id, stock.stock_quantity), "Product")


@app.delete("/products/{product_id}", response_model=bool)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    with tracer.start_as_current_span("delete_product") as span:
        span.set_attribute("product.id", product_id)
        ordered = crud.is_product_ordered(db, product_id)
        deleted = crud.delete_product(db, product_id)
        span.set_attribute("product.deleted", deleted)
        span.set_attribute("product.soft_delete", deleted and ordered)
        return deleted


# Product images
@app.post("/product-images/", response_model=schemas.ProductImage, status_code=201)
def add_product_image(image: schemas.ProductImageCreate, db: Session = Depends(get_db)):
    return crud.add_product_image(db, image)


@app.get("/products/{product_id}/images", response_model=List[schemas.ProductImage])
def get_product_images(product_id: int, db: Session = Depends(get_db)):
    return crud.get_product_images(db, product_id)


@app.delete("/product-images/{image_id}", response_model=bool)
def delete_product_image(image_id: int, db: Session = Depends(get_db)):
    return crud.delete_product_image(db, image_id)


# Cart
@app.post("/cart/", response_model=schemas.CartItem, status_code=201)
def add_to_cart(item: schemas.CartItemCreate, db: Session = Depends(get_db)):
    with tracer.start_as_current_span("add_to_cart") as span:
        span.set_attribute("cart.user_id", item.user_id)
        span.set_attribute("cart.product_id", item.product_id)
        span.set_attribute("cart.quantity", item.quantity)
        try:
            cart_item = crud.add_to_cart(db, item)
        except StoreError as e:
            span.add_event("cart_rejected", {"reason": type(e).__name__})
            cart_additions_total.labels(result='rejected').inc()
            raise
        cart_additions_total.labels(result='accepted').inc()
        span.set_attribute("cart.item_id", cart_item.id)
        return cart_item


@app.patch("/cart/{cart_item_id}", response_model=schemas.CartItem)
def update_cart_item(cart_item_id: int, update: schemas.CartItemUpdate, db: Session = Depends(get_db)):
    return _or_404(crud.update_cart_item(db, cart_item_id, update.quantity), "Cart item")


@app.get("/users/{user_id}/cart", response_model=List[schemas.CartItem])
def get_cart_items(user_id: int, db: Session = Depends(get_db)):
    return crud.get_cart_items(db, user_id)


@app.delete("/cart/{cart_item_id}", response_model=bool)
def remove_from_cart(cart_item_id: int, db: Session = Depends(get_db)):
    return crud.remove_from_cart(db, cart_item_id)


@app.delete("/users/{user_id}/cart", response_model=bool)
def clear_cart(user_id: int, db: Session = Depends(get_db)):
    return crud.clear_cart(db, user_id)


# Orders
@app.post("/orders/", response_model=schemas.Order, status_code=201)
def create_order(order: schemas.OrderCreate, db: Session = Depends(get_db)):
    with tracer.start_as_current_span("create_order") as span:
        span.set_attribute("order.user_id", order.user_id)
        span.set_attribute("order.total_amount", order.total_amount)
        db_order = crud.create_order(db, order)
        span.set_attribute("order.id", db_order.id)
        span.add_event("order_created", {"order_id": db_order.id})

        orders_total.labels(status=db_order.status).inc()
        revenue_total.inc(order.total_amount)
        return db_order


@app.post("/order-items/", response_model=schemas.OrderItem, status_code=201)
def create_order_item(item: schemas.OrderItemCreate, db: Session = Depends(get_db)):
    return crud.create_order_item(db, item)


@app.patch("/orders/{order_id}/status", response_model=schemas.Order)
def update_order_status(order_id: int, update: schemas.OrderStatusUpdate, db: Session = Depends(get_db)):
    existing = _or_404(crud.get_order(db, order_id), "Order")
    previous_status = existing.status

    db_order = _or_404(crud.update_order_status(db, order_id, update.status), "Order")
    if db_order.status != previous_status:
        orders_total.labels(status=db_order.status).inc()
    return db_order


@app.get("/users/{user_id}/orders", response_model=List[schemas.Order])
def get_orders_by_user(user_id: int, db: Session = Depends(get_db)):
    return crud.get_orders_by_user(db, user_id)


@app.get("/orders/", response_model=List[schemas.Order])
def list_orders(db: Session = Depends(get_db)):
    return crud.get_all_orders(db)


@app.get("/orders/{order_id}", response_model=schemas.OrderDetail)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return _or_404(crud.get_order(db, order_id), "Order")


# Wishlist
@app.post("/wishlist/", response_model=schemas.WishlistItem, status_code=201)
def add_to_wishlist(item: schemas.WishlistItemCreate, db: Session = Depends(get_db)):
    return crud.add_to_wishlist(db, item)


@app.get("/users/{user_id}/wishlist", response_model=List[schemas.WishlistItem])
def get_wishlist_items(user_id: int, db: Session = Depends(get_db)):
    return crud.get_wishlist_items(db, user_id)


@app.delete("/wishlist/{wishlist_item_id}", response_model=bool)
def remove_from_wishlist(wishlist_item_id: int, db: Session = Depends(get_db)):
    return crud.remove_from_wishlist(db, wishlist_item_id)


# Reviews
@app.post("/reviews/", response_model=schemas.Review, status_code=201)
def create_review(review: schemas.ReviewCreate, db: Session = Depends(get_db)):
    with tracer.start_as_current_span("create_review") as span:
        span.set_attribute("review.user_id", review.user_id)
        span.set_attribute("review.product_id", review.product_id)
        try:
            return crud.create_review(db, review)
        except StoreError as e:
            span.add_event("review_rejected", {"reason": type(e).__name__})
            raise


@app.get("/products/{product_id}/reviews", response_model=List[schemas.Review])
def get_product_reviews(product_id: int, db: Session = Depends(get_db)):
    return crud.get_product_reviews(db, product_id)


@app.get("/users/{user_id}/reviews", response_model=List[schemas.Review])
def get_user_reviews(user_id: int, db: Session = Depends(get_db)):
    return crud.get_user_reviews(db, user_id)


@app.put("/reviews/{review_id}", response_model=schemas.Review)
def update_review(review_id: int, update: schemas.ReviewUpdate, db: Session = Depends(get_db)):
    return _or_404(crud.update_review(db, review_id, update.rating, update.comment), "Review")


@app.delete("/reviews/{review_id}", response_model=bool)
def delete_review(review_id: int, db: Session = Depends(get_db)):
    return crud.delete_review(db, review_id)


FastAPIInstrumentor.instrument_app(app)


@app.on_event("startup")
def startup_event():
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    Base.metadata.create_all(bind=engine)
    logger.info("Storefront backend started (catalog source: %s)", settings.CATALOG_SOURCE)
    logger.info("OpenTelemetry instrumentation active, Prometheus metrics at /metrics")
