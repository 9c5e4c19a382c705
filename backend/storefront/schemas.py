"""
API Schemas
===========

Pydantic models for request validation and response serialization.

- *Create / *Update models validate input
- Output models are built from ORM rows (from_attributes=True)

Fixed-point database values (Decimal) are declared as float here, so every
response carries plain JSON numbers.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AnyUrl, BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, ValidationError, field_validator


# ============================================================================
# ENUMS
# ============================================================================

class UserRole(str, Enum):
    customer = "customer"
    admin = "admin"


class ProductCategory(str, Enum):
    gpu = "gpu"
    cpu = "cpu"
    motherboard = "motherboard"
    ram = "ram"
    ssd = "ssd"


class OrderStatus(str, Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


class RamType(str, Enum):
    ddr4 = "DDR4"
    ddr5 = "DDR5"


class StorageInterface(str, Enum):
    sata = "SATA"
    nvme = "NVMe"


class _ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# USER SCHEMAS
# ============================================================================

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str
    last_name: str
    role: UserRole = UserRole.customer


class User(_ORMModel):
    # password_hash is deliberately absent
    id: int
    email: str
    first_name: str
    last_name: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


# ============================================================================
# PRODUCT SPECS (tagged union keyed by category)
# ============================================================================

class GpuSpecs(BaseModel):
    category: Literal["gpu"] = "gpu"
    chipset: Optional[str] = None
    memory: Optional[int] = Field(None, ge=0, description="VRAM in GB")
    memory_type: Optional[str] = None


class CpuSpecs(BaseModel):
    category: Literal["cpu"] = "cpu"
    socket: Optional[str] = None
    cores: Optional[int] = Field(None, ge=1)
    threads: Optional[int] = Field(None, ge=1)
    base_clock: Optional[float] = Field(None, gt=0, description="GHz")
    boost_clock: Optional[float] = Field(None, gt=0, description="GHz")


class MotherboardSpecs(BaseModel):
    category: Literal["motherboard"] = "motherboard"
    socket: Optional[str] = None
    chipset: Optional[str] = None
    form_factor: Optional[str] = None


class RamSpecs(BaseModel):
    category: Literal["ram"] = "ram"
    capacity: Optional[int] = Field(None, ge=0, description="GB")
    speed: Optional[int] = Field(None, ge=0, description="MHz")
    type: Optional[RamType] = None


class SsdSpecs(BaseModel):
    category: Literal["ssd"] = "ssd"
    capacity: Optional[int] = Field(None, ge=0, description="GB")
    interface: Optional[StorageInterface] = None
    read_speed: Optional[int] = Field(None, ge=0, description="MB/s")
    write_speed: Optional[int] = Field(None, ge=0, description="MB/s")


ProductSpecs = Annotated[
    Union[GpuSpecs, CpuSpecs, MotherboardSpecs, RamSpecs, SsdSpecs],
    Field(discriminator="category"),
]


# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================

class ProductCreate(BaseModel):
    name: str
    brand: str
    description: Optional[str] = None
    price: float = Field(..., gt=0)
    stock_quantity: int = Field(..., ge=0)
    # None means "use the configured default"
    low_stock_threshold: Optional[int] = Field(None, ge=0)
    is_active: bool = True
    specs: ProductSpecs


class ProductUpdate(BaseModel):
    """
    Partial update. Only fields present in the request are applied.

    Sending ``specs`` replaces the category and its whole attribute block.
    """
    name: Optional[str] = None
    brand: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    specs: Optional[ProductSpecs] = None

    @field_validator(
        "name", "brand", "price", "stock_quantity", "low_stock_threshold", "is_active", "specs"
    )
    @classmethod
    def _not_null(cls, value):
        # Only description may be cleared; the rest are NOT NULL columns
        if value is None:
            raise ValueError("field cannot be null")
        return value


class StockUpdate(BaseModel):
    stock_quantity: int = Field(..., ge=0)


class Product(_ORMModel):
    id: int
    name: str
    brand: str
    category: ProductCategory
    description: Optional[str]
    price: float
    stock_quantity: int
    low_stock_threshold: int
    is_active: bool
    specs: ProductSpecs
    created_at: datetime
    updated_at: datetime


class ProductFilters(BaseModel):
    category: Optional[ProductCategory] = None
    brand: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    gpu_chipset: Optional[str] = None
    cpu_socket: Optional[str] = None
    ram_capacity: Optional[int] = None
    ram_type: Optional[RamType] = None
    ssd_interface: Optional[StorageInterface] = None
    motherboard_form_factor: Optional[str] = None
    in_stock_only: Optional[bool] = None


# ============================================================================
# PRODUCT IMAGE SCHEMAS
# ============================================================================

_url_adapter = TypeAdapter(AnyUrl)


class ProductImageCreate(BaseModel):
    product_id: int
    image_url: str
    alt_text: Optional[str] = None
    display_order: int = Field(..., ge=0)

    @field_validator("image_url")
    @classmethod
    def _valid_url(cls, value: str) -> str:
        # Checked as a URL, stored exactly as sent (AnyUrl would add a trailing slash)
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("image_url must be a valid URL") from None
        return value


class ProductImage(_ORMModel):
    id: int
    product_id: int
    image_url: str
    alt_text: Optional[str]
    display_order: int
    created_at: datetime


# ============================================================================
# CART SCHEMAS
# ============================================================================

class CartItemCreate(BaseModel):
    user_id: int
    product_id: int
    quantity: int = Field(..., gt=0)


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., gt=0)


class CartItem(_ORMModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: datetime
    updated_at: datetime


# ============================================================================
# ORDER SCHEMAS
# ============================================================================

class OrderCreate(BaseModel):
    user_id: int
    total_amount: float = Field(..., gt=0)
    shipping_address: str
    billing_address: str


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemCreate(BaseModel):
    order_id: int
    product_id: int
    quantity: int = Field(..., gt=0)
    price_at_time: float = Field(..., gt=0)


class OrderItem(_ORMModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price_at_time: float
    created_at: datetime


class Order(_ORMModel):
    id: int
    user_id: int
    status: OrderStatus
    total_amount: float
    shipping_address: str
    billing_address: str
    created_at: datetime
    updated_at: datetime


class OrderDetail(Order):
    items: List[OrderItem] = []


# ============================================================================
# WISHLIST SCHEMAS
# ============================================================================

class WishlistItemCreate(BaseModel):
    user_id: int
    product_id: int


class WishlistItem(_ORMModel):
    id: int
    user_id: int
    product_id: int
    created_at: datetime


# ============================================================================
# REVIEW SCHEMAS
# ============================================================================

class ReviewCreate(BaseModel):
    user_id: int
    product_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class ReviewUpdate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class Review(_ORMModel):
    id: int
    user_id: int
    product_id: int
    rating: int
    comment: Optional[str]
    created_at: datetime
    updated_at: datetime
