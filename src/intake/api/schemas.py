"""Pydantic request/response schemas for the Intake API.

These are the external JSON contract; routes convert them to the Order
aggregate before anything reaches storage.
"""

from pydantic import BaseModel, Field

from intake.order.order import MAX_STORED_INT


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class DeliverySchema(BaseModel):
    name: str
    phone: str
    zip: str
    city: str
    address: str
    region: str
    email: str


class PaymentSchema(BaseModel):
    transaction: str = Field(min_length=1)
    request_id: str
    currency: str
    provider: str
    amount: int = Field(ge=0, le=MAX_STORED_INT)
    payment_dt: int = Field(ge=0, le=MAX_STORED_INT)
    bank: str
    delivery_cost: int = Field(ge=0, le=MAX_STORED_INT)
    goods_total: int = Field(ge=0, le=MAX_STORED_INT)
    custom_fee: int = Field(ge=0, le=MAX_STORED_INT)


class ItemSchema(BaseModel):
    chrt_id: int = Field(ge=0, le=MAX_STORED_INT)
    track_number: str
    price: int = Field(ge=0, le=MAX_STORED_INT)
    rid: str
    name: str
    sale: int = Field(ge=0, le=MAX_STORED_INT)
    size: str
    total_price: int = Field(ge=0, le=MAX_STORED_INT)
    nm_id: int = Field(ge=0, le=MAX_STORED_INT)
    brand: str
    status: int = Field(ge=0, le=MAX_STORED_INT)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OrderRequest(BaseModel):
    order_uid: str = Field(min_length=1)
    track_number: str
    entry: str
    delivery: DeliverySchema
    payment: PaymentSchema
    items: list[ItemSchema]
    locale: str
    internal_signature: str
    customer_id: str
    delivery_service: str
    shardkey: str
    sm_id: int = Field(ge=0, le=MAX_STORED_INT)
    date_created: str
    oof_shard: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order_uid": "b563feb7b2b84b6test",
                    "track_number": "WBILMTESTTRACK",
                    "entry": "WBIL",
                    "delivery": {
                        "name": "Test Testov",
                        "phone": "+9720000000",
                        "zip": "2639809",
                        "city": "Kiryat Mozkin",
                        "address": "Ploshad Mira 15",
                        "region": "Kraiot",
                        "email": "test@gmail.com",
                    },
                    "payment": {
                        "transaction": "b563feb7b2b84b6test",
                        "request_id": "",
                        "currency": "USD",
                        "provider": "wbpay",
                        "amount": 1817,
                        "payment_dt": 1637907727,
                        "bank": "alpha",
                        "delivery_cost": 1500,
                        "goods_total": 317,
                        "custom_fee": 0,
                    },
                    "items": [
                        {
                            "chrt_id": 9934930,
                            "track_number": "WBILMTESTTRACK",
                            "price": 453,
                            "rid": "ab4219087a764ae0btest",
                            "name": "Mascaras",
                            "sale": 30,
                            "size": "0",
                            "total_price": 317,
                            "nm_id": 2389212,
                            "brand": "Vivienne Sabo",
                            "status": 202,
                        }
                    ],
                    "locale": "en",
                    "internal_signature": "",
                    "customer_id": "test",
                    "delivery_service": "meest",
                    "shardkey": "9",
                    "sm_id": 99,
                    "date_created": "2021-11-26T06:22:19Z",
                    "oof_shard": "1",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ErrorResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"success": False, "message": "duplicate key value"}]}}

    success: bool = False
    message: str
