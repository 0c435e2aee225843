from typing import Any, Dict, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from storefront.schemas.order import OrderRecord

COL = "orders"


def create_pending(db, collection: str, gateway_order: Dict[str, Any],
                   order_data: Optional[Dict[str, Any]] = None) -> None:
    """Order doc keyed by the gateway order id, status 'created'."""
    db.collection(collection).document(gateway_order["id"]).set({
        **(order_data or {}),
        "razorpayOrderId": gateway_order["id"],
        "status": "created",
        "amount": gateway_order.get("amount"),
        "currency": gateway_order.get("currency"),
        "receipt": gateway_order.get("receipt"),
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    })


def mark_paid(db, collection: str, order_id: str,
              razorpay_order_id: str, razorpay_payment_id: str) -> None:
    # update() fails with NotFound when the order doc was never written
    db.collection(collection).document(order_id).update({
        "payment.status": "completed",
        "payment.razorpayPaymentId": razorpay_payment_id,
        "payment.razorpayOrderId": razorpay_order_id,
        "payment.verifiedAt": SERVER_TIMESTAMP,
        "status": "paid",
        "updatedAt": SERVER_TIMESTAMP,
    })


def get(db, collection: str, order_id: str) -> Optional[OrderRecord]:
    doc = db.collection(collection).document(order_id).get()
    return OrderRecord.model_validate(doc.to_dict()) if doc.exists else None
