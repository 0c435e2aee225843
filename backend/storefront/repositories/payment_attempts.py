from google.cloud.firestore_v1 import SERVER_TIMESTAMP

COL = "payment_attempts"


def log_signature_mismatch(db, collection: str, order_id: str, razorpay_order_id: str,
                           razorpay_payment_id: str, received: str, expected: str) -> None:
    db.collection(collection).add({
        "orderId": order_id,
        "razorpayOrderId": razorpay_order_id,
        "razorpayPaymentId": razorpay_payment_id,
        "status": "signature_mismatch",
        "timestamp": SERVER_TIMESTAMP,
        "receivedSignature": received,
        "expectedSignature": expected,
    })
