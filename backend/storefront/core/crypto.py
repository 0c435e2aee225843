import hashlib
import hmac


def signature_payload(razorpay_order_id: str, razorpay_payment_id: str) -> str:
    return f"{razorpay_order_id}|{razorpay_payment_id}"


def hmac_hash(secret: str, razorpay_order_id: str, razorpay_payment_id: str) -> str:
    key = secret.encode("utf-8")
    msg = signature_payload(razorpay_order_id, razorpay_payment_id).encode("utf-8")
    return hmac.new(key, msg, hashlib.sha256).hexdigest()


def signatures_match(expected: str, received: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), (received or "").encode("utf-8"))
