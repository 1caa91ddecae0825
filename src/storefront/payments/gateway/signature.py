"""Checkout signature: hex HMAC-SHA256 of ``"<order_id>|<payment_id>"``."""

import hashlib
import hmac


def payment_signature(key_secret: str, gateway_order_id: str, payment_id: str) -> str:
    message = f"{gateway_order_id}|{payment_id}".encode()
    return hmac.new(key_secret.encode(), message, hashlib.sha256).hexdigest()


def signature_matches(key_secret: str, gateway_order_id: str, payment_id: str, signature: str | None) -> bool:
    if not signature:
        return False
    expected = payment_signature(key_secret, gateway_order_id, payment_id)
    return hmac.compare_digest(expected.encode(), signature.encode())
