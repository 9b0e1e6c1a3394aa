import razorpay
from razorpay.errors import SignatureVerificationError

from app.core.config import RAZORPAY_KEY_ID, RAZORPAY_KEY_SECRET

razorpay_client = razorpay.Client(auth=(RAZORPAY_KEY_ID, RAZORPAY_KEY_SECRET))


def create_order(booking_id: str, amount: float):
    """Create a Razorpay order for a booking; amount is in rupees."""
    return razorpay_client.order.create({
        "amount": int(round(amount * 100)),
        "currency": "INR",
        "receipt": f"booking_{booking_id}"
    })


def verify_signature(order_id: str, payment_id: str, signature: str) -> bool:
    try:
        razorpay_client.utility.verify_payment_signature({
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "razorpay_signature": signature,
        })
        return True
    except SignatureVerificationError:
        return False


def refund_payment(payment_id: str, amount: float):
    """Refund part or all of a captured payment; amount is in rupees."""
    return razorpay_client.payment.refund(payment_id, {
        "amount": int(round(amount * 100)),
        "speed": "normal",
    })
