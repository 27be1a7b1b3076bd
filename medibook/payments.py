"""Hand-off of payment orders to the host's checkout widget.

The widget itself (Razorpay checkout on the web) is outside this package;
views only depend on the one-method PaymentGateway interface.
"""
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from medibook import config
from medibook.logging_config import get_logger
from medibook.models import PaymentOrder

logger = get_logger(__name__)

CheckoutCallback = Callable[[Dict[str, Any]], None]


@dataclass(frozen=True)
class CheckoutOptions:
    """Options the checkout widget is opened with."""
    key: str
    amount: int
    currency: str
    name: str
    description: str
    order_id: str
    receipt: Optional[str] = None

    @classmethod
    def from_order(cls, order: PaymentOrder, key: str = config.RAZORPAY_KEY_ID) -> "CheckoutOptions":
        return cls(
            key=key,
            amount=order.amount,
            currency=order.currency,
            name=config.PAYMENT_TITLE,
            description=config.PAYMENT_TITLE,
            order_id=order.id,
            receipt=order.receipt,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PaymentGateway:
    """Opens a checkout for an order and reports completion via callback."""

    def open_checkout(self, options: CheckoutOptions, on_complete: CheckoutCallback):
        raise NotImplementedError


class LoggingPaymentGateway(PaymentGateway):
    """Gateway for hosts without a widget: logs and remembers the checkout."""

    def __init__(self):
        self.last_options: Optional[CheckoutOptions] = None
        self.last_callback: Optional[CheckoutCallback] = None

    def open_checkout(self, options: CheckoutOptions, on_complete: CheckoutCallback):
        self.last_options = options
        self.last_callback = on_complete
        logger.info(
            "checkout_opened",
            order_id=options.order_id,
            amount=options.amount,
            currency=options.currency,
        )
