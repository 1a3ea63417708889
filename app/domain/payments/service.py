"""Simulated payment processing"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from ... import config
from .schemas import PaymentDetails

logger = logging.getLogger(__name__)

T = TypeVar("T")


def payment_id_for(appointment_id: str) -> str:
    return f"PAY-{appointment_id[:8]}"


async def process_payment(
    details: PaymentDetails,
    amount: float,
    on_complete: Callable[[], Awaitable[T]],
) -> T:
    """
    Pretend to charge ``amount``: wait a fixed delay, then run the completion
    callback and return its result. There is no real charge, retry or
    failure mode.
    """
    logger.info(f"💳 Processing simulated {details.paymentMethod} payment of ${amount:.2f}")
    await asyncio.sleep(config.PAYMENT_PROCESSING_DELAY_SECONDS)
    logger.info("✅ Simulated payment complete")
    return await on_complete()
