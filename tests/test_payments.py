import asyncio

import pytest
from pydantic import ValidationError

from app.domain.payments.schemas import PaymentDetails
from app.domain.payments.service import payment_id_for, process_payment


def card(**overrides):
    fields = {
        "paymentMethod": "card",
        "cardholderName": "Jane Doe",
        "cardNumber": "4111 1111 1111 1111",
        "expiryDate": "09/27",
        "cvv": "999",
    }
    fields.update(overrides)
    return fields


def test_card_payment_describes_last_four_digits():
    assert PaymentDetails(**card()).describe() == "Credit Card (••••1111)"


def test_card_method_is_the_default():
    details = card()
    del details["paymentMethod"]
    assert PaymentDetails(**details).paymentMethod == "card"


@pytest.mark.parametrize(
    "overrides",
    [
        {"cardholderName": None},
        {"cardNumber": "4111"},
        {"cardNumber": "4111-1111-1111-1111"},
        {"expiryDate": "9/27"},
        {"cvv": "12"},
        {"cvv": "12a"},
    ],
)
def test_invalid_card_details(overrides):
    with pytest.raises(ValidationError):
        PaymentDetails(**card(**overrides))


def test_insurance_needs_provider_and_policy():
    details = PaymentDetails(
        paymentMethod="insurance", insuranceProvider="Aetna", insurancePolicyNumber="P-1"
    )
    assert details.describe() == "Insurance Copay (Aetna)"

    with pytest.raises(ValidationError):
        PaymentDetails(paymentMethod="insurance", insuranceProvider="Aetna")


def test_unknown_method_rejected():
    with pytest.raises(ValidationError):
        PaymentDetails(**card(paymentMethod="paypal"))


def test_process_payment_runs_completion_callback():
    calls = []

    async def on_complete():
        calls.append("done")
        return "appointment"

    result = asyncio.run(process_payment(PaymentDetails(**card()), 75.0, on_complete))

    assert result == "appointment"
    assert calls == ["done"]


def test_payment_id_uses_appointment_prefix():
    assert payment_id_for("3f2a9c1e-0000-4000-8000-000000000000") == "PAY-3f2a9c1e"
