"""Payment domain schemas - shape validation for the simulated checkout"""

from typing import Literal, Optional

from pydantic import BaseModel, model_validator

from ...shared.validators import validate_card_expiry, validate_card_number, validate_cvv


class PaymentDetails(BaseModel):
    """
    Card or insurance copay details. Only the shape is checked; nothing is
    ever charged.
    """

    paymentMethod: Literal["card", "insurance"] = "card"
    saveCard: bool = False
    cardholderName: Optional[str] = None
    cardNumber: Optional[str] = None
    expiryDate: Optional[str] = None
    cvv: Optional[str] = None
    insuranceProvider: Optional[str] = None
    insurancePolicyNumber: Optional[str] = None

    @model_validator(mode="after")
    def validate_method_fields(self):
        if self.paymentMethod == "card":
            if not self.cardholderName:
                raise ValueError("Cardholder name is required")
            validate_card_number(self.cardNumber or "")
            validate_card_expiry(self.expiryDate or "")
            validate_cvv(self.cvv or "")
        elif self.paymentMethod == "insurance":
            if not self.insuranceProvider:
                raise ValueError("Insurance provider is required")
            if not self.insurancePolicyNumber:
                raise ValueError("Policy number is required")
        return self

    def describe(self) -> str:
        """Human readable payment method, e.g. 'Credit Card (••••4242)'"""
        if self.paymentMethod == "card":
            digits = "".join(ch for ch in self.cardNumber or "" if ch.isdigit())
            return f"Credit Card (••••{digits[-4:]})"
        return f"Insurance Copay ({self.insuranceProvider})"


class PaymentSummary(BaseModel):
    paymentId: str
    amount: float
    method: str
    status: str = "Paid"
