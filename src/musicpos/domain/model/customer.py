"""Customer record, looked up by id when a sale is rung up."""

from __future__ import annotations

from dataclasses import dataclass

from musicpos.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Customer:
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    address: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name} - {self.email}"

    @staticmethod
    def create(
        customer_id: int,
        first_name: str,
        last_name: str,
        email: str,
        phone: str = "",
        address: str = "",
    ) -> Customer:
        required = {"first_name": first_name, "last_name": last_name, "email": email}
        for name, value in required.items():
            if not isinstance(value, str) or not value.strip():
                label = name.replace("_", " ")
                raise ValidationError(f"Customer {label} is required", field=name)
        for name, value in {"phone": phone, "address": address}.items():
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"Customer {name} must be text", field=name)
        if "@" not in email:
            raise ValidationError(f"Invalid email address {email!r}", field="email")

        return Customer(
            id=customer_id,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email.strip(),
            phone=(phone or "").strip(),
            address=(address or "").strip(),
        )
