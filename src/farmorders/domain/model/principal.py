"""The authenticated caller, as handed to us by the identity collaborator."""

from __future__ import annotations

from dataclasses import dataclass

from farmorders.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Principal:
    """Who is calling.

    Every principal can buy. A user registered as both buyer and farmer
    also carries ``seller_id``, which is what the self-purchase rule
    checks against.
    """

    buyer_id: str
    seller_id: str | None = None

    def __post_init__(self) -> None:
        if not self.buyer_id or not self.buyer_id.strip():
            raise ValidationError("Buyer identity is required")

    def is_seller(self, seller_id: str) -> bool:
        return self.seller_id is not None and self.seller_id == seller_id
