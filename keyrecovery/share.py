"""
Shares handed out to guardians.
"""

from dataclasses import dataclass, asdict

from keyrecovery.errors import DecodeError


@dataclass
class Share:
    """
    A single guardian's share of a (spending, viewing) key pair.

    All fields are canonical hex strings (lowercase, no 0x prefix).
    """
    point: str          # The x-coordinate, same integer in both fields
    spending_eval: str  # Spending polynomial evaluated at point
    viewing_eval: str   # Viewing polynomial evaluated at point

    def to_hex(self) -> str:
        """Serialize to a portable string."""
        return f"{self.point}:{self.spending_eval}:{self.viewing_eval}"

    @classmethod
    def from_hex(cls, hex_str: str) -> "Share":
        """Deserialize from the to_hex() form."""
        parts = hex_str.split(":")
        if len(parts) != 3:
            raise DecodeError(f"expected 3 fields in share, got {len(parts)}")
        return cls(point=parts[0], spending_eval=parts[1], viewing_eval=parts[2])

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Share":
        try:
            return cls(
                point=data["point"],
                spending_eval=data["spending_eval"],
                viewing_eval=data["viewing_eval"],
            )
        except (KeyError, TypeError) as e:
            raise DecodeError(f"malformed share record: {e}") from e
