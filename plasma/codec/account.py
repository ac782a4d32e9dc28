"""
Module 03 - Leaf Codec
File: account.py

Purpose: The account record stored at each leaf of the state tree.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from plasma.crypto.field import FR_MODULUS, Fr


class AccountLeaf(BaseModel):
    """
    Account state committed to by one tree leaf.

    All four fields are BN254 scalar field elements. Plain integers are
    accepted and converted. The all-zero record is the default leaf used
    for every index that was never written.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )

    balance: Fr = Field(default_factory=Fr.zero)
    nonce: Fr = Field(default_factory=Fr.zero)
    pub_key_x: Fr = Field(default_factory=Fr.zero)
    pub_key_y: Fr = Field(default_factory=Fr.zero)

    @field_validator("balance", "nonce", "pub_key_x", "pub_key_y", mode="before")
    @classmethod
    def _coerce_field_element(cls, value: Any) -> Fr:
        if isinstance(value, Fr):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected int or Fr, got {type(value).__name__}")
        if not 0 <= value < FR_MODULUS:
            raise ValueError("field values must be integers in [0, r)")
        return Fr(value)

    @field_serializer("balance", "nonce", "pub_key_x", "pub_key_y")
    def _serialize_field_element(self, value: Fr) -> str:
        return str(value.n)

    @classmethod
    def default(cls) -> "AccountLeaf":
        return cls()

    def is_default(self) -> bool:
        return (
            self.balance == 0
            and self.nonce == 0
            and self.pub_key_x == 0
            and self.pub_key_y == 0
        )

    def __repr__(self) -> str:
        return f"AccountLeaf(balance={self.balance.n})"
