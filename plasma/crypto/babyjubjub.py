"""
Module 02 - Baby Jubjub Curve
Twisted Edwards curve embedded in the BN254 scalar field.

Owner: Protocol/Crypto Engineer
Module ID: M02

Curve: a*x^2 + y^2 = 1 + d*x^2*y^2 over Fr, with a = 168700, d = 168696.
The group order is 8 * l with l prime; Pedersen generators live in the
order-l subgroup.

Because a is a square and d is not, the affine addition law below is
complete: it has no exceptional cases, including doubling and the
identity (0, 1).
"""
from __future__ import annotations

from dataclasses import dataclass

from plasma.crypto.field import Fr, fr_sqrt


A = Fr(168700)
D = Fr(168696)

COFACTOR = 8

# Order of the prime subgroup
SUBGROUP_ORDER = 2736030358979909402780800718157159386076813972158567259200215660948447373041


@dataclass(frozen=True, eq=True)
class Point:
    """Affine point on Baby Jubjub."""

    x: Fr
    y: Fr

    @classmethod
    def identity(cls) -> "Point":
        return cls(Fr(0), Fr(1))

    @classmethod
    def from_y(cls, y: Fr, x_is_odd: bool = False) -> "Point | None":
        """
        Recover a point from its y coordinate.

        x^2 = (1 - y^2) / (a - d*y^2). The denominator never vanishes
        since a/d is a non-square.

        Returns:
            The point whose x has the requested parity, or None if no
            point with this y exists
        """
        y2 = y * y
        x2 = (1 - y2) / (A - D * y2)
        x = fr_sqrt(x2)
        if x is None:
            return None
        if bool(x.n & 1) != x_is_odd:
            x = -x
        return cls(x, y)

    def is_identity(self) -> bool:
        return self.x == 0 and self.y == 1

    def is_on_curve(self) -> bool:
        x2 = self.x * self.x
        y2 = self.y * self.y
        return A * x2 + y2 == 1 + D * x2 * y2

    def __add__(self, other: "Point") -> "Point":
        x1, y1 = self.x, self.y
        x2, y2 = other.x, other.y
        x1x2 = x1 * x2
        y1y2 = y1 * y2
        dxy = D * x1x2 * y1y2
        x3 = (x1 * y2 + y1 * x2) / (1 + dxy)
        y3 = (y1y2 - A * x1x2) / (1 - dxy)
        return Point(x3, y3)

    def __neg__(self) -> "Point":
        return Point(-self.x, self.y)

    def double(self) -> "Point":
        return self + self

    def __mul__(self, scalar: int) -> "Point":
        """Double-and-add, most significant bit first."""
        if scalar < 0:
            return (-self) * (-scalar)
        result = Point.identity()
        for bit in bin(scalar)[2:]:
            result = result.double()
            if bit == "1":
                result = result + self
        return result

    __rmul__ = __mul__

    def mul_by_cofactor(self) -> "Point":
        return self.double().double().double()

    def in_prime_subgroup(self) -> bool:
        return (self * SUBGROUP_ORDER).is_identity()

    def __repr__(self) -> str:
        return f"Point(x={self.x.n}, y={self.y.n})"


__all__ = [
    "A",
    "D",
    "COFACTOR",
    "SUBGROUP_ORDER",
    "Point",
]
