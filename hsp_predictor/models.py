"""
Value objects shared by every part of the engine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional
import math

import numpy as np

from .errors import UnknownMethodError


class HSPMethod(Enum):
    """Provenance tag of an HSP result (AUTO only selects, it never tags)."""

    VAN_KREVELEN = "VanKrevelen"
    STEFANIS = "Stefanis"
    EOS = "EoS"
    MARCUS = "Marcus"
    MANUAL = "Manual"
    EXPERIMENTAL = "Experimental"
    AUTO = "Auto"

    @classmethod
    def from_label(cls, label) -> "HSPMethod":
        """
        Resolve a method from an enum member or a free-form label.

        Accepts the labels used by the comparison table ("VanKrevelen",
        "Stefanis", "Costas", "Marcus", "Manual", "Auto") in any case.
        """
        if isinstance(label, cls):
            return label
        if not isinstance(label, str):
            raise UnknownMethodError(label)

        key = "".join(ch for ch in label.lower() if ch.isalnum())
        method = _METHOD_ALIASES.get(key)
        if method is None:
            raise UnknownMethodError(label)
        return method

    @property
    def is_predictive(self) -> bool:
        return self in PREDICTIVE_METHODS


_METHOD_ALIASES: Dict[str, HSPMethod] = {
    "vankrevelen": HSPMethod.VAN_KREVELEN,
    "vkh": HSPMethod.VAN_KREVELEN,
    "groupcontribution": HSPMethod.VAN_KREVELEN,
    "stefanis": HSPMethod.STEFANIS,
    "energy": HSPMethod.STEFANIS,
    "eos": HSPMethod.EOS,
    "equationofstate": HSPMethod.EOS,
    "costas": HSPMethod.EOS,
    "marcus": HSPMethod.MARCUS,
    "ionic": HSPMethod.MARCUS,
    "manual": HSPMethod.MANUAL,
    "experimental": HSPMethod.EXPERIMENTAL,
    "reference": HSPMethod.EXPERIMENTAL,
    "auto": HSPMethod.AUTO,
}

PREDICTIVE_METHODS = (
    HSPMethod.VAN_KREVELEN,
    HSPMethod.STEFANIS,
    HSPMethod.EOS,
    HSPMethod.MARCUS,
)


@dataclass(frozen=True)
class HSPResult:
    """
    Hansen solubility parameters of one substance, in MPa^0.5.

    ``delta_t`` and ``delta_v`` are derived in ``__post_init__`` and cannot be
    passed in, so they always agree with the three components.
    """

    delta_d: float
    delta_p: float
    delta_h: float
    method: HSPMethod
    molar_volume: Optional[float] = None
    delta_t: float = field(init=False)
    delta_v: float = field(init=False)

    def __post_init__(self):
        if self.method is HSPMethod.AUTO:
            raise ValueError("AUTO is a selection request, not a result method")
        for name in ("delta_d", "delta_p", "delta_h"):
            value = getattr(self, name)
            if value < 0 or math.isnan(value):
                raise ValueError(f"{name} must be a non-negative number, got {value}")
        d, p, h = self.delta_d, self.delta_p, self.delta_h
        object.__setattr__(self, "delta_t", math.sqrt(d * d + p * p + h * h))
        object.__setattr__(self, "delta_v", math.sqrt(d * d + p * p))

    # ───────────────────────── constructors ──────────────────────────
    @classmethod
    def build(
        cls,
        delta_d: float,
        delta_p: float,
        delta_h: float,
        method: HSPMethod,
        molar_volume: Optional[float] = None,
        digits: Optional[int] = 2,
    ) -> "HSPResult":
        """Shared constructor for every method; rounds the components."""
        values = [max(0.0, float(x)) for x in (delta_d, delta_p, delta_h)]
        if digits is not None:
            values = [round(x, digits) for x in values]
        if molar_volume is not None:
            molar_volume = float(molar_volume)
        return cls(values[0], values[1], values[2], method, molar_volume)

    @classmethod
    def manual(cls, delta_d: float, delta_p: float, delta_h: float) -> "HSPResult":
        return cls.build(delta_d, delta_p, delta_h, HSPMethod.MANUAL)

    @classmethod
    def placeholder(cls) -> "HSPResult":
        """Zeroed manual entry handed out when no method is viable."""
        return cls(0.0, 0.0, 0.0, HSPMethod.MANUAL)

    def with_method(self, method: HSPMethod) -> "HSPResult":
        """Same numbers under a new provenance tag (a new object)."""
        return HSPResult(self.delta_d, self.delta_p, self.delta_h, method, self.molar_volume)

    # ───────────────────────── views ──────────────────────────
    def as_vector(self) -> np.ndarray:
        return np.array([self.delta_d, self.delta_p, self.delta_h], dtype=float)

    def to_dict(self) -> Dict[str, object]:
        """
        Camel-case view of the result. ``molarVolume`` is None for EXPERIMENTAL
        and MANUAL results, which carry no group-contribution volume.
        """
        return {
            "deltaD": self.delta_d,
            "deltaP": self.delta_p,
            "deltaH": self.delta_h,
            "deltaT": self.delta_t,
            "deltaV": self.delta_v,
            "molarVolume": self.molar_volume,
            "method": self.method.value,
        }


@dataclass
class Molecule:
    """
    Molecule record owned by the caller. The engine reads the structure,
    weight and names, and writes ``hsp``.
    """

    smiles: Optional[str]
    molecular_weight: float
    name: str = ""
    english_name: Optional[str] = None
    hsp: Optional[HSPResult] = None
    id: Optional[str] = None

    def preferred_names(self) -> List[str]:
        """Names to try against the reference table, English first."""
        names = []
        for candidate in (self.english_name, self.name):
            if candidate and candidate.strip() and candidate not in names:
                names.append(candidate)
        return names
