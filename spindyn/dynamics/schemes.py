"""Closed sets of method names accepted by the integrators."""

from enum import Enum
from typing import Type, TypeVar, Union

E = TypeVar("E", bound="MethodEnum")


class MethodEnum(str, Enum):
    """String enum parsed case-insensitively from configuration values."""

    @classmethod
    def parse(cls: Type[E], value: Union[str, E]) -> E:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        valid = [member.value for member in cls]
        raise ValueError(f"Unknown {cls.__name__}: {value!r}. Must be one of {valid}")

    def __str__(self) -> str:
        return self.value


class PrecessionMethod(MethodEnum):
    """Single-spin precession updates (sLLG path)."""

    EULER = "euler"
    SYMPLECTIC = "symplectic"
    FULL = "full"
    RK4 = "rk4"


class MomentMethod(MethodEnum):
    """Single-atom updates of the first and second moments (dLLB path)."""

    EULER = "euler"
    RK4 = "rk4"
    # Lie-group / exponential integrator, reserved until a reference scheme exists
    EXPIO1 = "expio1"


class IntegrationScheme(MethodEnum):
    """Stepping schemes available to the multi-atom driver."""

    EULER = "euler"
    RK4 = "rk4"

    def precession_method(self) -> PrecessionMethod:
        return PrecessionMethod(self.value)

    def moment_method(self) -> MomentMethod:
        return MomentMethod(self.value)


class EquationFamily(MethodEnum):
    """Equations of motion."""

    SLLG = "sllg"
    DLLB = "dllb"
