"""
Fixed-step single-step integrators.

The integrators only need the state to support ``state + state`` and
``scalar * state``, so the same code advances plain numpy vectors (sLLG
precession) and ``Moments`` pairs (dLLB).
"""

from abc import ABC, abstractmethod
from typing import Callable, TypeVar, Union

from .schemes import IntegrationScheme

State = TypeVar("State")
RHS = Callable[[State], State]


class Integrator(ABC):
    """Abstract base class for single-step integrators."""

    @abstractmethod
    def step(self, state: State, rhs: RHS, dt: float) -> State:
        """
        Perform one integration step.

        Args:
            state: Current state
            rhs: Function returning the time derivative of a state
            dt: Time step

        Returns:
            Updated state
        """
        pass


class EulerIntegrator(Integrator):
    """
    Explicit first-order Euler method.

    Cheapest scheme, one right-hand-side evaluation per step.
    """

    def step(self, state: State, rhs: RHS, dt: float) -> State:
        return state + dt * rhs(state)


class RK4Integrator(Integrator):
    """
    Classical fourth-order Runge-Kutta integrator.

    Four right-hand-side evaluations per step, local error O(dt^5).
    """

    def step(self, state: State, rhs: RHS, dt: float) -> State:
        """Perform RK4 integration step."""
        k1 = rhs(state)
        k2 = rhs(state + 0.5 * dt * k1)
        k3 = rhs(state + 0.5 * dt * k2)
        k4 = rhs(state + dt * k3)

        return state + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


_INTEGRATORS = {
    IntegrationScheme.EULER: EulerIntegrator,
    IntegrationScheme.RK4: RK4Integrator,
}


def create_integrator(scheme: Union[str, IntegrationScheme]) -> Integrator:
    """Create the integrator for a scheme name."""
    scheme = IntegrationScheme.parse(scheme)
    return _INTEGRATORS[scheme]()
