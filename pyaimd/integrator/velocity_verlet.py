"""
Velocity Verlet integrator implementation.

Time-reversible and symplectic with good energy conservation. Each step
needs exactly one force evaluation, which is what makes it the natural
choice when forces come from an expensive electronic-structure program.
"""
from typing import List

from pyaimd.core import Acceleration, Atom, Position, Velocity

from .integrator import Integrator


class VelocityVerlet(Integrator):
    """
    Velocity Verlet integrator.

    Algorithm (for each time step dt):
        1. r(t + dt) = r(t) + v(t) * dt + (1/2) * a(t) * dt²
        2. Compute F(t + dt) at the new positions
        3. v(t + dt) = v(t) + (1/2) * (a(t) + a(t + dt)) * dt

    Frozen atoms are skipped in steps 1 and 3, but their force registers
    are still rotated so the stored force always matches the geometry.

    Example:
        >>> integrator = VelocityVerlet(dt=0.5)
        >>> positions = integrator.propose_positions(atoms)
    """

    def propose_positions(self, atoms: List[Atom]) -> List[Position]:
        dt = self.dt
        positions = []
        for atom in atoms:
            if not atom.mobile:
                positions.append(atom.position)
                continue
            # r + v*dt + 0.5*(F/m)*dt^2
            accel = atom.force.as_kind(Acceleration) * (1.0 / atom.mass)
            displacement = atom.velocity.as_vec() * dt + 0.5 * accel.as_vec() * dt ** 2
            positions.append(Position.from_vector(atom.position.as_vec() + displacement))
        return positions

    def advance_velocities(self, atoms: List[Atom]) -> None:
        dt = self.dt
        for atom in atoms:
            if atom.mobile:
                # v + 0.5*(F_old + F_new)/m*dt
                mean_accel = (atom.force + atom.next_force).as_kind(Acceleration) * (
                    0.5 / atom.mass
                )
                atom.velocity = atom.velocity + Velocity.from_vector(
                    mean_accel.as_vec() * dt
                )
            atom.force = atom.next_force

    def get_name(self) -> str:
        """Return integrator name with timestep."""
        return f"VelocityVerlet(dt={self.dt})"
