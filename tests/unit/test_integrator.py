"""
Unit tests for integrator module.
"""
import pytest

from pyaimd.core import Atom, Force, Position, Velocity
from pyaimd.exceptions import ConfigurationError
from pyaimd.integrator import Integrator, VelocityVerlet


@pytest.fixture
def pushed_atom() -> Atom:
    """Atom moving along x with a push in the same direction."""
    return Atom(
        "X", 2.0,
        position=Position(0.0, 0.0, 0.0),
        velocity=Velocity(1.0, 0.0, 0.0),
        force=Force(4.0, 0.0, 0.0),
    )


class TestIntegratorBase:
    """Tests for the abstract integrator."""

    def test_cannot_instantiate(self) -> None:
        with pytest.raises(TypeError):
            Integrator(dt=1.0)

    def test_invalid_dt(self) -> None:
        with pytest.raises(ConfigurationError):
            VelocityVerlet(dt=0.0)
        with pytest.raises(ConfigurationError):
            VelocityVerlet(dt=-0.5)


class TestVelocityVerlet:
    """Tests for VelocityVerlet integrator."""

    def test_propose_positions(self, pushed_atom: Atom) -> None:
        """Test r + v dt + ½ (F/m) dt²."""
        positions = VelocityVerlet(dt=0.5).propose_positions([pushed_atom])
        assert positions[0].as_vec().as_tuple() == pytest.approx((0.75, 0.0, 0.0))

    def test_propose_does_not_mutate(self, pushed_atom: Atom) -> None:
        VelocityVerlet(dt=0.5).propose_positions([pushed_atom])
        assert pushed_atom.position == Position(0.0, 0.0, 0.0)

    def test_advance_velocities(self, pushed_atom: Atom) -> None:
        """Test v + ½ (F_old + F_new)/m dt and the force rotation."""
        pushed_atom.next_force = Force(0.0, 2.0, 0.0)
        VelocityVerlet(dt=0.5).advance_velocities([pushed_atom])
        assert pushed_atom.velocity.as_vec().as_tuple() == pytest.approx((1.5, 0.25, 0.0))
        assert pushed_atom.force == Force(0.0, 2.0, 0.0)

    def test_frozen_atom_untouched(self, pushed_atom: Atom) -> None:
        pushed_atom.freeze()
        integrator = VelocityVerlet(dt=0.5)
        positions = integrator.propose_positions([pushed_atom])
        assert positions[0] == pushed_atom.position

        pushed_atom.next_force = Force(-1.0, 0.0, 0.0)
        integrator.advance_velocities([pushed_atom])
        assert pushed_atom.velocity == Velocity.zero()
        assert pushed_atom.force == Force(-1.0, 0.0, 0.0)

    def test_energy_conservation(self) -> None:
        """Test that a harmonic oscillator conserves energy."""
        k, dt = 1.0, 0.01
        atom = Atom("X", 1.0, position=Position(1.0, 0.0, 0.0))
        atom.force = Force(-k, 0.0, 0.0)
        integrator = VelocityVerlet(dt=dt)

        def energy() -> float:
            return atom.kinetic_energy() + 0.5 * k * atom.position.squared_norm()

        initial = energy()
        for _ in range(1000):
            atom.position = integrator.propose_positions([atom])[0]
            atom.next_force = Force.from_vector(atom.position.as_vec() * -k)
            integrator.advance_velocities([atom])

        assert energy() == pytest.approx(initial, rel=1e-3)

    def test_get_name(self) -> None:
        assert "VelocityVerlet" in VelocityVerlet(dt=0.5).get_name()
