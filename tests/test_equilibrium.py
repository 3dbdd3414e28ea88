import math
import unittest

from habersim.equilibrium import (
    AT_EQUILIBRIUM,
    FORWARD,
    REVERSE,
    equilibrium_constant,
    equilibrium_extent,
    equilibrium_state,
    extent_bounds,
    reaction_quotient,
    shift_direction,
)
from habersim.integrator import ReactionIntegrator
from habersim.kinetics import calculate_rate, rate_constants
from habersim.models import ReactionState


class TestEquilibrium(unittest.TestCase):
    def test_constant_decreases_with_temperature(self):
        self.assertGreater(equilibrium_constant(1.0), equilibrium_constant(2.0))
        self.assertGreater(equilibrium_constant(2.0), equilibrium_constant(3.0))

    def test_constant_matches_rate_constant_ratio(self):
        k_fwd, k_rev = rate_constants(1.0)
        self.assertAlmostEqual(equilibrium_constant(1.0), k_fwd / k_rev)

    def test_constant_at_very_low_temperature(self):
        # The reverse constant underflows to zero long before the ratio overflows.
        self.assertGreater(equilibrium_constant(0.01), 0.0)
        self.assertEqual(equilibrium_constant(0.001), math.inf)

    def test_quotient(self):
        state = ReactionState(1.0, 4.0, 2.0, 1.0)
        self.assertAlmostEqual(reaction_quotient(state), 2.0 ** 1.8 / 4.0 ** 2.5)
        self.assertEqual(reaction_quotient(ReactionState(0.0, 1.0, 1.0, 1.0)), math.inf)
        self.assertTrue(math.isnan(reaction_quotient(ReactionState(0.0, 0.0, 0.0, 1.0))))

    def test_shift_direction(self):
        self.assertEqual(shift_direction(ReactionState(1.5, 1.5, 0.0, 1.0)), FORWARD)
        self.assertEqual(shift_direction(ReactionState(0.0, 0.0, 1.0, 1.0)), REVERSE)
        self.assertEqual(shift_direction(ReactionState(0.0, 0.0, 0.0, 1.0)), AT_EQUILIBRIUM)

    def test_extent_bounds(self):
        lower, upper = extent_bounds(ReactionState(1.0, 1.5, 0.8, 1.0))
        self.assertAlmostEqual(lower, -0.4)
        self.assertAlmostEqual(upper, 0.5)

    def test_equilibrium_state_has_zero_net_rate(self):
        start = ReactionState(1.5, 1.5, 0.5, 1.0)
        final = equilibrium_state(start)
        self.assertLess(abs(calculate_rate(final.n2, final.h2, final.nh3, 1.0)), 1e-8)
        # Atom balances are preserved along the reaction path.
        self.assertAlmostEqual(2 * final.n2 + final.nh3, 2 * 1.5 + 0.5)
        self.assertAlmostEqual(2 * final.h2 + 3 * final.nh3, 2 * 1.5 + 3 * 0.5)

    def test_integrator_settles_at_predicted_equilibrium(self):
        start = ReactionState(1.5, 1.5, 0.5, 1.0)
        predicted = equilibrium_state(start)
        integrator = ReactionIntegrator(start)
        final = integrator.run(300)
        self.assertAlmostEqual(final.nh3, predicted.nh3, places=6)
        self.assertAlmostEqual(final.n2, predicted.n2, places=6)

    def test_heating_lowers_equilibrium_ammonia(self):
        cold = equilibrium_state(ReactionState(1.5, 1.5, 0.5, 1.0))
        hot = equilibrium_state(ReactionState(1.5, 1.5, 0.5, 3.0))
        self.assertLess(hot.nh3, cold.nh3)

    def test_degenerate_states(self):
        self.assertEqual(equilibrium_extent(ReactionState(0.0, 0.0, 0.0, 1.0)), 0.0)
        # No ammonia and no nitrogen: nothing can react.
        self.assertEqual(equilibrium_extent(ReactionState(0.0, 2.0, 0.0, 1.0)), 0.0)


if __name__ == '__main__':
    unittest.main()
