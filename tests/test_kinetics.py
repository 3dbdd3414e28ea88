import math
import unittest

from habersim import constants
from habersim.kinetics import (
    AMMONIA_KINETICS,
    ArrheniusKinetics,
    PowerLawKinetics,
    ReversibleKinetics,
    calculate_rate,
    rate_constants,
)
from habersim.models import MoleculeType

N2, H2, NH3 = MoleculeType.N2, MoleculeType.H2, MoleculeType.NH3


class TestKinetics(unittest.TestCase):
    def test_power_law(self):
        # r = k * C_A^1
        arr = ArrheniusKinetics(pre_exponential=10.0, activation_energy=0.0)
        kin = PowerLawKinetics(arrhenius=arr, exponents={N2: 1.0})

        rate = kin.rate({N2: 2.0}, 1.0)
        self.assertAlmostEqual(rate, 20.0)

    def test_arrhenius_scaled_units(self):
        arr = ArrheniusKinetics(pre_exponential=20.0, activation_energy=2.0)
        self.assertAlmostEqual(arr.rate_constant(1.0), 20.0 * math.exp(-2.0))
        self.assertAlmostEqual(arr.rate_constant(2.0), 20.0 * math.exp(-1.0))

    def test_negative_bases_are_clamped(self):
        kin = PowerLawKinetics(ArrheniusKinetics(1.0, 0.0), exponents={H2: 2.5})
        rate = kin.rate({H2: -1e-12}, 1.0)
        self.assertEqual(rate, 0.0)
        self.assertFalse(math.isnan(calculate_rate(-1e-9, -1e-9, -1e-9, 1.2)))

    def test_reversible_is_forward_minus_reverse(self):
        forward = PowerLawKinetics(ArrheniusKinetics(2.0, 0.0), exponents={N2: 1.0})
        reverse = PowerLawKinetics(ArrheniusKinetics(1.0, 0.0), exponents={NH3: 1.0})
        kin = ReversibleKinetics(forward, reverse)
        self.assertAlmostEqual(kin.rate({N2: 1.0, NH3: 3.0}, 1.0), -1.0)

    def test_default_rate_law(self):
        n2, h2, nh3, temperature = 1.5, 1.5, 0.5, 1.2
        k_fwd = constants.K_FWD_PRE * math.exp(-constants.EA_FWD / temperature)
        k_rev = constants.K_REV_PRE * math.exp(-constants.EA_REV / temperature)
        expected = k_fwd * n2 * h2 ** 2.5 - k_rev * nh3 ** 1.8
        self.assertAlmostEqual(calculate_rate(n2, h2, nh3, temperature), expected)

    def test_rate_is_deterministic(self):
        values = {calculate_rate(1.2, 0.7, 0.9, 1.7) for _ in range(10)}
        self.assertEqual(len(values), 1)

    def test_reverse_constant_grows_faster_with_temperature(self):
        self.assertGreater(constants.EA_REV, constants.EA_FWD)
        k_fwd_low, k_rev_low = rate_constants(1.0)
        k_fwd_high, k_rev_high = rate_constants(3.0)
        self.assertGreater(k_rev_high / k_rev_low, k_fwd_high / k_fwd_low)
        self.assertGreater(k_rev_high, k_fwd_high)

    def test_thermal_shift_toward_reactants(self):
        # Ammonia-rich composition, concentrations held fixed.
        cold = calculate_rate(0.5, 0.5, 2.0, 1.0)
        hot = calculate_rate(0.5, 0.5, 2.0, 3.0)
        self.assertLess(hot, cold)
        self.assertLess(hot, 0.0)

    def test_mapping_interface_matches_scalar_function(self):
        conc = {N2: 0.8, H2: 2.1, NH3: 1.1}
        self.assertEqual(
            AMMONIA_KINETICS.rate(conc, 2.0), calculate_rate(0.8, 2.1, 1.1, 2.0)
        )


if __name__ == '__main__':
    unittest.main()
