import unittest

from petrikit.Net import ArcDescriptor as Arc
from petrikit.Net import PetriNet, exact_effect, minimal_enabling, zero
from petrikit.Net.exceptions import UndeclaredEntityError


def build_weighted() -> PetriNet:
    """2a + b >> t >> 3c, plus an unconnected place d and a source transition."""
    return PetriNet(
        ["a", "b", "c", "d"],
        ["t", "src"],
        [
            Arc.pre("a", "t", 2),
            Arc.pre("b", "t", 1),
            Arc.post("t", "c", 3),
            Arc.post("src", "a", 1),
        ],
    )


class TestCanonicalMarkings(unittest.TestCase):
    def setUp(self) -> None:
        self.net = build_weighted()

    def test_zero(self):
        z = self.net.zero()
        self.assertEqual(z.to_dict(), {"a": 0, "b": 0, "c": 0, "d": 0})
        self.assertEqual(zero(self.net), z)

    def test_minimal_enabling(self):
        m = self.net.minimal_enabling("t")
        self.assertEqual(m.to_dict(), {"a": 2, "b": 1, "c": 0, "d": 0})
        self.assertEqual(minimal_enabling(self.net, "src"), self.net.zero())

    def test_exact_effect(self):
        m = self.net.exact_effect("t")
        self.assertEqual(m.to_dict(), {"a": 0, "b": 0, "c": 3, "d": 0})
        self.assertEqual(exact_effect(self.net, "src")["a"], 1)

    def test_minimal_enabling_fires(self):
        for t in self.net.transitions:
            m = self.net.minimal_enabling(t)
            self.assertTrue(self.net.is_enabled(t, m))
            self.assertIsNotNone(self.net.fire(t, m))

    def test_minimal_enabling_fire_gives_exact_effect_without_loops(self):
        m = self.net.fire("t", self.net.minimal_enabling("t"))
        self.assertEqual(m, self.net.exact_effect("t"))

    def test_unknown_transition(self):
        with self.assertRaises(UndeclaredEntityError):
            self.net.minimal_enabling("nope")
        with self.assertRaises(UndeclaredEntityError):
            self.net.exact_effect("nope")


if __name__ == "__main__":
    unittest.main()
