import unittest

from petrikit.Net import ArcDescriptor as Arc
from petrikit.Net import Marking, PetriNet, revert, revert_all, revert_set


def build_switch() -> PetriNet:
    return PetriNet(
        places=["on", "off"],
        transitions=["switchOn", "switchOff"],
        arcs=[
            Arc.pre("on", "switchOff", 1),
            Arc.post("switchOff", "off", 1),
            Arc.pre("off", "switchOn", 1),
            Arc.post("switchOn", "on", 1),
        ],
    )


def build_mixed() -> PetriNet:
    """
    One transition ``t`` touching each kind of place:

    - ``both``: pre 2, post 3
    - ``pre_only``: pre 1
    - ``post_only``: post 2
    - ``idle``: no arc

    plus a transition ``noop`` without arcs. Every capacity is 5.
    """
    return PetriNet(
        ["both", "pre_only", "post_only", "idle"],
        ["t", "noop"],
        [
            Arc.pre("both", "t", 2),
            Arc.post("t", "both", 3),
            Arc.pre("pre_only", "t", 1),
            Arc.post("t", "post_only", 2),
        ],
        {"both": 5, "pre_only": 5, "post_only": 5, "idle": 5},
    )


def m_of(net: PetriNet, *counts: int) -> Marking:
    return net.marking(dict(zip(net.places, counts)))


class TestRevertSwitch(unittest.TestCase):
    def setUp(self) -> None:
        self.net = build_switch()

    def test_revert_switch_off(self):
        pred = self.net.revert({"on": 0, "off": 1}, "switchOff")
        self.assertEqual(pred.to_dict(), {"on": 1, "off": 0})

    def test_fire_then_revert(self):
        start = self.net.marking({"on": 1, "off": 0})
        after = self.net.fire("switchOff", start)
        self.assertEqual(self.net.revert(after, "switchOff"), start)

    def test_revert_all(self):
        m = self.net.marking({"on": 0, "off": 1})
        self.assertEqual(
            self.net.revert_all(m),
            {
                self.net.marking({"on": 1, "off": 0}),
                self.net.marking({"on": 0, "off": 2}),
            },
        )

    def test_revert_all_is_union_of_single_reverts(self):
        for m in (m_of(self.net, 0, 1), m_of(self.net, 3, 4), m_of(self.net, 20, 0)):
            singles = {revert(self.net, m, t) for t in self.net.transitions}
            singles.discard(None)
            self.assertEqual(revert_all(self.net, m), singles)

    def test_revert_set_is_union(self):
        m1 = self.net.marking({"on": 0, "off": 1})
        m2 = self.net.marking({"on": 1, "off": 0})
        self.assertEqual(
            self.net.revert_set({m1, m2}),
            self.net.revert_all(m1) | self.net.revert_all(m2),
        )
        self.assertEqual(
            {mk.counts for mk in revert_set(self.net, [m1, m2])},
            {(1, 0), (0, 2), (2, 0), (0, 1)},
        )

    def test_revert_set_order_independent(self):
        ms = [m_of(self.net, 0, 1), m_of(self.net, 1, 0), m_of(self.net, 2, 2)]
        self.assertEqual(
            self.net.revert_set(ms), self.net.revert_set(list(reversed(ms)))
        )

    def test_revert_set_accepts_generators_and_empty(self):
        self.assertEqual(self.net.revert_set([]), set())
        gen = (m_of(self.net, 0, k) for k in range(2))
        self.assertEqual(len(self.net.revert_set(gen)), 3)

    def test_backward_frontier_grows_to_fixpoint(self):
        # reachability of {on: 1, off: 0} backwards, driven from the outside
        target = m_of(self.net, 1, 0)
        seen = {target}
        frontier = {target}
        rounds = 0
        while frontier and rounds < 1000:
            frontier = self.net.revert_set(frontier) - seen
            seen |= frontier
            rounds += 1
        self.assertFalse(frontier)
        self.assertIn(m_of(self.net, 0, 1), seen)


class TestRevertPolicy(unittest.TestCase):
    def setUp(self) -> None:
        self.net = build_mixed()

    def test_low_counts(self):
        # both: 1 <= 3 -> pre; pre_only: 0 + 1; post_only: 1 <= 2 -> 0; idle kept
        pred = self.net.revert(m_of(self.net, 1, 0, 1, 4), "t")
        self.assertEqual(pred.counts, (2, 1, 0, 4))

    def test_boundary_equal_to_post(self):
        pred = self.net.revert(m_of(self.net, 3, 0, 2, 0), "t")
        self.assertEqual(pred.counts, (2, 1, 0, 0))

    def test_high_counts(self):
        # both: 5 + 2 - 3; pre_only: 3 + 1; post_only: 4 - 2
        pred = self.net.revert(m_of(self.net, 5, 3, 4, 0), "t")
        self.assertEqual(pred.counts, (4, 4, 2, 0))

    def test_high_counts_refire(self):
        pred = self.net.revert(m_of(self.net, 5, 3, 4, 0), "t")
        self.assertEqual(self.net.fire("t", pred), m_of(self.net, 5, 3, 4, 0))

    def test_transition_without_arcs(self):
        m = m_of(self.net, 1, 2, 3, 4)
        self.assertEqual(self.net.revert(m, "noop"), m)

    def test_predecessor_not_clamped(self):
        pred = self.net.revert(m_of(self.net, 0, 5, 0, 0), "t")
        self.assertEqual(pred["pre_only"], 6)

    def test_capacity_guard_on_pre_place(self):
        over = self.net.revert(m_of(self.net, 0, 5, 0, 0), "t")
        self.assertIsNone(self.net.revert(over, "t"))
        # the transition without arcs still reverts it
        self.assertEqual(self.net.revert_all(over), {over})

    def test_no_guard_on_post_only_place(self):
        over = Marking.from_counts(self.net, [0, 0, 9, 0])
        pred = self.net.revert(over, "t")
        self.assertEqual(pred.counts, (2, 1, 7, 0))

    def test_input_not_mutated(self):
        m = m_of(self.net, 1, 0, 1, 4)
        self.net.revert_all(m)
        self.assertEqual(m.counts, (1, 0, 1, 4))

    def test_revert_all_vectorised_matches_single(self):
        for counts in [(0, 0, 0, 0), (5, 5, 5, 5), (3, 1, 2, 0), (4, 0, 3, 1)]:
            m = m_of(self.net, *counts)
            singles = {self.net.revert(m, t) for t in self.net.transitions} - {None}
            self.assertEqual(self.net.revert_all(m), singles)

    def test_revert_all_without_transitions(self):
        net = PetriNet(["p"], [])
        self.assertEqual(net.revert_all({"p": 1}), set())


if __name__ == "__main__":
    unittest.main()
