import unittest

from game import FrameClock, cancel_all


class TestFrameClock(unittest.TestCase):
    def test_given_interval_when_advancing_then_fires_once_per_period(self):
        clock = FrameClock()
        fired = []
        clock.set_interval(2000, lambda: fired.append(clock.now_ms))
        clock.advance(4500)
        self.assertEqual(fired, [2000.0, 4000.0])
        self.assertEqual(clock.now_ms, 4500.0)
        clock.advance(1500)
        self.assertEqual(fired, [2000.0, 4000.0, 6000.0])

    def test_given_two_intervals_when_advancing_then_fire_in_due_order(self):
        clock = FrameClock()
        order = []
        clock.set_interval(300, lambda: order.append("a"))
        clock.set_interval(200, lambda: order.append("b"))
        clock.advance(600)
        # ties at 600 go to the earlier-registered timer
        self.assertEqual(order, ["b", "a", "b", "a", "b"])

    def test_given_cancelled_interval_when_advancing_then_never_fires(self):
        clock = FrameClock()
        fired = []
        h = clock.set_interval(100, lambda: fired.append(1))
        h.cancel()
        h.cancel()  # idempotent
        clock.advance(1000)
        self.assertEqual(fired, [])
        self.assertFalse(h.active)
        self.assertEqual(clock.active_intervals, 0)

    def test_given_interval_cancelled_by_another_when_same_window_then_stops(self):
        clock = FrameClock()
        fired = []
        victim = clock.set_interval(100, lambda: fired.append("victim"))
        clock.set_interval(150, victim.cancel)
        clock.advance(1000)
        self.assertEqual(fired, ["victim"])

    def test_given_frame_request_when_advancing_then_runs_exactly_once(self):
        clock = FrameClock()
        ran = []
        clock.request_frame(lambda: ran.append(clock.now_ms))
        self.assertEqual(clock.pending_frames, 1)
        self.assertEqual(clock.advance(16), 1)
        self.assertEqual(clock.advance(16), 0)
        self.assertEqual(ran, [16.0])

    def test_given_frame_requested_inside_frame_when_advancing_then_waits_for_next_advance(self):
        clock = FrameClock()
        count = []

        def step():
            count.append(1)
            clock.request_frame(step)

        clock.request_frame(step)
        clock.advance(0)
        self.assertEqual(len(count), 1)
        clock.advance(0)
        self.assertEqual(len(count), 2)
        self.assertEqual(clock.pending_frames, 1)

    def test_given_intervals_and_frame_when_advancing_then_timers_run_before_frame(self):
        clock = FrameClock()
        order = []
        clock.set_interval(10, lambda: order.append("timer"))
        clock.request_frame(lambda: order.append("frame"))
        clock.advance(10)
        self.assertEqual(order, ["timer", "frame"])

    def test_given_cancelled_frame_when_advancing_then_not_run(self):
        clock = FrameClock()
        ran = []
        h = clock.request_frame(lambda: ran.append(1))
        cancel_all(h, None)
        self.assertEqual(clock.advance(16), 0)
        self.assertEqual(ran, [])

    def test_given_bad_arguments_then_value_error(self):
        clock = FrameClock()
        with self.assertRaises(ValueError):
            clock.set_interval(0, lambda: None)
        with self.assertRaises(ValueError):
            clock.advance(-1)


if __name__ == '__main__':
    unittest.main()
