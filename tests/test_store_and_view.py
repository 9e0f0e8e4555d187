import threading
import unittest

from game import CommandPool, GameConfig, GameSession, session_to_json
from shellfall_core.store import SessionStore, UnknownSessionError

NEVER = 10 ** 9


class FakeTime:
    def __init__(self):
        self.t = 1000.0

    def __call__(self):
        return self.t


class TestSessionStore(unittest.TestCase):
    def test_given_created_session_when_used_then_same_object_yielded(self):
        store = SessionStore()
        s = GameSession(seed=1)
        sid = store.create(s)
        self.assertIn(sid, store)
        self.assertIs(store.get(sid), s)
        with store.use(sid) as got:
            self.assertIs(got, s)

    def test_given_unknown_id_when_used_then_unknown_session_error(self):
        store = SessionStore()
        self.assertIsNone(store.get("nope"))
        with self.assertRaises(UnknownSessionError):
            with store.use("nope"):
                pass

    def test_given_key_error_inside_use_body_then_not_reported_as_unknown_session(self):
        store = SessionStore()
        sid = store.create(GameSession(seed=1))
        with self.assertRaises(KeyError) as ctx:
            with store.use(sid):
                {}["missing"]
        self.assertNotIsInstance(ctx.exception, UnknownSessionError)
        with store.use(sid):
            pass  # lock released after the failure

    def test_given_idle_sessions_when_ttl_passes_then_pruned_on_next_create(self):
        clock = FakeTime()
        store = SessionStore(ttl_sec=60, now=clock)
        old = store.create(GameSession(seed=1))
        clock.t += 30
        kept = store.create(GameSession(seed=2))
        clock.t += 45
        with store.use(kept):
            pass
        store.create(GameSession(seed=3))
        self.assertNotIn(old, store)
        self.assertIn(kept, store)
        self.assertEqual(len(store), 2)

    def test_given_discard_then_session_gone(self):
        store = SessionStore()
        sid = store.create(GameSession(seed=1))
        self.assertTrue(store.discard(sid))
        self.assertFalse(store.discard(sid))

    def test_given_concurrent_inputs_when_using_session_then_score_consistent(self):
        store = SessionStore()
        cfg = GameConfig(spawn_interval_ms=NEVER, difficulty_interval_ms=NEVER)
        s = GameSession(config=cfg, pool=CommandPool(["top"]))
        s.start()
        for _ in range(40):
            s.spawn_tile()
        sid = store.create(s)

        def worker():
            for _ in range(10):
                with store.use(sid) as sess:
                    sess.handle_input("top")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(s.score, 40)
        self.assertEqual(s.tiles, [])


class TestSessionView(unittest.TestCase):
    def test_given_running_session_when_serialized_then_page_fields_present(self):
        s = GameSession(seed=5, config=GameConfig(spawn_interval_ms=1000, difficulty_interval_ms=NEVER))
        s.start()
        s.tick(1000)
        view = session_to_json(s)
        self.assertEqual(view["phase"], "running")
        self.assertTrue(view["running"])
        self.assertEqual(view["score"], 0)
        self.assertEqual(view["scoreText"], "0")
        self.assertEqual(view["frame"], 1)
        self.assertEqual(view["clockMs"], 1000.0)
        self.assertEqual(len(view["tiles"]), 1)
        self.assertEqual(view["canvas"], {"width": 800, "height": 600})
        self.assertEqual([o["op"] for o in view["draw"]], ["clear", "rect", "text"])
        self.assertEqual(view["input"], {"value": "", "enabled": True, "focused": True})

    def test_given_drained_view_when_serialized_again_then_ops_not_repeated(self):
        s = GameSession(seed=5)
        s.start()
        s.tick(16)
        self.assertTrue(session_to_json(s)["draw"])
        self.assertEqual(session_to_json(s)["draw"], [])
        s.tick(16)
        self.assertTrue(session_to_json(s, drain=False)["draw"])
        self.assertTrue(session_to_json(s, drain=False)["draw"])


if __name__ == '__main__':
    unittest.main()
