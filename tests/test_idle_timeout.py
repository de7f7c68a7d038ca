"""Idle timeout monitor tests."""
import unittest

from app.services.idle_timeout import MS_PER_MINUTE, IdleTimeoutMonitor
from tests.fakes import FakeScheduler


class IdleTimeoutMonitorTests(unittest.TestCase):
    def setUp(self):
        self.scheduler = FakeScheduler()
        self.expired = []
        self.monitor = IdleTimeoutMonitor(self.scheduler, self.expired.append)

    def test_no_timeout_configured(self):
        self.assertFalse(self.monitor.start("a", None))
        self.assertFalse(self.monitor.start("a", 0))
        self.assertEqual(self.monitor.pending(), frozenset())

    def test_fires_once(self):
        self.assertTrue(self.monitor.start("a", 2))
        self.scheduler.advance(2 * MS_PER_MINUTE)
        self.scheduler.advance(10 * MS_PER_MINUTE)
        self.assertEqual(self.expired, ["a"])

    def test_restart_resets_countdown(self):
        self.monitor.start("a", 2)
        self.scheduler.advance(MS_PER_MINUTE)
        self.monitor.start("a", 2)
        self.scheduler.advance(MS_PER_MINUTE + 1)
        self.assertEqual(self.expired, [])
        self.scheduler.advance(MS_PER_MINUTE)
        self.assertEqual(self.expired, ["a"])

    def test_stop_and_dispose(self):
        self.monitor.start("a", 1)
        self.monitor.start("b", 1)
        self.monitor.stop("a")
        self.monitor.dispose()
        self.scheduler.advance(5 * MS_PER_MINUTE)
        self.assertEqual(self.expired, [])


if __name__ == "__main__":
    unittest.main()
