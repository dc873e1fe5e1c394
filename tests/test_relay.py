import unittest
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.relay import ConfirmationRelay
from domain.models import RecognitionSnapshot


def snap(reading="", confirmed="", pct=0.0):
    return RecognitionSnapshot(reading_label=reading, confirmed_label=confirmed, progress_pct=pct)


class TestConfirmationRelay(unittest.TestCase):
    def setUp(self):
        self.relay = ConfirmationRelay()
        self.snapshots = []
        self.confirmed = []
        self.relay.subscribe(self.snapshots.append)
        self.relay.subscribe_confirmed(self.confirmed.append)

    def test_every_publish_reaches_snapshot_listeners(self):
        for i in range(3):
            self.relay.publish(snap("3", pct=i * 10.0))
        self.assertEqual(len(self.snapshots), 3)
        self.assertEqual(self.relay.latest.progress_pct, 20.0)

    def test_confirmation_fires_once_per_distinct_value(self):
        self.relay.publish(snap("5"))
        self.relay.publish(snap("5", "5", 100.0))
        self.relay.publish(snap("5", "5", 100.0))
        self.relay.publish(snap("5", "5", 100.0))
        self.assertEqual(self.confirmed, ["5"])

    def test_new_value_fires_again(self):
        self.relay.publish(snap("5", "5", 100.0))
        self.relay.publish(snap("6", "5", 0.0))
        self.relay.publish(snap("6", "6", 100.0))
        self.assertEqual(self.confirmed, ["5", "6"])

    def test_clearing_rearms_same_value(self):
        self.relay.publish(snap("5", "5", 100.0))
        self.relay.publish(snap())              # no hand: hard reset
        self.relay.publish(snap("5", "5", 100.0))
        self.assertEqual(self.confirmed, ["5", "5"])

    def test_empty_confirmation_never_fires(self):
        self.relay.publish(snap("5"))
        self.relay.publish(snap())
        self.assertEqual(self.confirmed, [])

    def test_failing_listener_does_not_block_others(self):
        def broken(_):
            raise RuntimeError("boom")

        relay = ConfirmationRelay()
        received = []
        relay.subscribe_confirmed(broken)
        relay.subscribe_confirmed(received.append)

        with self.assertLogs("core.relay", level="ERROR"):
            relay.publish(snap("2", "2", 100.0))
        self.assertEqual(received, ["2"])

    def test_unsubscribe(self):
        relay = ConfirmationRelay()
        received = []
        unsubscribe = relay.subscribe(received.append)
        relay.publish(snap("1"))
        unsubscribe()
        relay.publish(snap("1"))
        self.assertEqual(len(received), 1)

    def test_latest_defaults_to_empty_snapshot(self):
        latest = ConfirmationRelay().latest
        self.assertEqual(latest.reading_label, "")
        self.assertEqual(latest.confirmed_label, "")
        self.assertEqual(latest.progress_pct, 0.0)


if __name__ == '__main__':
    unittest.main()
