"""
StateNotifier - subscription, fan-out and listener isolation.
"""

from unittest.mock import MagicMock, patch

from zervos.core.events import StateNotifier


class TestStateNotifier:

    def test_subscribe_and_unsubscribe(self):
        notifier = StateNotifier("test")
        listener = MagicMock()
        unsubscribe = notifier.subscribe(listener)

        event = notifier.notify("changed", {"n": 1})
        unsubscribe()
        unsubscribe()
        notifier.notify("changed")

        listener.assert_called_once_with(event)
        assert event.to_dict()["component"] == "test"
        assert notifier.listener_count == 0

    @patch('zervos.core.events.logger')
    def test_failing_listener_is_isolated(self, mock_logger):
        notifier = StateNotifier("test")
        broken = MagicMock(side_effect=RuntimeError("listener bug"))
        healthy = MagicMock()
        notifier.subscribe(broken)
        notifier.subscribe(healthy)

        notifier.notify("changed")

        healthy.assert_called_once()
        mock_logger.error.assert_called_once()
