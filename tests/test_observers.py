"""
Tests for the progress observers
"""
import logging
import unittest
from unittest.mock import MagicMock, patch

from pydantic import ValidationError

from pricecast.contracts.training import ProgressEvent
from pricecast.training.observers import (
    CompositeObserver,
    LoggingProgressObserver,
    ProgressObserver,
    TensorBoardObserver,
)


class TestObservers(unittest.TestCase):

    def test_base_observer_is_a_no_op(self):
        observer = ProgressObserver()
        event = ProgressEvent(epoch=1, epochs=2, batch=1, batches=3)
        observer.on_epoch_begin(event)
        observer.on_batch_begin(event)
        observer.on_epoch_end(event)

    def test_logging_observer_epoch_line(self):
        log = logging.getLogger("test.progress")
        observer = LoggingProgressObserver(log)

        with self.assertLogs("test.progress", level="INFO") as captured:
            observer.on_epoch_end(ProgressEvent(epoch=7, epochs=100, batch=5, batches=5, loss=0.25))

        self.assertIn("Epoch #007/100", captured.output[0])
        self.assertIn("Loss: 0.250000", captured.output[0])

    def test_composite_forwards_to_all(self):
        first, second = MagicMock(), MagicMock()
        composite = CompositeObserver([first, second])
        event = ProgressEvent(epoch=1, epochs=1, batch=1, batches=1)

        composite.on_batch_begin(event)
        composite.on_epoch_end(event)

        first.on_batch_begin.assert_called_once_with(event)
        second.on_epoch_end.assert_called_once_with(event)

    def test_composite_isolates_failing_observer(self):
        class Broken(ProgressObserver):
            def on_epoch_end(self, event):
                raise RuntimeError("display broke")

        second = MagicMock()
        composite = CompositeObserver([Broken(), second])

        with self.assertLogs('pricecast.training.observers', level='WARNING'):
            for epoch in range(1, 4):
                composite.on_epoch_end(ProgressEvent(epoch=epoch, epochs=3, batch=1, batches=1, loss=0.1))

        self.assertEqual(second.on_epoch_end.call_count, 3)

    def test_progress_event_is_immutable(self):
        event = ProgressEvent(epoch=1, epochs=2, batch=0, batches=3)
        with self.assertRaises(ValidationError):
            event.epoch = 2

    @patch('torch.utils.tensorboard.SummaryWriter')
    def test_tensorboard_observer(self, writer_cls):
        with patch('pricecast.training.observers.Path.mkdir'):
            observer = TensorBoardObserver("logs/test")

        observer.on_epoch_end(ProgressEvent(epoch=3, epochs=5, batch=2, batches=2, loss=0.5))
        observer.close()

        writer = writer_cls.return_value
        writer.add_scalar.assert_called_once_with('Loss/train_epoch', 0.5, 3)
        writer.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
