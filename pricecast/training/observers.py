"""
Training Progress Observers
Receive ProgressEvent values from the Trainer at batch and epoch boundaries.
Observers run synchronously inside the fit loop; the Trainer swallows
anything they raise.
"""
import logging
from pathlib import Path
from typing import Optional, Sequence

from ..contracts.training import ProgressEvent

logger = logging.getLogger(__name__)


class ProgressObserver:
    """No-op base. Override the hooks you need."""

    def on_batch_begin(self, event: ProgressEvent):
        pass

    def on_epoch_begin(self, event: ProgressEvent):
        pass

    def on_epoch_end(self, event: ProgressEvent):
        pass


class CompositeObserver(ProgressObserver):
    """Fans events out to several observers. A failing child does not stop the others."""

    def __init__(self, observers: Sequence[ProgressObserver]):
        self.observers = list(observers)

    def _dispatch(self, hook: str, event: ProgressEvent):
        for observer in self.observers:
            try:
                getattr(observer, hook)(event)
            except Exception:
                logger.warning(f"{type(observer).__name__}.{hook} failed", exc_info=True)

    def on_batch_begin(self, event):
        self._dispatch('on_batch_begin', event)

    def on_epoch_begin(self, event):
        self._dispatch('on_epoch_begin', event)

    def on_epoch_end(self, event):
        self._dispatch('on_epoch_end', event)


class LoggingProgressObserver(ProgressObserver):
    """Logs one line per epoch, plus every ``log_every`` batches at DEBUG."""

    def __init__(self, log: Optional[logging.Logger] = None, log_every: int = 0):
        self.log = log or logger
        self.log_every = log_every

    def on_batch_begin(self, event):
        if self.log_every and event.batch % self.log_every == 0:
            self.log.debug(f"Epoch {event.epoch}/{event.epochs}, Batch {event.batch}/{event.batches}")

    def on_epoch_end(self, event):
        width = len(str(event.epochs))
        self.log.info(f"Epoch #{event.epoch:0{width}d}/{event.epochs} | "
                      f"Batch {event.batches}/{event.batches} | Loss: {event.loss:.6f}")


class TensorBoardObserver(ProgressObserver):
    """Writes the per-epoch training loss to TensorBoard."""

    def __init__(self, log_dir: str):
        from torch.utils.tensorboard import SummaryWriter

        Path(log_dir).mkdir(parents=True, exist_ok=True)
        self.writer = SummaryWriter(log_dir)
        logger.info(f"TensorBoard logging to: {log_dir}")

    def on_epoch_end(self, event):
        self.writer.add_scalar('Loss/train_epoch', event.loss, event.epoch)

    def close(self):
        self.writer.close()
