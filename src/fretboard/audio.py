from __future__ import annotations

import logging
import threading
from typing import Optional, Union

import numpy as np
import sounddevice as sd

from .config import AudioConfig

logger = logging.getLogger(__name__)


class MicrophoneSource:
    """Keeps the most recent ``frame_size`` samples from the input device.

    ``get_frame`` returns a copy of that window; blocks that arrive between
    two reads simply scroll through it.
    """

    def __init__(self, config: AudioConfig, device: Optional[Union[int, str]] = None):
        self.config = config
        self.device = device
        self.sample_rate = float(config.sample_rate)
        self._buffer = np.zeros(config.frame_size, dtype=np.float32)
        self._lock = threading.Lock()
        self._stream: Optional[sd.InputStream] = None

    def open(self) -> None:
        if self._stream is not None:
            return
        stream = sd.InputStream(
            channels=self.config.channels,
            samplerate=self.config.sample_rate,
            blocksize=self.config.block_size,
            device=self.device,
            dtype="float32",
            callback=self._callback,
        )
        stream.start()
        self._stream = stream
        logger.info(
            "Microphone open: device=%s, %d Hz, block %d",
            self.device if self.device is not None else "default",
            self.config.sample_rate,
            self.config.block_size,
        )

    def close(self) -> None:
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None
        with self._lock:
            self._buffer[:] = 0.0
        logger.info("Microphone closed")

    def __enter__(self) -> "MicrophoneSource":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_frame(self) -> np.ndarray:
        with self._lock:
            return self._buffer.copy()

    def _callback(self, indata: np.ndarray, frames: int, time_info, status) -> None:
        if status:
            logger.debug("Input stream status: %s", status)
        self.push(indata[:, 0])

    def push(self, block: np.ndarray) -> None:
        size = self._buffer.size
        block = block[-size:]
        n = block.size
        with self._lock:
            self._buffer[: size - n] = self._buffer[n:]
            self._buffer[size - n :] = block
