"""
Tests for the microphone frame buffer. The input stream itself is not opened.
"""

import numpy as np
import pytest

try:
    from fretboard.audio import MicrophoneSource
except OSError:  # PortAudio shared library missing
    pytest.skip("PortAudio is not available", allow_module_level=True)

from fretboard.config import AudioConfig


class TestMicrophoneSource:
    def make_source(self) -> MicrophoneSource:
        return MicrophoneSource(AudioConfig(frame_size=8, block_size=4))

    def test_starts_silent(self) -> None:
        source = self.make_source()
        assert source.sample_rate == 44100.0
        np.testing.assert_array_equal(source.get_frame(), np.zeros(8, dtype=np.float32))

    def test_blocks_scroll_through_frame(self) -> None:
        source = self.make_source()
        source.push(np.arange(1, 5, dtype=np.float32))
        source.push(np.arange(5, 9, dtype=np.float32))
        source.push(np.arange(9, 13, dtype=np.float32))
        np.testing.assert_array_equal(source.get_frame(), np.arange(5, 13, dtype=np.float32))

    def test_oversized_block_keeps_newest_samples(self) -> None:
        source = self.make_source()
        source.push(np.arange(20, dtype=np.float32))
        np.testing.assert_array_equal(source.get_frame(), np.arange(12, 20, dtype=np.float32))

    def test_get_frame_returns_copy(self) -> None:
        source = self.make_source()
        frame = source.get_frame()
        frame[:] = 1.0
        assert not source.get_frame().any()

    def test_close_without_open_is_noop(self) -> None:
        self.make_source().close()
