"""
Tests for the volume gate and its silence tracking.
"""

from fretboard.gate import VolumeGate

from conftest import sine_frame, silent_frame

THRESHOLD = 0.0275


class TestVolumeGate:
    def test_loud_frame_passes(self) -> None:
        gate = VolumeGate()
        reading = gate.process(sine_frame(220.0), THRESHOLD, now_ms=1000.0)
        assert reading.has_volume
        assert reading.amplitude > THRESHOLD
        assert gate.last_sound_ms == 1000.0
        assert not gate.silence

    def test_quiet_frame_is_blocked(self) -> None:
        gate = VolumeGate()
        reading = gate.process(sine_frame(220.0, amplitude=0.01), THRESHOLD, now_ms=0.0)
        assert not reading.has_volume
        assert reading.amplitude < THRESHOLD

    def test_short_gap_is_not_silence(self) -> None:
        gate = VolumeGate()
        gate.process(sine_frame(220.0), THRESHOLD, now_ms=1000.0)
        gate.process(silent_frame(), THRESHOLD, now_ms=1500.0)
        assert not gate.silence

    def test_long_gap_is_silence(self) -> None:
        gate = VolumeGate()
        gate.process(sine_frame(220.0), THRESHOLD, now_ms=1000.0)
        gate.process(silent_frame(), THRESHOLD, now_ms=1501.0)
        assert gate.silence

    def test_sound_clears_silence(self) -> None:
        gate = VolumeGate()
        gate.process(silent_frame(), THRESHOLD, now_ms=5000.0)
        assert gate.silence
        gate.process(sine_frame(220.0), THRESHOLD, now_ms=5030.0)
        assert not gate.silence

    def test_reset(self) -> None:
        gate = VolumeGate()
        gate.process(silent_frame(), THRESHOLD, now_ms=5000.0)
        gate.reset()
        assert not gate.silence
        assert gate.last_sound_ms == 0.0
