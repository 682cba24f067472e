from __future__ import annotations

import argparse
import logging
import threading
from typing import List, Optional

import sounddevice as sd

from .audio import MicrophoneSource
from .config import AudioConfig, ChallengeConfig, DetectionConfig
from .practice import PracticeRunner, run_listener
from .scoring import PracticeSummary, summarize
from .session import DetectionSession
from .strings import GUITAR_STRINGS
from .thresholds import sensitivity_label

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Guitar fretboard note trainer")
    parser.add_argument("--sensitivity", type=int, default=50, help="Detection sensitivity, 0-100")
    parser.add_argument("--extended-range", action="store_true", help="Accept pitches up to 2000 Hz")
    parser.add_argument("--max-errors", type=int, default=3, help="Wrong notes allowed per challenge")
    parser.add_argument("--detector", action="store_true", help="Only show detected notes, no challenges")
    parser.add_argument(
        "--strings",
        type=int,
        nargs="*",
        default=list(GUITAR_STRINGS),
        help="Strings to practice (1 = high E, 6 = low E)",
    )
    parser.add_argument("--rounds", type=int, default=0, help="Stop after this many challenges (0 = no limit)")
    parser.add_argument("--device", help="Audio input device (index or name)")
    parser.add_argument("--samplerate", type=int, default=44100, help="Sample rate")
    parser.add_argument("--blocksize", type=int, default=1024, help="Audio block size")
    parser.add_argument("--framesize", type=int, default=2048, help="Samples analysed per tick")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    args = parser.parse_args(argv)
    if args.max_errors < 1:
        parser.error("--max-errors must be at least 1")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    audio_cfg = AudioConfig(sample_rate=args.samplerate, block_size=args.blocksize, frame_size=args.framesize)
    detection_cfg = DetectionConfig(
        sensitivity=args.sensitivity,
        extended_range=args.extended_range,
        detector_mode=args.detector,
    )
    challenge_cfg = ChallengeConfig(max_errors=args.max_errors, selected_strings=tuple(args.strings))

    device = int(args.device) if args.device and args.device.isdigit() else args.device
    source = MicrophoneSource(audio_cfg, device=device)
    session = DetectionSession(
        source.sample_rate,
        detection=detection_cfg,
        challenge=challenge_cfg,
        audio=audio_cfg,
    )
    stop = threading.Event()
    runner = PracticeRunner(session, challenge_cfg, stop, rounds=args.rounds)

    print(f"Sensitivity: {args.sensitivity} ({sensitivity_label(args.sensitivity)})")
    if args.detector:
        print("Detector mode: play any note. Ctrl+C to exit.")
    else:
        runner.schedule()

    try:
        with source:
            run_listener(source, session, runner.handle, stop, audio_cfg.poll_interval_s)
    except KeyboardInterrupt:
        stop.set()
    except sd.PortAudioError as exc:
        logger.error("Audio error: %s", exc)
        print("Make sure your microphone is connected and accessible.")
        return 1

    if not args.detector:
        _print_final(summarize(runner.results))
    return 0


def _print_final(summary: PracticeSummary) -> None:
    print("")
    print("Final result:")
    print(f"  Challenges: {summary.completed}/{summary.attempts} completed")
    print(f"  Accuracy:   {summary.accuracy:05.1f}%")
    print(f"  Errors:     {summary.total_errors}")
    if summary.average_time_ms is not None:
        print(f"  Avg time:   {summary.average_time_ms / 1000.0:.2f}s")


if __name__ == "__main__":
    raise SystemExit(main())
