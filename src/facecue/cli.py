"""CLI for facecue: ``facecue run`` and ``facecue config``."""

import argparse
import logging
import sys
import threading

logger = logging.getLogger(__name__)

_QUIT_KEYS = (27, ord("q"))  # ESC, q


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="facecue",
        description="Heuristic face pose/expression tracker for avatar control",
    )
    sub = parser.add_subparsers(dest="command")

    # facecue run
    run_p = sub.add_parser("run", help="Track a face from a camera or video file")
    run_p.add_argument(
        "--input", "-i",
        required=True,
        help="Input source: file path or camera index (int)",
    )
    run_p.add_argument(
        "--config", "-c",
        default=None,
        help="YAML configuration file",
    )
    run_p.add_argument(
        "--max-frames",
        type=int,
        default=None,
        help="Stop after N emitted results",
    )
    run_p.add_argument(
        "--viz",
        choices=["text", "live"],
        default="text",
        help="Visualization mode (default: text)",
    )
    run_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # facecue config
    cfg_p = sub.add_parser("config", help="Print the effective configuration")
    cfg_p.add_argument(
        "--config", "-c",
        default=None,
        help="YAML configuration file to merge over the defaults",
    )

    return parser


def _resolve_input(input_str: str):
    """Resolve --input to a source path or camera index."""
    try:
        return int(input_str)
    except ValueError:
        return input_str


def _load_config(path):
    from facecue.config import TrackerConfig

    if path is None:
        return TrackerConfig()
    return TrackerConfig.from_yaml(path)


def _format_result(result) -> str:
    if not result.detected:
        return f"  frame={result.frame_id} no face"
    return (
        f"  frame={result.frame_id} conf={result.confidence:.2f} "
        f"yaw={result.y_angle:+.1f} pitch={result.x_angle:+.1f} "
        f"size={result.face_size:.0f} mouth={'open' if result.mouth_open else 'closed'} "
        f"eyes={'open' if result.eyes_open.left else 'closed'}"
    )


def _cmd_run(args: argparse.Namespace) -> None:
    """Handle ``facecue run``."""
    from facecue.scheduler import FrameScheduler
    from facecue.source import VideoCaptureSource

    try:
        config = _load_config(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    source = VideoCaptureSource(_resolve_input(args.input))
    if not source.is_opened:
        print(f"Error: cannot open input {args.input!r}", file=sys.stderr)
        sys.exit(1)

    done = threading.Event()
    latest = {"result": None}
    emitted = 0

    def on_result(result):
        nonlocal emitted
        latest["result"] = result
        emitted += 1
        if args.viz == "text":
            print(_format_result(result))
        if args.max_frames and emitted >= args.max_frames:
            done.set()

    scheduler = FrameScheduler(source, config=config, on_result=on_result)
    try:
        with scheduler:
            if args.viz == "live":
                _run_live(source, latest, done)
            else:
                while not done.wait(0.1):
                    if source.exhausted:
                        break
    except KeyboardInterrupt:
        pass
    finally:
        source.release()

    stats = scheduler.stats.to_dict()
    print(
        f"\nDone: {stats['frames_processed']} frames, "
        f"{stats['frames_detected']} detections, "
        f"{stats['frames_failed']} failed, "
        f"avg pass {stats['pass_time_ms']:.1f} ms"
    )


def _run_live(source, latest, done) -> None:
    """Show the overlay window until ESC/q, max-frames or end of input."""
    import cv2

    from facecue.overlay import draw_detection

    try:
        while not done.is_set() and not source.exhausted:
            frame = source.last_frame
            result = latest["result"]
            if frame is not None:
                image = frame.to_bgr()
                if result is not None:
                    image = draw_detection(image, result)
                cv2.imshow("facecue", image)
            key = cv2.waitKey(15) & 0xFF
            if key in _QUIT_KEYS:
                break
    finally:
        cv2.destroyAllWindows()


def _cmd_config(args: argparse.Namespace) -> None:
    """Handle ``facecue config``."""
    import yaml

    try:
        config = _load_config(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(yaml.safe_dump(config.to_dict(), sort_keys=False), end="")


def main(argv=None):
    """Entry point for ``facecue`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        _cmd_run(args)
    elif args.command == "config":
        _cmd_config(args)


if __name__ == "__main__":
    main()
