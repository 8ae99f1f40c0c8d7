"""
Command-line interface for cone tracking.

Usage:
    python -m cone_tracking locate <image_path> [--output json|text|visual]
    python -m cone_tracking camera [--device 0] [--no-display]
    python -m cone_tracking --help
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import cv2

from cone_tracking.config import TrackerConfig
from cone_tracking.session import TrackingSession
from cone_tracking.overlay import draw_status_text

logger = logging.getLogger(__name__)


def add_config_arguments(parser: argparse.ArgumentParser):
    """Add the tracker configuration options shared by all commands."""
    parser.add_argument(
        "--config",
        type=str,
        help="YAML configuration file",
    )
    parser.add_argument(
        "--target",
        type=int,
        nargs=3,
        metavar=("H", "S", "V"),
        help="Target HSV color (default: 10 255 255)",
    )
    parser.add_argument(
        "--radius",
        type=int,
        nargs=3,
        metavar=("H", "S", "V"),
        help="Tolerance radius per HSV channel (default: 25 50 50)",
    )
    parser.add_argument(
        "--min-size",
        type=float,
        help="Minimum blob size as a fraction of the frame (default: 0.001)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def setup_argparse() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        prog="cone_tracking",
        description="Locate a colored cone in images or a live camera feed",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # locate command
    locate_parser = subparsers.add_parser(
        "locate",
        help="Locate the cone in a single image",
    )
    locate_parser.add_argument(
        "image_path",
        type=str,
        help="Path to the input image",
    )
    locate_parser.add_argument(
        "--output",
        "-o",
        choices=["json", "text", "visual"],
        default="json",
        help="Output format (default: json)",
    )
    locate_parser.add_argument(
        "--output-path",
        type=str,
        help="Output file path (for visual mode)",
    )
    locate_parser.add_argument(
        "--include-contour",
        action="store_true",
        help="Include the selected contour points in JSON output",
    )
    add_config_arguments(locate_parser)

    # camera command
    camera_parser = subparsers.add_parser(
        "camera",
        help="Track the cone in a live camera feed",
    )
    camera_parser.add_argument(
        "--device",
        type=int,
        default=0,
        help="Camera device index (default: 0)",
    )
    camera_parser.add_argument(
        "--no-display",
        action="store_true",
        help="Do not open a preview window",
    )
    camera_parser.add_argument(
        "--max-frames",
        type=int,
        default=0,
        help="Stop after this many frames (default: 0, run until 'q')",
    )
    add_config_arguments(camera_parser)

    return parser


def build_config(args, color_order: str = "bgr") -> TrackerConfig:
    """
    Build the tracker configuration from a YAML file and CLI overrides.

    Raises:
        ValueError: If any value is out of range
    """
    config = TrackerConfig.from_yaml(args.config) if args.config else TrackerConfig.default()
    data = config.to_dict()

    if args.target is not None:
        data["target_color"] = args.target
    if args.radius is not None:
        data["tolerance_radius"] = args.radius
    if args.min_size is not None:
        data["min_size_fraction"] = args.min_size

    # Images from disk and cv2.VideoCapture frames are BGR
    data["color_order"] = color_order

    return TrackerConfig.from_dict(data)


def configure_logging(verbose: bool):
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def cmd_locate(args) -> int:
    """Handle locate command."""
    # Validate input path
    image_path = Path(args.image_path)
    if not image_path.exists():
        print(f"Error: Image not found: {image_path}", file=sys.stderr)
        return 1

    try:
        config = build_config(args)
    except (ValueError, OSError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    image = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
    if image is None:
        print(f"Error: Could not load image: {image_path}", file=sys.stderr)
        return 1

    height, width = image.shape[:2]

    session = TrackingSession(config)
    session.start(width, height)
    detection = session.process_frame(image, draw_overlay=args.output == "visual")
    session.stop()

    if args.output == "json":
        output = {
            "image_dimensions": {"width": width, "height": height},
            "detection": detection.to_dict(include_contour=args.include_contour),
            "config": config.to_dict(),
        }
        print(json.dumps(output, indent=2))

    elif args.output == "text":
        left_right, top_bottom, size = detection.format_display()
        print(f"left_right={left_right} top_bottom={top_bottom} size={size}")

    elif args.output == "visual":
        draw_status_text(image, detection)

        output_path = args.output_path
        if output_path is None:
            output_path = str(image_path.stem) + "_cone.png"

        cv2.imwrite(output_path, image)
        print(f"Visualization saved to: {output_path}")

    return 0


def cmd_camera(args) -> int:
    """Handle camera command - live tracking loop."""
    try:
        config = build_config(args)
    except (ValueError, OSError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    cap = cv2.VideoCapture(args.device)
    if not cap.isOpened():
        print(f"Error: Could not open camera {args.device}", file=sys.stderr)
        return 1

    session = TrackingSession(config)
    try:
        ret, frame = cap.read()
        if not ret:
            print("Error: Could not read frame from camera", file=sys.stderr)
            return 1

        height, width = frame.shape[:2]
        logger.info(f"Camera {args.device} opened at {width}x{height}")
        session.start(width, height)

        count = 0
        while ret:
            detection = session.process_frame(frame, draw_overlay=not args.no_display)
            left_right, top_bottom, size = detection.format_display()
            print(f"{left_right}\t{top_bottom}\t{size}", flush=True)

            count += 1
            if args.max_frames and count >= args.max_frames:
                break

            if not args.no_display:
                draw_status_text(frame, detection)
                cv2.imshow("Cone tracking", frame)
                if cv2.waitKey(1) & 0xFF == ord("q"):
                    break

            ret, frame = cap.read()
    finally:
        session.stop()
        cap.release()
        if not args.no_display:
            cv2.destroyAllWindows()

    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = setup_argparse()
    parsed = parser.parse_args(args)

    if parsed.command is None:
        parser.print_help()
        return 0

    configure_logging(parsed.verbose)

    if parsed.command == "locate":
        return cmd_locate(parsed)

    if parsed.command == "camera":
        return cmd_camera(parsed)

    return 0


if __name__ == "__main__":
    sys.exit(main())
