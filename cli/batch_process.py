import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from repositories.image_repository import ImageRepository
from pipeline.batch_processor import PREVIEW_WIDTH, process_images

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        prog="detect-edges",
        description="Outline the dominant foreground objects of every image in an Assets folder.",
    )
    parser.add_argument(
        "--assets",
        help="Input folder. Default: the first 'Assets' folder found walking up "
             "from the current directory.",
    )
    parser.add_argument(
        "--output",
        help="Output folder. Default: 'Output' next to the assets folder.",
    )
    parser.add_argument(
        "--width", type=int, default=PREVIEW_WIDTH,
        help=f"ASCII preview width in characters (default: {PREVIEW_WIDTH}).",
    )
    parser.add_argument("--no-preview", action="store_true", help="Skip the ASCII preview.")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar.")
    parser.add_argument(
        "--log-level", default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (default: INFO).",
    )
    return parser.parse_args(argv)


def print_header(image_count: int) -> None:
    print("DetectImageEdges - Edge Detection\n")
    print(f"Found {image_count} image file(s) to process.\n")


def print_summary(processed_count: int, output_dir: Path) -> None:
    print(f"Done. Processed {processed_count} image(s). "
          f"Inspect '{output_dir}' for the generated files.")


def main(argv=None) -> int:
    args = parse_arguments(argv)
    configure_logging(args.log_level)

    repository = ImageRepository()

    if args.assets:
        assets_dir = Path(args.assets)
    else:
        assets_dir = repository.find_assets_dir([Path.cwd(), Path(__file__).resolve().parent])
    if assets_dir is None or not assets_dir.is_dir():
        print(f"Assets folder not found. Place input images inside an "
              f"'{repository.assets_dir_name}' directory.")
        return 1

    if args.output:
        output_dir = Path(args.output)
        output_dir.mkdir(parents=True, exist_ok=True)
    else:
        output_dir = repository.setup_output_dir(assets_dir)

    image_files = repository.list_image_files(assets_dir)
    if not image_files:
        print(f"No image files found in {assets_dir}.")
        print(f"Supported formats: {', '.join(sorted(repository.VALID_EXTS))}")
        return 0

    print_header(len(image_files))
    preview_width = None if args.no_preview else args.width
    processed_count = process_images(image_files, output_dir,
                                     preview_width=preview_width,
                                     progress=args.progress)
    print_summary(processed_count, output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
