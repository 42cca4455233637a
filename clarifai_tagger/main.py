"""
Main entry point for the Clarifai Tagger.
"""

import sys
import argparse
from typing import List, Optional
from .tagger import Tagger, TagsNotFoundError, render_tags
from .credentials import ConfigurationError
from .clarifai_client import ServiceError
from .logging import setup_logging, get_logger


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Clarifai Tagger - tag local and remote images with Clarifai concepts"
    )

    parser.add_argument(
        "images",
        nargs="+",
        metavar="IMAGE",
        help="Local image path or image URL"
    )

    parser.add_argument(
        "--add",
        metavar="IMAGE",
        help="Extra image to register after construction"
    )

    parser.add_argument(
        "--show",
        metavar="IMAGE",
        help="Image whose tags are printed after the results (default: the last image)"
    )

    parser.add_argument(
        "--keys-file",
        help="File with the Clarifai App ID and App Secret (default: CLARIFAI_KEYS_FILE)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the log level from configuration"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    setup_logging(args.log_level)
    logger = get_logger("main")

    show = args.show or args.add or args.images[-1]

    try:
        with Tagger(args.images, keys_file=args.keys_file) as tagger:
            if args.add:
                tagger.add(args.add)
            tagger.compute()

            print(f"{tagger}\n---\ndone\n---\n")

            try:
                print(render_tags(tagger.get_tags(show)))
            except TagsNotFoundError:
                logger.error(f"❌ No tags for {show}")
                return 2

        return 0

    except ConfigurationError as e:
        logger.error(f"❌ Configuration error: {str(e)}")
        return 1
    except ServiceError as e:
        logger.error(f"❌ Clarifai request failed: {str(e)}")
        return 1
    except KeyboardInterrupt:
        logger.info("⏹️  Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
