#!/usr/bin/env python3
"""
TableSnap - Main Entry Point.

TableSnap turns a photo of a table, receipt or invoice into editable
data. This entry point either runs one extraction from the command
line and exports the result, or serves the HTTP API.

Usage:
    Command Line:
        python main.py --input receipt.jpg --output results/
        python main.py --input receipt.jpg --format xlsx --currency
        python main.py --input receipt.jpg --server-url http://localhost:8000
        python main.py --serve --port 8000

    Python:
        from main import run_extraction
        table = run_extraction("receipt.jpg")

Author: TableSnap Team
Version: 1.0.0
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from config import ConfigurationManager, get_config
from tablesnap.utils.logger import setup_logger_from_config, get_logger
from tablesnap.utils.exceptions import TableSnapError
from tablesnap.table_state import TableData
from tablesnap.output_handler import OutputHandler
from tablesnap.session import ReviewSession, AppPhase


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="TableSnap - AI-powered table extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Extract a table to CSV:
        python main.py --input receipt.jpg --output results/

    Extract through a running server and copy to the clipboard:
        python main.py --input receipt.jpg --server-url http://localhost:8000 --clipboard

    Serve the API:
        python main.py --serve --port 8000
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        help="Image file (PNG, JPEG, WEBP, HEIC, HEIF)"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file or directory (default: configured output dir)"
    )

    parser.add_argument(
        "--format", "-f",
        choices=OutputHandler.FORMATS,
        default="csv",
        help="Export format; tsv copies to the clipboard (default: csv)"
    )

    parser.add_argument(
        "--clipboard",
        action="store_true",
        help="Also copy the table to the clipboard as tab-separated text"
    )

    parser.add_argument(
        "--currency",
        action="store_true",
        default=None,
        help="Show numeric columns as currency in the printed preview (default: from config)"
    )

    parser.add_argument(
        "--server-url",
        type=str,
        default=None,
        help="Extract through a running TableSnap server instead of calling the model directly"
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API server"
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Server host (default: from config)"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Server port (default: from config)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    if not args.serve and not args.input:
        parser.error("--input is required unless --serve is given")

    return args


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        logging.getLogger("tablesnap").setLevel(logging.DEBUG)
        for handler in logging.getLogger("tablesnap").handlers:
            handler.setLevel(logging.DEBUG)

    logger.info("=" * 60)
    logger.info("TABLESNAP")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")

    return config


def build_session(
    server_url: Optional[str] = None,
    output_dir: Optional[str] = None,
    format_currency: Optional[bool] = None
) -> ReviewSession:
    """Create a review session backed by the model or by a remote server."""
    if server_url:
        from tablesnap.model_inference import ExtractionClient
        gateway = ExtractionClient(server_url)
    else:
        from tablesnap.model_inference import TableExtractor
        gateway = TableExtractor()

    return ReviewSession(
        gateway,
        output_handler=OutputHandler(output_dir),
        format_currency=format_currency
    )


def run_extraction(
    input_path: str,
    server_url: Optional[str] = None,
    config_path: Optional[str] = None
) -> TableData:
    """
    Extract a table from one image.

    This is the programmatic entry point.

    Args:
        input_path: Path to the image.
        server_url: Optional TableSnap server to extract through.
        config_path: Optional custom configuration file path.

    Returns:
        The extracted table.

    Raises:
        TableSnapError: If the image is rejected or extraction fails.

    Example:
        >>> table = run_extraction("receipt.jpg")
        >>> table.headers
        ['Item', 'Qty', 'Price']
    """
    ConfigurationManager(config_path)
    session = build_session(server_url)
    phase = session.submit_file(input_path)

    if session.input_error:
        raise TableSnapError(session.input_error)
    if phase is AppPhase.ERROR:
        raise TableSnapError(session.error)

    return session.table


def print_preview(session: ReviewSession) -> None:
    """Print the extracted grid, marking uncertain cells with '!'."""
    grid = session.grid
    headers = [cell.name for cell in grid.header_cells()]
    print(" | ".join(headers))
    print("-" * max(len(" | ".join(headers)), 3))

    if grid.is_empty:
        print(grid.EMPTY_MESSAGE)
        return

    for row in grid.render():
        print(" | ".join(
            f"{cell.display}{' !' if cell.flagged else ''}" for cell in row
        ))


def serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn
    from tablesnap.api import create_app

    host = args.host or get_config("server.host", "0.0.0.0")
    port = args.port or get_config("server.port", 8000)

    get_logger(__name__).info(f"Serving TableSnap API on {host}:{port}")
    uvicorn.run(create_app(), host=host, port=port)
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        if args.serve:
            return serve(args)

        output_dir, filename = None, None
        if args.output:
            output_path = Path(args.output)
            if output_path.suffix:
                output_dir, filename = str(output_path.parent), output_path.name
            else:
                output_dir = str(output_path)

        session = build_session(args.server_url, output_dir, args.currency)
        phase = session.submit_file(args.input)

        if session.input_error:
            print(f"Error: {session.input_error}", file=sys.stderr)
            return 1

        if phase is AppPhase.ERROR:
            print(f"Something went wrong: {session.error}", file=sys.stderr)
            return 1

        print_preview(session)

        table = session.table
        flagged = len(table.uncertain_cells())
        logger.info(
            f"{table.row_count} rows, {table.column_count} columns, "
            f"{flagged} uncertain cell(s)"
        )

        if args.format == "csv":
            logger.info(f"CSV output: {session.export_csv(filename)}")
        elif args.format == "xlsx":
            logger.info(f"Excel output: {session.export_excel(filename)}")

        if args.format == "tsv" or args.clipboard:
            session.copy_to_clipboard()
            logger.info("Table copied to clipboard")

        return 0

    except TableSnapError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
