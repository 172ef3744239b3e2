import argparse
import json
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import uvicorn

from lawpaw.api.app import create_app
from lawpaw.config.settings import Settings
from lawpaw.database.connection import close_pool, init_pool
from lawpaw.database.repositories.legal_documents_repository import LegalDocumentsRepository
from lawpaw.logging.logger import Log
from lawpaw.processor.batch import BatchProcessor, build_batch_processor
from lawpaw.processor.exceptions import BatchValidationError, PersistenceError
from lawpaw.processor.models import BatchReport, BatchRequest


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lawpaw", description="Legal document ingestion pipeline")
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="Process one batch and print its report as JSON")
    run.add_argument("--input-folder", help="Folder to scan (default: INPUT_FOLDER)")
    run.add_argument("--output-folder", help="Archive root (default: OUTPUT_FOLDER)")
    run.add_argument("--keyword", required=True, help="Case-insensitive literal to search for")

    commands.add_parser("serve", help="Start the HTTP API")
    return parser


def run_until_done(batch: BatchProcessor, request: BatchRequest) -> BatchReport:
    """Run a batch; Ctrl-C cancels it at the next stage boundary instead of killing it."""
    cancel_event = threading.Event()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="lawpaw-batch") as executor:
        future = executor.submit(batch.run, request, cancel_event)
        while True:
            try:
                return future.result(timeout=0.5)
            except FutureTimeoutError:
                continue
            except KeyboardInterrupt:
                Log.warning("Cancelling batch, in-flight documents stop at the next stage")
                cancel_event.set()


def _run(settings: Settings, args: argparse.Namespace) -> int:
    request = BatchRequest(
        input_folder=args.input_folder or settings.input_folder,
        output_folder=args.output_folder or settings.output_folder,
        keyword=args.keyword,
    )
    try:
        report = run_until_done(build_batch_processor(settings), request)
    except BatchValidationError as exc:
        Log.error(f"Batch rejected: {exc}")
        print(json.dumps({"error": str(exc)}))
        return 2
    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> logging -> pool -> table -> command."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        try:
            LegalDocumentsRepository().ensure_table()
        except PersistenceError as exc:
            Log.warning(f"Database unavailable, records will fail: {exc}")

        if args.command == "serve":
            uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)
            return 0
        return _run(settings, args)
    finally:
        close_pool()


if __name__ == "__main__":
    raise SystemExit(main())
