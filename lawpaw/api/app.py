from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel

from lawpaw.config.settings import Settings
from lawpaw.logging.logger import Log
from lawpaw.processor.batch import BatchProcessor, build_batch_processor
from lawpaw.processor.exceptions import BatchValidationError
from lawpaw.processor.models import BatchRequest


class ProcessRequest(BaseModel):
    input_folder: str = ""
    output_folder: str | None = None
    keyword: str = ""


def create_app(
    settings: Settings | None = None,
    batch_processor: BatchProcessor | None = None,
) -> FastAPI:
    """Build the HTTP surface: batch trigger, report download, health."""
    settings = settings or Settings()
    batch = batch_processor or build_batch_processor(settings)
    app = FastAPI(title="lawpaw", version="0.1.0")

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok"}

    @app.post("/process")
    def process(req: ProcessRequest) -> dict[str, Any]:
        request = BatchRequest(
            input_folder=req.input_folder,
            output_folder=req.output_folder or settings.output_folder,
            keyword=req.keyword,
        )
        try:
            report = batch.run(request)
        except BatchValidationError as exc:
            Log.warning(f"Rejected batch request: {exc}")
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return report.to_dict()

    @app.get("/reports/{report_name}")
    def download_report(report_name: str) -> FileResponse:
        path = batch.report_writer.resolve(report_name)
        if path is None:
            raise HTTPException(status_code=404, detail="Report not found")
        return FileResponse(path, media_type="text/csv", filename=report_name)

    return app
