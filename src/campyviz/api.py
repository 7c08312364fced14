"""FastAPI application serving the aggregate payload to the chart front-end.

Run locally with ``uvicorn campyviz.api:create_app --factory``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from campyviz import views
from campyviz.adapters import SpreadsheetAdapter
from campyviz.aggregation import AggregationEngine
from campyviz.config import DEFAULT_DATA_FILES, AggregationConfig
from campyviz.errors import AggregationFailure, EmptyInputError, MissingInputError
from campyviz.pipeline import VisualizationPipeline
from campyviz.profiles import AggregationProfileLoader

logger = logging.getLogger(__name__)


def create_app(
    *,
    profile: str | Path | None = None,
    data_files: Sequence[str | Path] | None = None,
    data_root: str | Path | None = None,
    config: AggregationConfig | None = None,
) -> FastAPI:
    """Build the app; explicit ``data_files``/``config`` override the profile."""

    if profile is not None:
        loaded = AggregationProfileLoader().load(profile)
        data_files = data_files or loaded.data_files
        data_root = data_root or loaded.data_root
        config = config or loaded.to_config()

    sources = list(data_files or DEFAULT_DATA_FILES)
    engine = AggregationEngine(config)

    app = FastAPI(title="campyviz", description="Campylobacter virulence-gene aggregates")

    @app.exception_handler(MissingInputError)
    async def missing_input(request: Request, exc: MissingInputError) -> JSONResponse:
        logger.warning("%s", exc)
        return JSONResponse({"error": "Excel file not found"}, status_code=404)

    @app.exception_handler(EmptyInputError)
    async def empty_input(request: Request, exc: EmptyInputError) -> JSONResponse:
        logger.warning("%s", exc)
        return JSONResponse({"error": "Excel file is empty"}, status_code=400)

    @app.exception_handler(AggregationFailure)
    async def aggregation_failure(request: Request, exc: AggregationFailure) -> JSONResponse:
        return JSONResponse(
            {"error": "Failed to process Excel file", "details": str(exc)},
            status_code=500,
        )

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    def aggregate() -> dict[str, Any]:
        pipeline = VisualizationPipeline(
            adapter=SpreadsheetAdapter(data_files=sources, base_dir=data_root),
            engine=engine,
        )
        return pipeline.run().payload

    @app.get("/api/data")
    def data() -> Any:
        return JSONResponse(aggregate())

    @app.get("/api/genes/{gene_name}")
    def gene(gene_name: str) -> Any:
        record = views.find_gene(aggregate(), gene_name)
        if record is None:
            return JSONResponse({"error": f"Unknown gene: {gene_name}"}, status_code=404)
        return record

    @app.get("/api/views/top-genes")
    def top_genes(k: int = 20) -> Any:
        return {"genes": views.top_genes(aggregate(), k)}

    @app.get("/api/views/functions")
    def functions() -> Any:
        return views.function_distribution(aggregate())

    @app.get("/api/views/species")
    def species(gene: list[str] = Query(default=[]), percent: bool = False) -> Any:
        return views.species_counts(aggregate(), gene, percent=percent)

    @app.get("/api/views/variability")
    def variability(
        mode: str = "hosts",
        sort: str = "variability-desc",
        metric: str = "range",
    ) -> Any:
        payload = aggregate()
        try:
            rows = views.gene_variability(payload, mode=mode, sort=sort, metric=metric)
        except ValueError as exc:
            return JSONResponse({"error": str(exc)}, status_code=422)
        return [row.to_payload() for row in rows]

    return app


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("campyviz.api:create_app", host="0.0.0.0", port=8000, factory=True)
