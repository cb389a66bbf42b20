from __future__ import annotations

import logging
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from rich.console import Console

from pr_review import __version__
from pr_review.changeset_ingest import LATEST, ChangeSetId
from pr_review.config import Settings, settings
from pr_review.errors import AggregateFailure, ConfigurationError, NotFoundError
from pr_review.models import ReviewReport
from pr_review.services import ReviewService, ReviewServiceConfig

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pull Request Review API",
    description="Heuristic review of pull requests: findings, statistics and best practices",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ReviewRequest(BaseModel):
    repo_path: Optional[str] = Field(None, description="Path to the Git repository (defaults to REPO_PATH)")
    target_ref: Optional[str] = Field(None, description="Branch pull requests are merged into")
    pr_id: Optional[str] = Field(None, description="Pull request number or 'latest'")
    format: str = Field("json", description="Output format: 'json' or 'text'")

    class Config:
        json_schema_extra = {
            "example": {
                "repo_path": "/path/to/repo",
                "target_ref": "main",
                "pr_id": "42",
                "format": "json",
            }
        }


class Suggestion(BaseModel):
    file: str
    line: Optional[int] = None
    message: str
    severity: str


class StatisticsResponse(BaseModel):
    filesChanged: int
    additions: int
    deletions: int
    totalChanges: int


class BestPracticesResponse(BaseModel):
    commitMessages: bool
    branchNaming: bool
    testCoverage: bool
    documentationUpdated: bool


class ReviewResponse(BaseModel):
    summary: str
    suggestions: List[Suggestion]
    statistics: StatisticsResponse
    bestPractices: BestPracticesResponse


class TextReviewResponse(BaseModel):
    summary: str
    output: str


class PullRequestSummary(BaseModel):
    pullRequestId: int
    title: str
    sourceRef: str
    targetRef: str
    description: str
    status: str
    createdBy: str
    creationDate: Optional[datetime] = None
    repository: str


def _parse_identifier(raw: Optional[str], cfg: Settings) -> ChangeSetId:
    value = raw if raw not in (None, "") else cfg.change_set
    if value in (None, "", LATEST):
        return LATEST
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid pull request ID: {value!r}") from None


def _build_service(cfg: Settings) -> ReviewService:
    return ReviewService.from_config(
        ReviewServiceConfig(
            repo_path=cfg.repo_path,
            target_ref=cfg.target_ref,
            max_files=cfg.max_files,
            large_file_lines=cfg.large_file_lines,
        )
    )


def _to_response(report: ReviewReport) -> ReviewResponse:
    return ReviewResponse.model_validate(report.to_dict())


def _run_review(cfg: Settings, raw_id: Optional[str]) -> ReviewReport:
    try:
        identifier = _parse_identifier(raw_id, cfg)
        service = _build_service(cfg)
        return service.review(identifier)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except AggregateFailure as exc:
        logger.error(f"Review failed: {exc}")
        raise HTTPException(status_code=500, detail=f"Review failed: {exc}")
    except Exception as exc:
        logger.exception("Unexpected error while reviewing pull request")
        raise HTTPException(status_code=500, detail=f"Review failed: {exc}")


@app.get("/")
async def root():
    return {
        "message": "Pull Request Review API",
        "version": __version__,
        "endpoints": {
            "GET /review": "Review a pull request (prId query parameter, defaults to the latest)",
            "POST /review": "Review a pull request of a given repository",
            "GET /pullrequests": "List the latest pull requests",
            "GET /health": "Check API health",
        },
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.get("/pullrequests", response_model=List[PullRequestSummary])
async def pull_requests(count: Optional[int] = Query(None, ge=1, description="Number of pull requests to list")):
    try:
        service = _build_service(settings)
        summaries = service.latest_change_sets(count or settings.pull_request_count)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except Exception as exc:
        logger.exception("Unexpected error while listing pull requests")
        raise HTTPException(status_code=500, detail=f"Failed to fetch pull requests: {exc}")

    return [
        PullRequestSummary(
            pullRequestId=summary.identifier,
            title=summary.title,
            sourceRef=summary.source_branch,
            targetRef=summary.target_branch,
            description=summary.description,
            status=summary.status,
            createdBy=summary.created_by,
            creationDate=summary.creation_date,
            repository=summary.repository,
        )
        for summary in summaries
    ]


@app.get("/review", response_model=ReviewResponse, response_model_exclude_none=True)
async def review_pull_request(prId: Optional[str] = Query(None, description="Pull request number")):
    """Review a pull request of the configured repository."""
    report = _run_review(settings, prId)
    return _to_response(report)


@app.post("/review")
async def review_pull_request_post(request: ReviewRequest):
    """
    Review a pull request of any local repository.

    Returns structured JSON by default or Rich-formatted text if format='text'.
    """
    update = {}
    if request.repo_path:
        update["repo_path"] = Path(request.repo_path)
    if request.target_ref:
        update["target_ref"] = request.target_ref
    cfg = settings.model_copy(update=update)

    report = _run_review(cfg, request.pr_id)

    if request.format.lower() == "text":
        output = StringIO()
        console = Console(file=output, width=cfg.console_width, force_terminal=True)
        ReviewService.render_console_summary(report, console=console)
        return TextReviewResponse(summary=report.summary, output=output.getvalue())

    return _to_response(report).model_dump(exclude_none=True)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host="0.0.0.0", port=8004)
