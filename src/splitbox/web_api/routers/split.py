"""
Split Router
============
Endpoints for preparing, splitting and rendering item lists.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from splitbox.core.host import ExecutionHost
from splitbox.errors import ConfigError
from splitbox.model.request import SplitRequest
from splitbox.reports.formatter import format_batch_content, template_file_extension
from splitbox.web_api.config import settings
from splitbox.web_api.schemas.split import (
    FormatRequest,
    FormatResponse,
    SplitRequestModel,
    SplitResponseModel,
)

router = APIRouter()

_host: Optional[ExecutionHost] = None


def get_host() -> ExecutionHost:
    """Shared execution context, started on first use."""
    global _host
    if _host is None:
        _host = ExecutionHost(
            isolated=settings.ISOLATED_EXECUTION,
            timeout=float(settings.EXECUTION_TIMEOUT),
        )
    return _host


def shutdown_host() -> None:
    global _host
    if _host is not None:
        _host.close()
        _host = None


@router.post("/", response_model=SplitResponseModel)
async def split_input(request: SplitRequestModel, host: ExecutionHost = Depends(get_host)):
    """
    Prepare and split a block of text.

    - **rawInput**: delimited free text
    - **splitMode** / **splitValue**: batch sizing strategy and its bound
    """
    if len(request.raw_input) > settings.MAX_INPUT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"rawInput exceeds {settings.MAX_INPUT_CHARS} characters",
        )

    try:
        split_request = SplitRequest(
            raw_input=request.raw_input,
            delimiter=request.delimiter,
            dedupe_mode=request.dedupe_mode,
            validation_mode=request.validation_mode,
            custom_pattern=request.custom_pattern,
            split_mode=request.split_mode,
            split_value=request.split_value,
        )
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))

    outcome = await host.arun(split_request)
    if not outcome.ok:
        raise HTTPException(status_code=400, detail=outcome.error)
    return outcome.to_dict()


@router.post("/format", response_model=FormatResponse)
async def format_batch(request: FormatRequest):
    """
    Render items with an output template.
    """
    return FormatResponse(
        content=format_batch_content(request.items, request.template, request.delimiter),
        extension=template_file_extension(request.template),
    )
