"""Token assigner endpoints: extract / apply / export for Lottie and SVG.

Each request builds a fresh TokenSession from the posted document, so apply
always rewrites from the uploaded baseline.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from app.models.requests import ApplyTokensRequest, TokenDocumentRequest
from app.models.responses import ApplyResponse, ExtractResponse
from app.models.tokens import DocumentKind
from app.tokens.errors import RewriteBlockedError
from app.tokens.session import TokenSession

router = APIRouter()
logger = logging.getLogger(__name__)


def _extract(kind: DocumentKind, req: TokenDocumentRequest) -> ExtractResponse:
    session = TokenSession(kind)
    colors = session.load(req.filename, req.document)
    return ExtractResponse(
        kind=kind,
        filename=req.filename,
        loaded=session.loaded,
        error=session.last_error,
        colors=colors,
        total_occurrences=sum(c.count for c in colors),
        export_filename=session.export_filename if session.loaded else "",
    )


def _applied_session(kind: DocumentKind, req: ApplyTokensRequest) -> TokenSession:
    session = TokenSession(kind)
    session.load(req.filename, req.document)
    if not session.loaded:
        raise HTTPException(status_code=400, detail=session.last_error or "Could not read document")
    session.bind(req.bindings)
    try:
        session.apply()
    except RewriteBlockedError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return session


def _apply(kind: DocumentKind, req: ApplyTokensRequest) -> ApplyResponse:
    session = _applied_session(kind, req)
    return ApplyResponse(
        kind=kind,
        filename=session.export_filename,
        document=session.serialize(),
        colors=session.colors,
    )


def _export(kind: DocumentKind, req: ApplyTokensRequest) -> Response:
    filename, payload, media_type = _applied_session(kind, req).export()
    return Response(
        content=payload,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/lottie/extract", response_model=ExtractResponse)
async def lottie_extract(req: TokenDocumentRequest) -> ExtractResponse:
    return _extract(DocumentKind.LOTTIE, req)


@router.post("/lottie/apply", response_model=ApplyResponse)
async def lottie_apply(req: ApplyTokensRequest) -> ApplyResponse:
    return _apply(DocumentKind.LOTTIE, req)


@router.post("/lottie/export")
async def lottie_export(req: ApplyTokensRequest) -> Response:
    return _export(DocumentKind.LOTTIE, req)


@router.post("/svg/extract", response_model=ExtractResponse)
async def svg_extract(req: TokenDocumentRequest) -> ExtractResponse:
    return _extract(DocumentKind.SVG, req)


@router.post("/svg/apply", response_model=ApplyResponse)
async def svg_apply(req: ApplyTokensRequest) -> ApplyResponse:
    return _apply(DocumentKind.SVG, req)


@router.post("/svg/export")
async def svg_export(req: ApplyTokensRequest) -> Response:
    return _export(DocumentKind.SVG, req)
