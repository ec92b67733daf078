"""
API 路由 - 审核会话接口
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, ConfigDict

from ..config import Settings
from ..core.reviewer import PackagingReviewer
from ..exceptions import SessionNotFoundError
from ..models.fields import ExtractedDocument, SourceField
from ..models.issues import AiSuggestionIssue
from ..models.session import ReviewSession
from ..services.session_store import SessionStore
from .dependencies import get_reviewer, get_session_store, get_settings
from .review import ReconcileResponse, build_config

router = APIRouter(prefix="/api/sessions", tags=["会话"])


class DocumentUpload(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    name: Optional[str] = None
    ocr_text: Optional[str] = None
    fields: List[SourceField] = []
    ai_suggestions: List[AiSuggestionIssue] = []
    model_id: Optional[str] = None


def _load_or_create(store: SessionStore, session_id: str, settings: Settings) -> ReviewSession:
    try:
        return store.load(session_id)
    except SessionNotFoundError:
        logger.info(f"📝 新建审核会话: {session_id}")
        return ReviewSession(session_id=session_id, model_id=settings.default_model_id)


def _load(store: SessionStore, session_id: str) -> ReviewSession:
    try:
        return store.load(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("")
async def list_sessions(store: SessionStore = Depends(get_session_store)):
    """列出所有会话"""
    ids = store.list_ids()
    return {"total": len(ids), "sessions": ids}


@router.get("/{session_id}", response_model=ReviewSession)
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """获取会话详情"""
    return _load(store, session_id)


@router.put("/{session_id}/reference-fields", response_model=ReviewSession)
async def replace_reference_fields(
    session_id: str,
    fields: List[SourceField],
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings)
):
    """整体替换参考规格"""
    session = _load_or_create(store, session_id, settings)
    session = session.replace_reference_fields(fields)
    store.save(session)
    logger.info(f"会话 {session_id}: 参考规格已替换, 共 {len(fields)} 个字段")
    return session


@router.put("/{session_id}/documents/{document_id}", response_model=ReviewSession)
async def upsert_document(
    session_id: str,
    document_id: str,
    upload: DocumentUpload,
    store: SessionStore = Depends(get_session_store),
    reviewer: PackagingReviewer = Depends(get_reviewer),
    settings: Settings = Depends(get_settings)
):
    """
    写入一个文档的提取结果

    有 OCR 文本时立即跑一遍词库检测，结果按模型ID归档。
    """
    session = _load_or_create(store, session_id, settings)
    session = session.upsert_document(ExtractedDocument(
        document_id=document_id,
        name=upload.name,
        ocr_text=upload.ocr_text,
        fields=upload.fields
    ))

    if upload.ocr_text:
        config = build_config(settings, model_id=upload.model_id or session.model_id)
        result = reviewer.review_text(upload.ocr_text, config, upload.ai_suggestions)
        session = session.record_findings(config.model_id, document_id, result.findings)

    store.save(session)
    return session


@router.get("/{session_id}/reconciliation", response_model=ReconcileResponse)
async def session_reconciliation(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    reviewer: PackagingReviewer = Depends(get_reviewer)
):
    """按会话当前数据重新计算字段核对"""
    session = _load(store, session_id)
    results, summary = reviewer.reconcile(
        session.reference_fields,
        [doc.fields for doc in session.documents]
    )
    return ReconcileResponse(
        results=results,
        summary=summary,
        document_ids=[doc.document_id for doc in session.documents]
    )
