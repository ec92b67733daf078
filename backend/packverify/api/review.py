"""
API 路由 - 文本审核与字段核对接口
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ..config import Settings
from ..core.reconciliation_aggregator import filter_differences
from ..core.reviewer import PackagingReviewer
from ..models.fields import ExtractedDocument, ReconciliationResult, ReconciliationSummary, SourceField
from ..models.issues import AiSuggestionIssue
from ..models.lexicon import Domain, Market
from ..models.review import ReviewConfig, TextReviewResult
from .dependencies import get_reviewer, get_settings

router = APIRouter(prefix="/api/review", tags=["审核"])


class LexiconReviewRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    text: str
    domain: Optional[Domain] = None
    market: Optional[Market] = None
    model_id: Optional[str] = None
    check_brackets: bool = True
    ai_suggestions: List[AiSuggestionIssue] = []


class ReconcileRequest(BaseModel):
    reference_fields: List[SourceField]
    documents: List[ExtractedDocument] = Field(default_factory=list)
    only_differences: bool = False


class ReconcileResponse(BaseModel):
    results: List[ReconciliationResult]
    summary: ReconciliationSummary
    document_ids: List[str]


def build_config(settings: Settings, **overrides) -> ReviewConfig:
    """用全局配置和请求参数拼出本次审核配置"""
    return ReviewConfig(
        model_id=overrides.get("model_id") or settings.default_model_id,
        domain=overrides.get("domain") or settings.default_domain,
        market=overrides.get("market") or settings.default_market,
        context_size=settings.context_size,
        check_brackets=overrides.get("check_brackets", True)
    )


@router.post("/lexicon", response_model=TextReviewResult)
async def review_lexicon(
    request: LexiconReviewRequest,
    reviewer: PackagingReviewer = Depends(get_reviewer),
    settings: Settings = Depends(get_settings)
):
    """
    词库检测

    对 OCR 文本做词库匹配和括号检查，并合并外部模型给出的建议。
    """
    config = build_config(
        settings,
        model_id=request.model_id,
        domain=request.domain,
        market=request.market,
        check_brackets=request.check_brackets
    )
    logger.info(f"词库检测: {len(request.text)} 字符, 行业={config.domain}, 市场={config.market}")

    try:
        return reviewer.review_text(request.text, config, request.ai_suggestions)
    except Exception as e:
        logger.error(f"词库检测失败: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/lexicon/stats")
async def lexicon_stats(reviewer: PackagingReviewer = Depends(get_reviewer)):
    """词库统计"""
    catalog = reviewer.matcher.catalog
    return {
        "version": catalog.version,
        **catalog.stats()
    }


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile_fields(
    request: ReconcileRequest,
    reviewer: PackagingReviewer = Depends(get_reviewer)
):
    """
    字段核对

    结果按差异、警告、匹配排序；only_differences 为真时只返回有差异或警告的字段。
    统计总是基于全部字段。
    """
    results, summary = reviewer.reconcile(
        request.reference_fields,
        [doc.fields for doc in request.documents]
    )
    if request.only_differences:
        results = filter_differences(results)

    logger.info(
        f"字段核对完成: {summary.total_count} 个字段, "
        f"{summary.error_count} 差异, {summary.warning_count} 警告"
    )
    return ReconcileResponse(
        results=results,
        summary=summary,
        document_ids=[doc.document_id for doc in request.documents]
    )
