"""
审核会话
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .fields import ExtractedDocument, SourceField
from .issues import Finding


class ReviewSession(BaseModel):
    """
    一次审核会话

    issues_by_model 按模型ID、文档ID两级存放外部模型给出的问题，
    切换模型不会覆盖另一个模型的结果。
    """
    model_config = ConfigDict(protected_namespaces=())

    session_id: str
    model_id: str
    reference_fields: List[SourceField] = []
    documents: List[ExtractedDocument] = []
    issues_by_model: Dict[str, Dict[str, List[Finding]]] = {}
    updated_at: str = Field(default_factory=lambda: datetime.now().isoformat())

    def replace_reference_fields(self, fields: List[SourceField]) -> "ReviewSession":
        """整体替换参考规格（不做增量修补）"""
        return self.model_copy(update={
            "reference_fields": list(fields),
            "updated_at": datetime.now().isoformat(),
        })

    def upsert_document(self, document: ExtractedDocument) -> "ReviewSession":
        documents = [d for d in self.documents if d.document_id != document.document_id]
        position = next(
            (i for i, d in enumerate(self.documents) if d.document_id == document.document_id),
            len(documents),
        )
        documents.insert(position, document)
        return self.model_copy(update={
            "documents": documents,
            "updated_at": datetime.now().isoformat(),
        })

    def record_findings(
        self,
        model_id: str,
        document_id: str,
        findings: List[Finding]
    ) -> "ReviewSession":
        by_model = {m: dict(docs) for m, docs in self.issues_by_model.items()}
        by_model.setdefault(model_id, {})[document_id] = list(findings)
        return self.model_copy(update={
            "issues_by_model": by_model,
            "updated_at": datetime.now().isoformat(),
        })

    def get_document(self, document_id: str) -> Optional[ExtractedDocument]:
        for document in self.documents:
            if document.document_id == document_id:
                return document
        return None
