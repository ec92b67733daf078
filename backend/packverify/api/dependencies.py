"""
路由依赖 - 从应用状态中取出服务实例
"""
from fastapi import Request

from ..config import Settings
from ..core.reviewer import PackagingReviewer
from ..services.session_store import SessionStore


def get_reviewer(request: Request) -> PackagingReviewer:
    return request.app.state.reviewer


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
