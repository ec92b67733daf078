"""
主应用入口
"""
import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from packverify.api import review, sessions
from packverify.config import Settings, settings
from packverify.core.lexicon_catalog import LexiconCatalog
from packverify.core.reviewer import PackagingReviewer
from packverify.services.session_store import JsonFileSessionStore, SessionStore


def setup_logging(config: Settings):
    """配置日志"""
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=config.log_level
    )
    logger.add(
        config.log_file,
        rotation="500 MB",
        retention="10 days",
        level="DEBUG"
    )


def create_app(
    config: Settings = settings,
    catalog: Optional[LexiconCatalog] = None,
    session_store: Optional[SessionStore] = None
) -> FastAPI:
    """
    创建应用

    词库只在这里加载一次；会话存储可以注入，便于测试。
    """
    app = FastAPI(
        title="PackVerify - 包装稿件质检",
        description="包装图文字的词库检测与规格核对",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS 配置
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # 生产环境应该限制具体域名
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if catalog is None:
        catalog = LexiconCatalog.from_file(config.lexicon_path)
    if session_store is None:
        session_store = JsonFileSessionStore(config.sessions_dir)

    app.state.settings = config
    app.state.reviewer = PackagingReviewer(catalog)
    app.state.session_store = session_store

    # 注册路由
    app.include_router(review.router)
    app.include_router(sessions.router)

    @app.get("/")
    async def root():
        """根路径"""
        return {
            "name": "PackVerify",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """健康检查"""
        return {
            "status": "healthy",
            "lexicon_rules": len(catalog),
            "model": config.default_model_id,
            "debug": config.debug
        }

    return app


# 配置日志
setup_logging(settings)

# 创建应用
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("=" * 60)
    logger.info("PackVerify 启动中...")
    logger.info(f"服务地址: http://{settings.app_host}:{settings.app_port}")
    logger.info(f"API 文档: http://{settings.app_host}:{settings.app_port}/docs")
    logger.info(f"词库文件: {settings.lexicon_path}")
    logger.info("=" * 60)

    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug
    )
