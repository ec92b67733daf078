"""
配置管理模块
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.lexicon import Domain, Market

BACKEND_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """应用配置"""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PACKVERIFY_",
        case_sensitive=False,
        extra="ignore",
    )

    # 词库配置
    lexicon_path: Path = BACKEND_DIR / "data" / "lexicon.json"
    context_size: int = 30
    default_domain: Optional[Domain] = None
    default_market: Optional[Market] = None

    # 外部模型（只作为结果分组的标识）
    default_model_id: str = "gemini-2.5-flash"

    # 会话存储
    sessions_dir: Path = Path("data/sessions")

    # 应用配置
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = True

    # 日志配置
    log_level: str = "INFO"
    log_file: str = "logs/app.log"


# 全局配置实例（只在 API 层读取）
settings = Settings()
