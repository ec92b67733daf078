"""
异常定义
"""


class PackVerifyError(Exception):
    """所有业务异常的基类"""


class LexiconLoadError(PackVerifyError):
    """词库文件无法读取或格式错误（启动时致命）"""


class SessionNotFoundError(PackVerifyError):
    """会话不存在"""

    def __init__(self, session_id: str):
        super().__init__(f"会话 {session_id} 不存在")
        self.session_id = session_id
