"""
会话存储 - 加载/保存接口由调用方注入
"""
import json
from pathlib import Path
from typing import Dict, List, Protocol, Union
from urllib.parse import quote

from loguru import logger

from ..exceptions import SessionNotFoundError
from ..models.session import ReviewSession


class SessionStore(Protocol):
    """会话持久化接口"""

    def load(self, session_id: str) -> ReviewSession: ...

    def save(self, session: ReviewSession) -> None: ...

    def list_ids(self) -> List[str]: ...


class InMemorySessionStore:
    """内存存储（测试和单进程演示用）"""

    def __init__(self):
        self._sessions: Dict[str, str] = {}

    def load(self, session_id: str) -> ReviewSession:
        if session_id not in self._sessions:
            raise SessionNotFoundError(session_id)
        return ReviewSession.model_validate_json(self._sessions[session_id])

    def save(self, session: ReviewSession) -> None:
        # 存序列化后的副本，调用方之后的修改不会影响已保存的数据
        self._sessions[session.session_id] = session.model_dump_json()

    def list_ids(self) -> List[str]:
        return sorted(self._sessions)


class JsonFileSessionStore:
    """每个会话一个 JSON 文件"""

    def __init__(self, directory: Union[str, Path] = "data/sessions"):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, session_id: str) -> Path:
        # 百分号编码可逆，不同的会话ID不会落到同一个文件
        return self.directory / f"{quote(session_id, safe='')}.json"

    def load(self, session_id: str) -> ReviewSession:
        path = self._path(session_id)
        if not path.exists():
            raise SessionNotFoundError(session_id)

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        session = ReviewSession.model_validate(data)
        # 大小写不敏感的文件系统上 "A" 和 "a" 仍是同一个文件
        if session.session_id != session_id:
            raise SessionNotFoundError(session_id)
        return session

    def save(self, session: ReviewSession) -> None:
        path = self._path(session.session_id)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(session.model_dump(mode="json"), f, ensure_ascii=False, indent=2)
        logger.debug(f"💾 会话已保存: {path}")

    def list_ids(self) -> List[str]:
        ids = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    ids.append(json.load(f)["session_id"])
            except (OSError, json.JSONDecodeError, KeyError) as e:
                logger.warning(f"读取会话文件失败 {path}: {e}")
        return ids
