"""配置常量模块 -- 可通过环境变量覆盖

包含本地数据目录、SQLite 路径、默认语言与主题等可配置项。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("HELPERKUST_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径（任务列表 + 偏好设置）"""
    return os.environ.get(
        "HELPERKUST_DB_PATH",
        str(_get_base_dir() / "sqlite" / "helperkust.db"),
    )


def get_default_language() -> str:
    """获取默认界面/回复语言，非法值回落到 ru"""
    value = os.environ.get("HELPERKUST_LANGUAGE", "ru").strip().lower()
    return value if value in SUPPORTED_LANGUAGES else "ru"


SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "ru", "es")

DEFAULT_THEME: str = "light"

# 任务标题最大长度
TASK_TITLE_MAX_LENGTH: int = 200

# 日志中消息文本预览长度
MESSAGE_PREVIEW_LENGTH: int = 100
