"""全局 pytest 配置 -- 共享附件 fixture + 临时 SQLite 数据库路径"""

import base64
from pathlib import Path

import pytest

# 1x1 透明 PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@pytest.fixture
def png_data_url() -> str:
    """合法的 PNG data URL"""
    return "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


# JPEG 文件头 + 少量负载（只用于编解码与历史重放，不需要可渲染）
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture
def jpeg_data_url() -> str:
    """合法的 JPEG data URL（与 png_data_url 内容不同）"""
    return "data:image/jpeg;base64," + base64.b64encode(JPEG_BYTES).decode("ascii")
