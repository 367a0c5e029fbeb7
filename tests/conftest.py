"""
Pytest 配置文件

提供测试所需的 fixtures 和共享配置。
"""

import sys
from pathlib import Path

import pytest

# 确保项目根目录在 Python 路径中
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# ============================================================
# XML Fixtures
# ============================================================

SAMPLE_XML = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<configurations>\n'
    '  <setting name="theme" value="dark" />\n'
    '  <setting name="language" value="zh-CN" />\n'
    '  <setting name="timeout" value="30" />\n'
    '</configurations>\n'
)

MALFORMED_ENTRIES_XML = (
    '<configurations>\n'
    '  <setting name="ok" value="1" />\n'
    '  <setting name="no_value" />\n'
    '  <setting value="no_name" />\n'
    '  <setting name="" value="empty_name" />\n'
    '  <comment name="other_tag" value="x" />\n'
    '  <setting name="also_ok" value="" />\n'
    '</configurations>\n'
)


@pytest.fixture
def sample_xml():
    """标准配置文件内容"""
    return SAMPLE_XML


@pytest.fixture
def malformed_entries_xml():
    """包含残缺配置项的文件内容"""
    return MALFORMED_ENTRIES_XML


# ============================================================
# File System Fixtures
# ============================================================

@pytest.fixture
def store_path():
    """内存文件系统中的配置文件路径"""
    return "/virtual/settings.xml"


@pytest.fixture
def memory_fs():
    """空的内存文件系统"""
    from confstore.infrastructure.file_system import InMemoryFileSystem
    return InMemoryFileSystem()


@pytest.fixture
def populated_fs(memory_fs, store_path, sample_xml):
    """已写入标准配置文件的内存文件系统"""
    memory_fs.files[store_path] = sample_xml.encode('utf-8')
    return memory_fs


@pytest.fixture
def sample_store(populated_fs, store_path):
    """基于内存文件系统加载的 ConfigStore"""
    from confstore import ConfigStore
    return ConfigStore(store_path, file_system=populated_fs)


@pytest.fixture
def disk_store(tmp_path):
    """基于真实磁盘新建的 ConfigStore"""
    from confstore import ConfigStore
    return ConfigStore(str(tmp_path / "settings.xml"), create_new=True)


# ============================================================
# Test Utilities
# ============================================================

@pytest.fixture
def capture_logs(capsys):
    """捕获日志输出"""
    def _capture():
        captured = capsys.readouterr()
        return captured.out
    return _capture
