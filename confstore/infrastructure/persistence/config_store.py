"""
配置持久化适配器 - 基础设施层

ConfigStore 在内存中维护 name -> value 映射，并以 XML 文档形式持久化。
所有读写、保存和重新加载都在同一把实例锁内执行，
映射与文档在任何线程看来都保持一致。

用法:
    store = open_store("app.config.xml", create_new=True)
    store.add("theme", "dark")
    store["language"] = "zh-CN"
    store.save()

已知限制: 所有操作都是同步的，磁盘 I/O 卡住时调用线程会一直阻塞；
不提供跨进程文件锁，多个进程写同一路径时以最后一次 save 为准。
"""
import os
import re
import threading
from enum import Enum
from typing import Dict, Iterator, List, Optional

from confstore.config import StoreSettings, get_settings
from confstore.domain.entities import ConfigEntry, StoreState
from confstore.domain.errors import (
    AlreadyExistsError,
    ConfigStoreError,
    InvalidArgumentError,
    NotFoundError,
    ReadError,
    SaveError,
)
from confstore.domain.interfaces import IFileSystem
from confstore.infrastructure.file_system import LocalFileSystem
from confstore.infrastructure.persistence.xml_document import ConfigDocument
from confstore.utils.logger import LogCallback, get_logger


# XML 1.0 不允许出现的字符
_ILLEGAL_XML_CHARS = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


def _check_name(name) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError("name must be a non-empty string")
    if _ILLEGAL_XML_CHARS.search(name):
        raise InvalidArgumentError("name contains characters not allowed in XML")


def _check_value(value) -> None:
    if value is None:
        raise InvalidArgumentError("value must not be None")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"value must be a string, got {type(value).__name__}")
    if _ILLEGAL_XML_CHARS.search(value):
        raise InvalidArgumentError("value contains characters not allowed in XML")


class _WriteOp(Enum):
    """写操作类型"""
    ADD = 1
    UPDATE = 2
    ADD_OR_UPDATE = 3


class ConfigStore:
    """
    XML 配置存储

    Attributes:
        full_path: 配置文件绝对路径（构造后不可变）
        is_changed: 是否有未保存的修改
        state: 当前状态，见 StoreState
    """

    def __init__(
        self,
        path: str,
        create_new: bool = False,
        *,
        file_system: Optional[IFileSystem] = None,
        settings: Optional[StoreSettings] = None,
        log_callback: Optional[LogCallback] = None,
    ):
        """
        打开或新建配置文件

        Args:
            path: 配置文件路径（会被规范化为绝对路径）
            create_new: True 新建文件（已存在则报错），False 加载已有文件
            file_system: 文件系统实现，默认直接访问本地磁盘
            settings: 存储配置，默认使用全局配置
            log_callback: 日志回调，签名: (message, level) -> None

        Raises:
            InvalidArgumentError: 路径为空
            AlreadyExistsError: create_new=True 但文件已存在
            NotFoundError: create_new=False 但文件不存在
            ReadError: 文件读取失败
            InvalidFormatError: XML 不合法或根节点不匹配
            SaveError: 新建文件写盘失败
        """
        if isinstance(path, os.PathLike):
            path = os.fspath(path)
        if not isinstance(path, str) or not path.strip():
            raise InvalidArgumentError("path must be a non-empty string")

        self._settings = settings or get_settings()
        self._fs = file_system or LocalFileSystem(atomic=self._settings.atomic_save)
        self._full_path = os.path.abspath(path)
        self._logger = get_logger(__name__, log_callback)
        self._lock = threading.RLock()

        self._state = StoreState.LOADING
        self._document: Optional[ConfigDocument] = None
        self._mapping: Dict[str, str] = {}

        with self._lock:
            if create_new:
                if self._fs.exists(self._full_path):
                    raise AlreadyExistsError(f"file already exists: {self._full_path}")
                document = ConfigDocument.create_empty()
                self._write_document(document)
                self._logger.info(f"created configuration file {self._full_path}")
            else:
                document = self._read_document()
                self._logger.info(f"opened configuration file {self._full_path}")
            self._apply_document(document)

    # ============================================================
    # 属性
    # ============================================================

    @property
    def full_path(self) -> str:
        return self._full_path

    @property
    def is_changed(self) -> bool:
        return self._state is StoreState.DIRTY

    @property
    def state(self) -> StoreState:
        return self._state

    # ============================================================
    # 读取
    # ============================================================

    def get(self, name: str) -> Optional[str]:
        """
        获取配置值

        Returns:
            配置值，不存在时返回 None
        """
        _check_name(name)
        with self._lock:
            return self._mapping.get(name)

    def contains(self, name: str) -> bool:
        """是否存在指定名称的配置"""
        _check_name(name)
        with self._lock:
            return name in self._mapping

    def to_snapshot(self) -> Dict[str, str]:
        """返回全部配置的独立副本"""
        with self._lock:
            return dict(self._mapping)

    def entries(self) -> List[ConfigEntry]:
        """返回全部配置项"""
        return [ConfigEntry(name, value) for name, value in self.to_snapshot().items()]

    # ============================================================
    # 写入
    # ============================================================

    def add(self, name: str, value: str) -> None:
        """
        新增配置

        Raises:
            AlreadyExistsError: 名称已存在
        """
        self._write_entry(name, value, _WriteOp.ADD)

    def update(self, name: str, value: str) -> None:
        """
        修改配置

        Raises:
            NotFoundError: 名称不存在
        """
        self._write_entry(name, value, _WriteOp.UPDATE)

    def add_or_update(self, name: str, value: str) -> None:
        """存在则修改，否则新增"""
        self._write_entry(name, value, _WriteOp.ADD_OR_UPDATE)

    def remove(self, name: str) -> None:
        """删除配置，名称不存在时不做任何事"""
        _check_name(name)
        with self._lock:
            if name not in self._mapping:
                return
            self._document.remove(name)
            del self._mapping[name]
            self._state = StoreState.DIRTY

    def _write_entry(self, name: str, value: str, op: _WriteOp) -> None:
        _check_name(name)
        _check_value(value)
        with self._lock:
            exists = name in self._mapping
            if op is _WriteOp.ADD and exists:
                raise AlreadyExistsError(f"configuration already exists: {name}")
            if op is _WriteOp.UPDATE and not exists:
                raise NotFoundError(f"configuration not found: {name}")

            if exists:
                self._document.set_value(name, value)
            else:
                self._document.append(name, value)
            self._mapping[name] = value
            self._state = StoreState.DIRTY

    # ============================================================
    # 持久化
    # ============================================================

    def save(self) -> bool:
        """
        保存修改到文件

        没有修改时不写盘。

        Returns:
            是否发生了写盘

        Raises:
            SaveError: 写盘失败（修改仍然保留，可以重试）
        """
        with self._lock:
            if self._state is not StoreState.DIRTY:
                self._logger.debug(f"no changes to save for {self._full_path}")
                return False
            self._write_document(self._document)
            self._state = StoreState.CLEAN
            self._logger.success(f"saved {len(self._mapping)} settings to {self._full_path}")
            return True

    def reload(self) -> None:
        """
        从文件重新加载，丢弃所有未保存的修改

        失败时保留之前的内存状态并抛出异常。
        同一线程在加载过程中再次调用 reload 会被忽略。

        Raises:
            NotFoundError: 文件已不存在
            ReadError: 文件读取失败
            InvalidFormatError: XML 不合法或根节点不匹配
        """
        with self._lock:
            if self._state is StoreState.LOADING:
                self._logger.warning(f"reload of {self._full_path} ignored: already loading")
                return

            previous = self._state
            self._state = StoreState.LOADING
            self._logger.info(f"reloading configuration file {self._full_path}")
            try:
                document = self._read_document()
            except ConfigStoreError as e:
                self._state = previous
                self._logger.warning(f"reload failed, keeping current settings: {e}")
                raise
            except BaseException:
                # 文件系统抛出的其他异常也不能让存储停留在 LOADING
                self._state = previous
                raise
            self._apply_document(document)

    # ============================================================
    # 内部实现
    # ============================================================

    def _read_document(self) -> ConfigDocument:
        if not self._fs.exists(self._full_path):
            raise NotFoundError(f"configuration file not found: {self._full_path}")
        try:
            with self._fs.open_read(self._full_path) as stream:
                return ConfigDocument.parse(stream)
        except FileNotFoundError as e:
            raise NotFoundError(f"configuration file not found: {self._full_path}") from e
        except OSError as e:
            raise ReadError(f"failed to read {self._full_path}: {e}") from e

    def _write_document(self, document: ConfigDocument) -> None:
        try:
            data = document.to_bytes(
                encoding=self._settings.encoding,
                indent=self._settings.indent,
                xml_declaration=self._settings.xml_declaration,
            )
            self._fs.write_all(self._full_path, data)
        except (OSError, LookupError) as e:
            self._logger.error(f"failed to write {self._full_path}: {e}")
            raise SaveError(f"failed to write {self._full_path}: {e}") from e

    def _apply_document(self, document: ConfigDocument) -> None:
        mapping = document.to_mapping()
        skipped = document.skipped_count()
        if skipped:
            self._logger.debug(f"skipped {skipped} malformed setting entries in {self._full_path}")
        self._document = document
        self._mapping = mapping
        self._state = StoreState.CLEAN
        self._logger.debug(f"loaded {len(mapping)} settings from {self._full_path}")

    # ============================================================
    # 容器协议
    # ============================================================

    def __getitem__(self, name: str) -> Optional[str]:
        return self.get(name)

    def __setitem__(self, name: str, value: str) -> None:
        self.add_or_update(name, value)

    def __delitem__(self, name: str) -> None:
        self.remove(name)

    def __contains__(self, name) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._mapping)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.to_snapshot()))

    def __repr__(self) -> str:
        return f"ConfigStore(full_path={self._full_path!r}, state={self._state.value})"


def open_store(path: str, create_new: bool = False, **kwargs) -> ConfigStore:
    """
    打开或新建配置存储

    Args:
        path: 配置文件路径
        create_new: True 新建文件，False 加载已有文件
        **kwargs: 传给 ConfigStore 的其它参数（file_system, settings, log_callback）
    """
    return ConfigStore(path, create_new, **kwargs)
