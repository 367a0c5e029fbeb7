"""
领域异常

配置存储的错误分类。所有异常都继承 ConfigStoreError，
同时继承与之语义对应的内建异常，调用方可以按任意一层捕获。
"""


class ConfigStoreError(Exception):
    """配置存储异常基类"""


class InvalidArgumentError(ConfigStoreError, ValueError):
    """参数非法（名称为空/空白，值为 None）"""


class AlreadyExistsError(ConfigStoreError):
    """目标已存在（新建时文件已存在，或 add 时名称已存在）"""


class NotFoundError(ConfigStoreError, KeyError):
    """目标不存在（打开时文件缺失，或 update 时名称缺失）"""

    def __str__(self) -> str:
        # KeyError 默认会给消息加引号
        return str(self.args[0]) if self.args else ""


class ReadError(ConfigStoreError, OSError):
    """文件读取失败"""


class InvalidFormatError(ConfigStoreError):
    """XML 格式错误或根节点不匹配"""


class SaveError(ConfigStoreError, OSError):
    """写盘失败，脏标记保持不变"""
