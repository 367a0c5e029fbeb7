"""
存储状态

ConfigStore 的状态机:

    LOADING --(加载完成)--> CLEAN
    CLEAN   --(任意写操作)--> DIRTY
    DIRTY   --(save 成功)--> CLEAN
    CLEAN/DIRTY --(reload)--> LOADING --> CLEAN

reload 失败时回到进入 LOADING 之前的状态。
"""

from enum import Enum


class StoreState(Enum):
    """存储状态"""
    LOADING = "loading"
    CLEAN = "clean"
    DIRTY = "dirty"
